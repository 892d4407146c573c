"""Exceptions raised while configuring or signing Cardmarket requests."""


class SigningError(Exception):
    """Base class for Cardmarket signing errors."""


class ConfigError(SigningError, ValueError):
    """A required credential is missing or empty."""


class EncodingError(SigningError, ValueError):
    """The request URL, method or a parameter cannot be encoded."""
