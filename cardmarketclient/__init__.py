from .auth import CardmarketAuth
from .client import CardmarketClient
from .errors import ConfigError, EncodingError, SigningError
from .signature import Credentials, OAuthParameter, SignatureEngine, SignedRequest

__all__ = [
    "CardmarketAuth",
    "CardmarketClient",
    "ConfigError",
    "Credentials",
    "EncodingError",
    "OAuthParameter",
    "SignatureEngine",
    "SignedRequest",
    "SigningError",
]
