# signature.py
import base64
import hashlib
import hmac
from typing import Callable, Iterable, List, Mapping, NamedTuple, Optional, Tuple, Union
from urllib.parse import parse_qsl, quote, urlsplit

from dlt.common import logger

from .errors import ConfigError, EncodingError

OAUTH_VERSION = "1.0"
SIGNATURE_METHOD = "HMAC-SHA1"
SUPPORTED_METHODS = ("GET", "POST", "PUT", "DELETE")
DEFAULT_PORTS = {"http": 80, "https": 443}

ParamValue = Union[str, int, float]
ExtraParams = Union[Mapping[str, ParamValue], Iterable[Tuple[str, ParamValue]]]


class Credentials(NamedTuple):
    consumer_key: str
    consumer_secret: str
    access_token: str
    access_token_secret: str


class OAuthParameter(NamedTuple):
    name: str
    value: ParamValue


class SignedRequest(NamedTuple):
    """Result of signing one request."""

    parameter_string: str
    base_string: str
    signature: str
    authorization_header: str


def percent_encode(value: ParamValue) -> str:
    """Percent-encode a value with the RFC 3986 unreserved set.

    Letters, digits and ``-._~`` are kept, everything else becomes ``%XX``
    with uppercase hex over the UTF-8 bytes.
    """
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise EncodingError(
            f"Cannot encode value of type {type(value).__name__}: {value!r}"
        )
    try:
        return quote(str(value), safe="")
    except UnicodeEncodeError as e:
        raise EncodingError(f"Cannot encode value {value!r}: {e}") from e


def normalize_parameters(parameters: Iterable[OAuthParameter]) -> str:
    """Build the normalized parameter string.

    Process:
    1. Percent-encode name and value of every parameter
    2. Sort by encoded name, then by encoded value
    3. Join as name=value pairs with "&"
    """
    encoded = [
        (percent_encode(name), percent_encode(value)) for name, value in parameters
    ]
    encoded.sort()
    return "&".join(f"{name}={value}" for name, value in encoded)


def split_url(url: str) -> Tuple[str, List[OAuthParameter]]:
    """Split an absolute URL into its base URI and query parameters."""
    try:
        parts = urlsplit(url)
        scheme = parts.scheme.lower()
        host = parts.hostname
        port = parts.port
    except (TypeError, AttributeError, ValueError) as e:
        raise EncodingError(f"Cannot parse URL {url!r}: {e}") from e

    if scheme not in DEFAULT_PORTS or not host:
        raise EncodingError(f"URL must be absolute http(s): {url!r}")

    if ":" in host:
        host = f"[{host}]"
    if port and port != DEFAULT_PORTS[scheme]:
        host = f"{host}:{port}"

    base_uri = f"{scheme}://{host}{parts.path or '/'}"
    query = [
        OAuthParameter(name, value)
        for name, value in parse_qsl(parts.query, keep_blank_values=True)
    ]
    return base_uri, query


def build_base_string(method: str, base_uri: str, parameter_string: str) -> str:
    """Join method, encoded URI and encoded parameters with "&"."""
    return "&".join(
        [method.upper(), percent_encode(base_uri), percent_encode(parameter_string)]
    )


def build_signing_key(consumer_secret: str, access_token_secret: str) -> str:
    return f"{percent_encode(consumer_secret)}&{percent_encode(access_token_secret)}"


def generate_signature(signing_key: str, base_string: str) -> str:
    """HMAC-SHA1 of the base string, base64 encoded."""
    digest = hmac.new(
        key=signing_key.encode("utf-8"),
        msg=base_string.encode("utf-8"),
        digestmod=hashlib.sha1,
    ).digest()
    return base64.b64encode(digest).decode("ascii")


def render_authorization_header(
    realm: str,
    timestamp: int,
    nonce: str,
    consumer_key: str,
    access_token: str,
    signature: str,
) -> str:
    # Cardmarket compares the field order literally.
    return (
        f'OAuth realm="{realm}", '
        f'oauth_version="{OAUTH_VERSION}", '
        f'oauth_timestamp="{timestamp}", '
        f'oauth_nonce="{nonce}", '
        f'oauth_consumer_key="{consumer_key}", '
        f'oauth_token="{access_token}", '
        f'oauth_signature_method="{SIGNATURE_METHOD}", '
        f'oauth_signature="{signature}"'
    )


def _extra_parameters(extra_params: Optional[ExtraParams]) -> List[OAuthParameter]:
    if not extra_params:
        return []
    items = extra_params.items() if isinstance(extra_params, Mapping) else extra_params
    return [OAuthParameter(name, value) for name, value in items]


class SignatureEngine:
    """Signs Cardmarket requests with OAuth 1.0 HMAC-SHA1.

    The engine only holds the credentials. Nonce and timestamp are passed
    in on every call, so the same inputs always give the same header.
    """

    def __init__(
        self,
        consumer_key: str,
        access_token: str,
        consumer_secret: Optional[str] = "",
        access_token_secret: Optional[str] = "",
        log: Optional[Callable[[str], None]] = None,
    ):
        if not consumer_key:
            raise ConfigError("Consumer key (app token) cannot be empty")
        if not access_token:
            raise ConfigError("Access token cannot be empty")

        self.credentials = Credentials(
            consumer_key=consumer_key,
            consumer_secret=consumer_secret or "",
            access_token=access_token,
            access_token_secret=access_token_secret or "",
        )
        self._log = log or logger.debug

    @classmethod
    def from_credentials(
        cls, credentials: Credentials, log: Optional[Callable[[str], None]] = None
    ) -> "SignatureEngine":
        return cls(
            consumer_key=credentials.consumer_key,
            access_token=credentials.access_token,
            consumer_secret=credentials.consumer_secret,
            access_token_secret=credentials.access_token_secret,
            log=log,
        )

    def oauth_parameters(self, nonce: str, timestamp: int) -> List[OAuthParameter]:
        """The six fixed oauth_* parameters for one request."""
        return [
            OAuthParameter("oauth_consumer_key", self.credentials.consumer_key),
            OAuthParameter("oauth_nonce", nonce),
            OAuthParameter("oauth_signature_method", SIGNATURE_METHOD),
            OAuthParameter("oauth_timestamp", timestamp),
            OAuthParameter("oauth_token", self.credentials.access_token),
            OAuthParameter("oauth_version", OAUTH_VERSION),
        ]

    def build_authorization_header(
        self,
        method: str,
        url: str,
        extra_params: Optional[ExtraParams] = None,
        *,
        nonce: str,
        timestamp: int,
    ) -> SignedRequest:
        """Sign one request.

        Args:
            method: "GET", "POST", "PUT" or "DELETE"
            url: Absolute URL; its query parameters are signed too
            extra_params: Additional parameters to sign (mapping or pairs)
            nonce: Single-use string for this request
            timestamp: Unix time in seconds

        Returns:
            SignedRequest with parameter string, base string, signature
            and the Authorization header value
        """
        http_method = str(method).upper()
        if http_method not in SUPPORTED_METHODS:
            raise EncodingError(f"Unsupported HTTP method: {method!r}")

        base_uri, query_params = split_url(url)

        parameters = (
            self.oauth_parameters(nonce, timestamp)
            + query_params
            + _extra_parameters(extra_params)
        )
        parameter_string = normalize_parameters(parameters)
        base_string = build_base_string(http_method, base_uri, parameter_string)

        signing_key = build_signing_key(
            self.credentials.consumer_secret, self.credentials.access_token_secret
        )
        signature = generate_signature(signing_key, base_string)

        self._log(f"Cardmarket base string: {base_string}")
        self._log(f"Cardmarket signature: {signature}")

        header = render_authorization_header(
            realm=base_uri,
            timestamp=timestamp,
            nonce=nonce,
            consumer_key=self.credentials.consumer_key,
            access_token=self.credentials.access_token,
            signature=signature,
        )

        return SignedRequest(
            parameter_string=parameter_string,
            base_string=base_string,
            signature=signature,
            authorization_header=header,
        )
