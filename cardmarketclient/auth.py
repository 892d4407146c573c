"""Custom DLT Authentication for Cardmarket API with OAuth 1.0 HMAC-SHA1 signature."""

import secrets
from typing import Callable, Optional

from dlt.common import logger
from dlt.common.configuration.specs import configspec
from dlt.common.pendulum import pendulum
from dlt.sources.helpers.rest_client.auth import AuthConfigBase
from requests import PreparedRequest

from .signature import SignatureEngine

CONTENT_TYPE = "application/xml"
ACCEPT = "application/json"


def generate_nonce() -> str:
    """Random single-use nonce (32 hex characters)."""
    return secrets.token_hex(16)


def current_timestamp() -> int:
    """Current Unix timestamp in seconds."""
    return pendulum.now().int_timestamp


@configspec
class CardmarketAuth(AuthConfigBase):
    """Custom authentication for Cardmarket API with OAuth 1.0 signature.

    Cardmarket requires an Authorization header with:
    - realm: The requested URL without query
    - oauth_consumer_key: App token
    - oauth_token: Access token
    - oauth_nonce: Unique string per request
    - oauth_timestamp: Current Unix timestamp
    - oauth_signature: HMAC-SHA1 of the base string, keyed with
      app secret & access token secret

    Query parameters of the request URL are part of the signature.
    """

    def __init__(
        self,
        app_token: str,
        access_token: str,
        app_secret: Optional[str] = None,
        access_token_secret: Optional[str] = None,
        nonce_factory: Optional[Callable[[], str]] = None,
        clock: Optional[Callable[[], int]] = None,
    ):
        super().__init__()
        self.engine = SignatureEngine(
            consumer_key=app_token,
            access_token=access_token,
            consumer_secret=app_secret,
            access_token_secret=access_token_secret,
        )
        self.nonce_factory = nonce_factory or generate_nonce
        self.clock = clock or current_timestamp

    def __call__(self, request: PreparedRequest) -> PreparedRequest:
        """Add the Cardmarket Authorization header to the request."""
        # One nonce/timestamp pair is used for both signature and header
        nonce = self.nonce_factory()
        timestamp = self.clock()

        signed = self.engine.build_authorization_header(
            request.method, request.url, nonce=nonce, timestamp=timestamp
        )
        logger.debug(f"Signed Cardmarket {request.method} request to {request.url}")

        request.headers["Authorization"] = signed.authorization_header
        request.headers.setdefault("Content-Type", CONTENT_TYPE)
        request.headers.setdefault("Accept", ACCEPT)

        return request
