# client.py
from typing import Callable, Dict, Optional
from urllib.parse import urlencode

import httpx
from dlt.common import logger

from .auth import ACCEPT, CONTENT_TYPE, current_timestamp, generate_nonce
from .signature import SignatureEngine

API_URL = "https://api.cardmarket.com/ws/v2.0"


class CardmarketClient:
    """Signed calls to the Cardmarket API."""

    API_URL = API_URL

    def __init__(
        self,
        app_token: str,
        access_token: str,
        app_secret: Optional[str] = None,
        access_token_secret: Optional[str] = None,
        base_url: str = API_URL,
        debug: bool = False,
        transport: Optional[httpx.BaseTransport] = None,
        nonce_factory: Optional[Callable[[], str]] = None,
        clock: Optional[Callable[[], int]] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.debug = debug
        self.transport = transport
        self.nonce_factory = nonce_factory or generate_nonce
        self.clock = clock or current_timestamp
        self.engine = SignatureEngine(
            consumer_key=app_token,
            access_token=access_token,
            consumer_secret=app_secret,
            access_token_secret=access_token_secret,
            log=self._debug_log,
        )

    def _debug_log(self, msg: str) -> None:
        if self.debug:
            logger.info(msg)
        else:
            logger.debug(msg)

    def build_url(self, api_path: str, params: Optional[dict] = None) -> str:
        url = f"{self.base_url}{api_path}"
        if params:
            url = f"{url}?{urlencode(params)}"
        return url

    def build_headers(self, method: str, url: str) -> Dict[str, str]:
        """
        Build the request headers for one call.

        Args:
            method: HTTP method
            url: Full request URL, query included

        Returns:
            Dict with Authorization, Content-Type and Accept
        """
        signed = self.engine.build_authorization_header(
            method, url, nonce=self.nonce_factory(), timestamp=self.clock()
        )
        self._debug_log(signed.authorization_header)

        return {
            "Content-Type": CONTENT_TYPE,
            "Authorization": signed.authorization_header,
            "Accept": ACCEPT,
        }

    def execute(
        self,
        api_path: str,
        params: Optional[dict] = None,
        method: str = "GET",
        data: Optional[str] = None,
    ) -> httpx.Response:
        """
        Call the Cardmarket API.

        Args:
            api_path: API path (e.g. "/account")
            params: Query parameters, signed with the request
            method: "GET", "POST", "PUT" or "DELETE"
            data: XML request body

        Returns:
            The raw httpx response
        """
        url = self.build_url(api_path, params)
        self._debug_log(f"Requesting Cardmarket {method.upper()} {url}")
        headers = self.build_headers(method, url)

        with httpx.Client(transport=self.transport, timeout=30) as client:
            response = client.request(
                method.upper(),
                url,
                headers=headers,
                content=data,
                follow_redirects=True,
            )

        self._debug_log(f"Cardmarket response: {response.status_code}")
        return response

    def get_expansion_singles(self, expansion_id: int = 1469) -> httpx.Response:
        """Fetch the single cards of one expansion."""
        return self.execute(f"/expansions/{expansion_id}/singles")
