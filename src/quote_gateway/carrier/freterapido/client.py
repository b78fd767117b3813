"""Frete Rápido gateway: POST quote/simulate with pass-through credentials."""

import json
import logging
from typing import Optional

import httpx

from quote_gateway.carrier.base import BaseCarrierGateway
from quote_gateway.errors import DecodeError, TransportError, UpstreamError
from quote_gateway.models.raw import RawCarrierResponse
from quote_gateway.models.request import QuoteRequest

logger = logging.getLogger(__name__)


class FreteRapidoGateway(BaseCarrierGateway):
    """
    Client for the Frete Rápido quote simulation API.
    One attempt per call; retrying is left to the caller.
    """

    source_id = "freterapido"

    API_URL = "https://sp.freterapido.com/api/v3/quote/simulate"
    DEFAULT_TIMEOUT = 30.0

    DEFAULT_HEADERS = {
        "User-Agent": "quote-gateway/0.1",
        "Accept": "application/json",
    }

    def __init__(
        self,
        api_url: Optional[str] = None,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        verify_tls: bool = True,
        client: Optional[httpx.Client] = None,
    ):
        """
        Args:
            api_url: Override the quote/simulate endpoint
            timeout: Default per-request timeout in seconds
            verify_tls: Verify the server certificate
            client: Optional httpx client
        """
        self._api_url = api_url or self.API_URL
        self._timeout = timeout
        self._client = client or httpx.Client(
            timeout=timeout,
            verify=verify_tls,
            headers=self.DEFAULT_HEADERS,
        )

    @property
    def api_url(self) -> str:
        return self._api_url

    def _post(self, body: dict, headers: dict[str, str], timeout: float) -> httpx.Response:
        try:
            return self._client.post(self._api_url, json=body, headers=headers, timeout=timeout)
        except httpx.RequestError as e:
            logger.warning("Carrier request to %s failed: %s", self._api_url, e)
            raise TransportError(f"Carrier request failed: {e}") from e

    def quote(
        self,
        request: QuoteRequest,
        auth_token: str,
        platform_code: str,
        *,
        timeout: Optional[float] = None,
    ) -> RawCarrierResponse:
        """
        POST the request and classify the outcome.
        Raises UpstreamError (non-2xx), TransportError or DecodeError.
        """
        self.require_credentials(auth_token, platform_code)
        headers = {
            "Content-Type": "application/json",
            "Authorization": auth_token,
            "X-Platform-Code": platform_code,
        }
        resp = self._post(
            request.to_wire(),
            headers,
            timeout if timeout is not None else self._timeout,
        )

        if not resp.is_success:
            logger.warning("Carrier API returned %d", resp.status_code)
            raise UpstreamError(resp.status_code, resp.text)

        try:
            payload = resp.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise DecodeError(f"Could not decode carrier response: {e}") from e
        if not isinstance(payload, dict):
            raise DecodeError(
                f"Carrier response must be a JSON object, got {type(payload).__name__}"
            )
        return RawCarrierResponse(data=payload)

    def close(self) -> None:
        self._client.close()
