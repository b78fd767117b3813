"""Abstract base class for carrier quoting gateways."""

from abc import ABC, abstractmethod
from typing import Optional

from quote_gateway.carrier.normalizer import normalize_offers
from quote_gateway.errors import ValidationError
from quote_gateway.models.offer import NormalizedOffer
from quote_gateway.models.raw import RawCarrierResponse
from quote_gateway.models.request import QuoteRequest


class BaseCarrierGateway(ABC):
    """
    Standard interface for carrier rate APIs.
    Gateways implement quote; normalization is shared across carriers.
    """

    source_id: str = ""

    @abstractmethod
    def quote(
        self,
        request: QuoteRequest,
        auth_token: str,
        platform_code: str,
        *,
        timeout: Optional[float] = None,
    ) -> RawCarrierResponse:
        """
        Issue one quote request; returns the raw carrier response.
        """
        pass

    def normalize(self, raw: RawCarrierResponse) -> list[NormalizedOffer]:
        """
        Convert raw response to a flat list of NormalizedOffer.
        """
        return normalize_offers(raw)

    def close(self) -> None:
        """Release network resources; gateways without any need not override."""

    def fetch_offers(
        self,
        request: QuoteRequest,
        auth_token: str,
        platform_code: str,
        *,
        timeout: Optional[float] = None,
    ) -> list[NormalizedOffer]:
        """Quote then normalize."""
        raw = self.quote(request, auth_token, platform_code, timeout=timeout)
        return self.normalize(raw)

    @staticmethod
    def require_credentials(auth_token: Optional[str], platform_code: Optional[str]) -> None:
        """Reject missing pass-through credentials before any network activity."""
        if not auth_token or not auth_token.strip():
            raise ValidationError("Authorization header is required")
        if not platform_code or not platform_code.strip():
            raise ValidationError("X-Platform-Code header is required")
