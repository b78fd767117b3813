"""Pipeline orchestration: quote → normalize → persist, and store → metrics."""

import logging
from typing import Optional

from quote_gateway.carrier.base import BaseCarrierGateway
from quote_gateway.carrier.freterapido import FreteRapidoGateway
from quote_gateway.config import Settings
from quote_gateway.metrics import summarize
from quote_gateway.models.offer import MetricsSummary, NormalizedOffer
from quote_gateway.models.request import QuoteRequest
from quote_gateway.store import QuoteStore

logger = logging.getLogger(__name__)


class QuoteService:
    """
    Owns one carrier gateway and one quote store.
    Stateless apart from those collaborators; safe to share across requests.
    """

    def __init__(self, gateway: BaseCarrierGateway, store: QuoteStore):
        self._gateway = gateway
        self._store = store

    @property
    def gateway(self) -> BaseCarrierGateway:
        return self._gateway

    @property
    def store(self) -> QuoteStore:
        return self._store

    def quote(
        self,
        request: QuoteRequest,
        auth_token: str,
        platform_code: str,
        *,
        timeout: Optional[float] = None,
        persist: bool = True,
    ) -> list[NormalizedOffer]:
        """
        Fetch offers from the carrier, store them, and return them.
        A store failure fails the call; rows already written are kept.
        """
        offers = self._gateway.fetch_offers(request, auth_token, platform_code, timeout=timeout)
        if persist and offers:
            inserted = self._store.insert_all(offers)
            logger.info("Stored %d offers from %s", inserted, self._gateway.source_id)
        return offers

    def close(self) -> None:
        self._gateway.close()

    def metrics(self, last_quotes: Optional[int] = None) -> MetricsSummary:
        """Summarize the whole history, or the last N stored offers."""
        return summarize(self._store.read_all(last_quotes))


def build_service(settings: Settings) -> QuoteService:
    """QuoteService wired from Settings."""
    gateway = FreteRapidoGateway(
        settings.api_url,
        timeout=settings.request_timeout,
        verify_tls=settings.verify_tls,
    )
    store = QuoteStore(settings.db_path, timeout=settings.store_timeout)
    return QuoteService(gateway, store)
