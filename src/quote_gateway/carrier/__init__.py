"""Carrier gateway clients and offer normalization."""

from quote_gateway.carrier.base import BaseCarrierGateway
from quote_gateway.carrier.freterapido import FreteRapidoGateway
from quote_gateway.carrier.normalizer import normalize_offer, normalize_offers

__all__ = ["BaseCarrierGateway", "FreteRapidoGateway", "normalize_offer", "normalize_offers"]
