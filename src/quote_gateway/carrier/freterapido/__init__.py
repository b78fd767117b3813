"""Frete Rápido quote simulation gateway."""

from quote_gateway.carrier.freterapido.client import FreteRapidoGateway

__all__ = ["FreteRapidoGateway"]
