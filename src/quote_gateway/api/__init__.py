"""HTTP surface of the quote gateway."""

from quote_gateway.api.app import create_app

__all__ = ["create_app"]
