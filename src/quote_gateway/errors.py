"""Error taxonomy shared by the gateway client, store and HTTP layer."""

from typing import Optional


class GatewayError(Exception):
    """Base class for all quote-gateway failures."""


class ValidationError(GatewayError):
    """Missing or invalid caller input (header, body field, credential)."""


class UpstreamError(GatewayError):
    """The carrier API answered with a non-2xx status."""

    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(f"Carrier API returned status {status_code}: {body}")


class TransportError(GatewayError):
    """The carrier API could not be reached (DNS, connect, TLS, timeout)."""


class DecodeError(GatewayError):
    """The carrier API response body is not a JSON object."""


class StoreError(GatewayError):
    """Persistence failure in the quote store."""

    def __init__(self, message: str, inserted: Optional[int] = None):
        self.inserted = inserted
        super().__init__(message)
