"""FastAPI application exposing POST /quote and GET /metrics."""

import logging
import math
from contextlib import asynccontextmanager
from typing import Any, Optional

from fastapi import FastAPI, Header, Query, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from quote_gateway import __version__
from quote_gateway.carrier.base import BaseCarrierGateway
from quote_gateway.config import Settings
from quote_gateway.errors import (
    DecodeError,
    GatewayError,
    StoreError,
    TransportError,
    UpstreamError,
    ValidationError,
)
from quote_gateway.models.offer import QuoteResponse
from quote_gateway.models.request import QuoteRequest
from quote_gateway.pipeline import QuoteService, build_service

logger = logging.getLogger(__name__)

# Upstream non-2xx is reported as 500 rather than 502
_STATUS_BY_ERROR: list[tuple[type[GatewayError], int]] = [
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (UpstreamError, status.HTTP_500_INTERNAL_SERVER_ERROR),
    (TransportError, status.HTTP_500_INTERNAL_SERVER_ERROR),
    (DecodeError, status.HTTP_500_INTERNAL_SERVER_ERROR),
    (StoreError, status.HTTP_500_INTERNAL_SERVER_ERROR),
]


def status_for_error(exc: GatewayError) -> int:
    for error_cls, code in _STATUS_BY_ERROR:
        if isinstance(exc, error_cls):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def parse_last_quotes(value: Optional[str]) -> Optional[int]:
    """Window size from ?last_quotes=; anything but a positive integer means all."""
    if value is None:
        return None
    try:
        n = int(value.strip())
    except ValueError:
        return None
    return n if n > 0 else None


def parse_request_timeout(value: Optional[str], ceiling: float) -> float:
    """
    Carrier call bound from X-Request-Timeout (seconds).
    Absent means the configured ceiling; larger values are capped to it.
    """
    if value is None or not value.strip():
        return ceiling
    try:
        seconds = float(value.strip())
    except ValueError:
        raise ValidationError(f"X-Request-Timeout must be a number of seconds, got {value!r}")
    if not math.isfinite(seconds) or seconds <= 0:
        raise ValidationError(f"X-Request-Timeout must be positive, got {value!r}")
    return min(seconds, ceiling)


def _describe_validation_errors(errors: list[dict[str, Any]]) -> str:
    parts: list[str] = []
    for err in errors:
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        msg = str(err.get("msg") or err.get("type") or "invalid")
        parts.append(f"{loc}: {msg}" if loc else msg)
    return "; ".join(parts) or "Invalid request"


async def _gateway_error_handler(request: Request, exc: GatewayError) -> JSONResponse:
    code = status_for_error(exc)
    if code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    else:
        logger.info("%s %s rejected: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=code, content={"detail": str(exc)})


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = _describe_validation_errors(list(exc.errors()))
    logger.info("%s %s rejected: %s", request.method, request.url.path, message)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": message})


def create_app(
    service: Optional[QuoteService] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    """
    Build the HTTP app around one QuoteService.
    Without an explicit service, one is wired from settings (or Settings.load())
    and closed when the app shuts down. A caller-supplied service is left open.
    """
    settings = settings or Settings.load()
    owns_service = service is None
    service = service or build_service(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        if owns_service:
            logger.info("Closing carrier client")
            app.state.service.close()

    app = FastAPI(
        title="Quote Gateway",
        description="Carrier quote simulation with normalized offers and price metrics",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.service = service
    app.state.settings = settings

    app.add_exception_handler(GatewayError, _gateway_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)

    @app.post("/quote")
    def post_quote(
        quote_request: QuoteRequest,
        request: Request,
        authorization: Optional[str] = Header(default=None),
        x_platform_code: Optional[str] = Header(default=None),
        x_request_timeout: Optional[str] = Header(default=None),
    ) -> dict:
        BaseCarrierGateway.require_credentials(authorization, x_platform_code)
        timeout = parse_request_timeout(x_request_timeout, request.app.state.settings.request_timeout)
        offers = request.app.state.service.quote(
            quote_request, authorization, x_platform_code, timeout=timeout
        )
        return QuoteResponse(carrier=offers).to_public()

    @app.get("/metrics")
    def get_metrics(
        request: Request,
        last_quotes: Optional[str] = Query(default=None),
    ) -> dict:
        summary = request.app.state.service.metrics(parse_last_quotes(last_quotes))
        precision = request.app.state.settings.price_precision
        return summary.rounded(precision).model_dump(mode="json")

    return app
