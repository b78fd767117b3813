"""Pytest fixtures for quote-gateway tests."""

import json
import tempfile
from pathlib import Path
from typing import Any, Callable, Optional

import httpx
import pytest

from quote_gateway.carrier.base import BaseCarrierGateway
from quote_gateway.carrier.freterapido import FreteRapidoGateway
from quote_gateway.models.offer import NormalizedOffer
from quote_gateway.models.raw import RawCarrierResponse
from quote_gateway.models.request import QuoteRequest
from quote_gateway.store import QuoteStore


class FakeGateway(BaseCarrierGateway):
    """Gateway returning a canned payload and recording each call."""

    source_id = "fake"

    def __init__(self, payload: Optional[dict] = None, error: Optional[Exception] = None):
        self.payload = payload or {"dispatchers": []}
        self.error = error
        self.calls: list[tuple[QuoteRequest, str, str]] = []
        self.timeouts: list[Optional[float]] = []
        self.closed = False

    def quote(self, request, auth_token, platform_code, *, timeout=None) -> RawCarrierResponse:
        self.require_credentials(auth_token, platform_code)
        self.calls.append((request, auth_token, platform_code))
        self.timeouts.append(timeout)
        if self.error is not None:
            raise self.error
        return RawCarrierResponse(data=self.payload)

    def close(self) -> None:
        self.closed = True


def make_offer(carrier: str = "Correios", price: float = 10.0, service: str = "PAC", deadline: str = "5") -> NormalizedOffer:
    return NormalizedOffer(carrier=carrier, service=service, deadline_days=deadline, price=price)


def mock_client(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.Client:
    """httpx client whose requests are answered by handler."""
    return httpx.Client(transport=httpx.MockTransport(handler))


@pytest.fixture
def sample_quote_request_dict() -> dict[str, Any]:
    """Quote request body: one dispatcher, one 5 kg volume."""
    return {
        "shipper": {
            "registered_number": "25438296000158",
            "token": "shipper-token",
            "platform_code": "5AKVkHqCn",
        },
        "recipient": {
            "type": 0,
            "registered_number": "",
            "state_inscription": "",
            "country": "BRA",
            "zipcode": 29161376,
        },
        "dispatchers": [
            {
                "registered_number": "25438296000158",
                "zipcode": 29161376,
                "total_price": 10.0,
                "volumes": [
                    {
                        "amount": 1,
                        "amount_volumes": 1,
                        "category": "7",
                        "sku": "abc-teste-123",
                        "tag": "",
                        "description": "Caixa",
                        "height": 0.2,
                        "width": 0.2,
                        "length": 0.2,
                        "unitary_price": 10.0,
                        "unitary_weight": 5.0,
                        "consolidate": False,
                        "overlaid": False,
                        "rotate": False,
                    }
                ],
            }
        ],
        "channel": "",
        "filter": 0,
        "limit": 0,
        "identification": "",
        "reverse": False,
        "simulation_type": [0],
        "returns": {"composition": False, "volumes": False, "applied_rules": False},
    }


@pytest.fixture
def quote_request(sample_quote_request_dict: dict[str, Any]) -> QuoteRequest:
    return QuoteRequest.model_validate(sample_quote_request_dict)


@pytest.fixture
def sample_carrier_payload() -> dict[str, Any]:
    """Carrier response with one dispatcher and two offers."""
    return {
        "dispatchers": [
            {
                "id": "6481f1d1c3a4e50c5d3b0a11",
                "request_id": "6481f1d1c3a4e50c5d3b0a10",
                "registered_number_shipper": "25438296000158",
                "zipcode_origin": 29161376,
                "offers": [
                    {
                        "offer": 1,
                        "simulation_type": 0,
                        "carrier": {
                            "name": "EXPRESSO FR",
                            "registered_number": "31911335000101",
                            "reference": 281,
                        },
                        "service": "Rodoviário",
                        "delivery_time": {"days": 3, "estimated_date": "2026-10-22"},
                        "cost_price": 15.5,
                        "final_price": 17.0,
                    },
                    {
                        "offer": 2,
                        "simulation_type": 0,
                        "carrier": {"name": "Correios", "reference": 281},
                        "service": "SEDEX",
                        "delivery_time": {"days": 1, "estimated_date": "2026-10-20"},
                        "cost_price": 19.0,
                        "final_price": 20.99,
                    },
                ],
            }
        ]
    }


@pytest.fixture
def raw_response(sample_carrier_payload: dict[str, Any]) -> RawCarrierResponse:
    return RawCarrierResponse(data=sample_carrier_payload)


@pytest.fixture
def temp_db() -> Path:
    """Temporary database path for isolated tests."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        path = Path(f.name)
    yield path
    path.unlink(missing_ok=True)


@pytest.fixture
def store(temp_db: Path) -> QuoteStore:
    """QuoteStore with temporary database."""
    return QuoteStore(temp_db)


@pytest.fixture
def fake_gateway(sample_carrier_payload: dict[str, Any]) -> FakeGateway:
    return FakeGateway(payload=sample_carrier_payload)


@pytest.fixture
def carrier_api(sample_carrier_payload: dict[str, Any]):
    """
    FreteRapidoGateway backed by a mock transport returning the sample payload.
    Yields (gateway, captured_requests).
    """
    captured: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return httpx.Response(200, content=json.dumps(sample_carrier_payload).encode())

    gateway = FreteRapidoGateway(client=mock_client(handler))
    yield gateway, captured
    gateway.close()
