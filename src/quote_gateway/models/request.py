"""Inbound quote request, serialized unchanged as the carrier API wire body."""

from pydantic import BaseModel, Field, field_validator


class Shipper(BaseModel):
    """Shipper identity as registered with the carrier platform."""

    registered_number: str = ""
    token: str = ""
    platform_code: str = ""


class Recipient(BaseModel):
    """Recipient identity; zipcode is required and must be non-zero."""

    type: int = 0
    registered_number: str = ""
    state_inscription: str = ""
    country: str = ""
    zipcode: int = 0


class Volume(BaseModel):
    """One physical volume to be shipped."""

    amount: int = 0
    amount_volumes: int = 0
    category: str = ""
    sku: str = ""
    tag: str = ""
    description: str = ""
    height: float = 0.0
    width: float = 0.0
    length: float = 0.0
    unitary_price: float = 0.0
    unitary_weight: float = 0.0
    consolidate: bool = False
    overlaid: bool = False
    rotate: bool = False


class Dispatcher(BaseModel):
    """Shipment origin grouping one or more volumes."""

    registered_number: str = ""
    zipcode: int = 0
    total_price: float = 0.0
    volumes: list[Volume] = Field(default_factory=list)


class Returns(BaseModel):
    """Optional sections the carrier API should include in its answer."""

    composition: bool = False
    volumes: bool = False
    applied_rules: bool = False


class QuoteRequest(BaseModel):
    """Quote simulation request accepted by POST /quote."""

    shipper: Shipper = Field(default_factory=Shipper)
    recipient: Recipient = Field(default_factory=Recipient, validate_default=True)
    dispatchers: list[Dispatcher] = Field(default_factory=list, validate_default=True)
    channel: str = ""
    filter: int = 0
    limit: int = 0
    identification: str = ""
    reverse: bool = False
    simulation_type: list[int] = Field(default_factory=list)
    returns: Returns = Field(default_factory=Returns)

    @field_validator("recipient")
    @classmethod
    def _require_zipcode(cls, recipient: Recipient) -> Recipient:
        if not recipient.zipcode:
            raise ValueError("recipient.zipcode cannot be empty")
        return recipient

    @field_validator("dispatchers")
    @classmethod
    def _require_dispatcher(cls, dispatchers: list[Dispatcher]) -> list[Dispatcher]:
        if not dispatchers:
            raise ValueError("at least one dispatcher is required")
        return dispatchers

    def to_wire(self) -> dict:
        """Body sent to the carrier quote/simulate endpoint."""
        return self.model_dump(mode="json")
