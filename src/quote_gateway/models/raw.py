"""Raw carrier response representation before normalization."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class RawCarrierResponse(BaseModel):
    """
    Carrier-defined response body, kept as decoded JSON.
    The shape is owned by the carrier; any field may be missing or mistyped,
    so nothing is validated here beyond being a JSON object.
    """

    model_config = ConfigDict(extra="allow")

    data: dict[str, Any] = Field(default_factory=dict)

    @property
    def dispatchers(self) -> list[Any]:
        """Dispatcher entries, or an empty list when absent or not a list."""
        value = self.data.get("dispatchers")
        return value if isinstance(value, list) else []
