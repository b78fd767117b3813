"""Gateway settings loaded from YAML with environment overrides."""

import os
from pathlib import Path
from typing import Optional

try:
    import yaml
except ModuleNotFoundError as e:
    raise ModuleNotFoundError(
        "PyYAML is required for config loading. Run: poetry install"
    ) from e
from pydantic import BaseModel, Field

ENV_PREFIX = "QUOTE_GATEWAY_"
CONFIG_ENV = ENV_PREFIX + "CONFIG"


class Settings(BaseModel):
    """Runtime settings for the carrier client, store and HTTP server."""

    api_url: str = Field(
        default="https://sp.freterapido.com/api/v3/quote/simulate",
        description="Carrier quote/simulate endpoint",
    )
    request_timeout: float = Field(default=30.0, gt=0, description="Carrier call timeout (seconds)")
    verify_tls: bool = True
    db_path: Path = Path("quote_gateway.db")
    store_timeout: float = Field(default=5.0, gt=0, description="SQLite busy timeout (seconds)")
    price_precision: int = Field(default=2, ge=0, description="Decimals for prices in /metrics")
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = 8080

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Settings":
        """Load settings from YAML. Supports a top-level `gateway:` section or flat keys."""
        data = yaml.safe_load(Path(path).read_text()) or {}
        section = data.get("gateway", data)
        return cls.model_validate(section or {})

    @classmethod
    def load(cls, path: Optional[str | Path] = None, environ: Optional[dict] = None) -> "Settings":
        """
        Resolve settings: YAML file (argument or QUOTE_GATEWAY_CONFIG), then
        QUOTE_GATEWAY_<FIELD> environment variables on top.
        """
        env = os.environ if environ is None else environ
        path = path or env.get(CONFIG_ENV)
        base = cls.from_yaml(path) if path else cls()

        overrides: dict = {}
        for name in cls.model_fields:
            value = env.get(ENV_PREFIX + name.upper())
            if value is not None and value.strip():
                overrides[name] = value.strip()
        if not overrides:
            return base
        return cls.model_validate({**base.model_dump(), **overrides})
