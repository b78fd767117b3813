"""Tests for Settings loading."""

from pathlib import Path

import pydantic
import pytest

from quote_gateway.config import Settings


class TestSettings:
    """Tests for Settings defaults, YAML and environment overrides."""

    def test_defaults(self) -> None:
        s = Settings()
        assert s.api_url == "https://sp.freterapido.com/api/v3/quote/simulate"
        assert s.verify_tls is True
        assert s.price_precision == 2
        assert s.db_path == Path("quote_gateway.db")

    def test_from_yaml_nested(self, tmp_path: Path) -> None:
        """gateway: section is read."""
        path = tmp_path / "gateway.yaml"
        path.write_text("gateway:\n  request_timeout: 12\n  verify_tls: false\n  db_path: /tmp/q.db\n")
        s = Settings.from_yaml(path)
        assert s.request_timeout == 12.0
        assert s.verify_tls is False
        assert s.db_path == Path("/tmp/q.db")

    def test_from_yaml_flat(self, tmp_path: Path) -> None:
        path = tmp_path / "gateway.yaml"
        path.write_text("port: 9000\n")
        assert Settings.from_yaml(path).port == 9000

    def test_from_yaml_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert Settings.from_yaml(path) == Settings()

    def test_load_without_file_or_env(self) -> None:
        assert Settings.load(environ={}) == Settings()

    def test_env_overrides_yaml(self, tmp_path: Path) -> None:
        """QUOTE_GATEWAY_<FIELD> wins over the YAML value."""
        path = tmp_path / "gateway.yaml"
        path.write_text("gateway:\n  port: 9000\n  log_level: DEBUG\n")
        s = Settings.load(
            path,
            environ={"QUOTE_GATEWAY_PORT": "9100", "QUOTE_GATEWAY_VERIFY_TLS": "false"},
        )
        assert s.port == 9100
        assert s.verify_tls is False
        assert s.log_level == "DEBUG"

    def test_config_path_from_env(self, tmp_path: Path) -> None:
        path = tmp_path / "gateway.yaml"
        path.write_text("price_precision: 3\n")
        s = Settings.load(environ={"QUOTE_GATEWAY_CONFIG": str(path)})
        assert s.price_precision == 3

    def test_blank_env_value_ignored(self) -> None:
        assert Settings.load(environ={"QUOTE_GATEWAY_PORT": "  "}).port == 8080

    def test_invalid_timeout_rejected(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            Settings(request_timeout=0)
