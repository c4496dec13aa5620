# tests/test_config.py
"""Tests for FluentSchemaConfig — Pydantic Settings single source of truth."""

import pytest


@pytest.fixture(autouse=True)
def _fresh_config():
    from fluentschema.config import get_config

    get_config.cache_clear()
    yield
    get_config.cache_clear()


class TestFluentSchemaConfig:
    """Test FluentSchemaConfig defaults and overrides."""

    def test_default_values(self, monkeypatch):
        from fluentschema.config import FluentSchemaConfig

        for var in ("SCHEMA_URI", "ROOT_TYPE", "DEFAULT_PROPERTY_TYPE", "LOG_LEVEL", "LOG_DIR"):
            monkeypatch.delenv(f"FLUENTSCHEMA_{var}", raising=False)
        cfg = FluentSchemaConfig()
        assert cfg.schema_uri == "http://json-schema.org/draft-07/schema#"
        assert cfg.root_type == "object"
        assert cfg.default_property_type == "string"
        assert cfg.log_level == "WARNING"
        assert cfg.log_dir is None

    def test_env_override(self, monkeypatch, tmp_path):
        from fluentschema.config import FluentSchemaConfig

        monkeypatch.setenv("FLUENTSCHEMA_DEFAULT_PROPERTY_TYPE", "number")
        monkeypatch.setenv("FLUENTSCHEMA_LOG_DIR", str(tmp_path))
        cfg = FluentSchemaConfig()
        assert cfg.default_property_type == "number"
        assert cfg.log_dir == tmp_path

    def test_invalid_type_rejected(self, monkeypatch):
        from pydantic import ValidationError

        from fluentschema.config import FluentSchemaConfig

        monkeypatch.setenv("FLUENTSCHEMA_ROOT_TYPE", "date")
        with pytest.raises(ValidationError):
            FluentSchemaConfig()

    def test_get_config_singleton(self):
        from fluentschema.config import get_config

        assert get_config() is get_config()

    def test_builder_uses_config(self, monkeypatch):
        from fluentschema import FluentSchema

        monkeypatch.setenv("FLUENTSCHEMA_SCHEMA_URI", "http://json-schema.org/draft-06/schema#")
        monkeypatch.setenv("FLUENTSCHEMA_DEFAULT_PROPERTY_TYPE", "integer")
        value = FluentSchema().prop("a").value_of()
        assert value["$schema"] == "http://json-schema.org/draft-06/schema#"
        assert value["properties"]["a"]["type"] == "integer"
