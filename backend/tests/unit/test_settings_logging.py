"""Unit tests for settings and structured logging."""

import json
import logging

import pydantic
import pytest

from coldcheck.config import Settings
from coldcheck.logging import JSONFormatter, get_context_logger


class TestSettings:
    def test_defaults(self, monkeypatch):
        for name in ("DATABASE_URL", "ENVIRONMENT", "PHONE_COUNTRY_CODE"):
            monkeypatch.delenv(name, raising=False)
        settings = Settings(_env_file=None)

        assert settings.is_sqlite
        assert settings.phone_country_code == "60"
        assert settings.max_range_days == 366
        assert settings.is_development

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "postgresql+asyncpg://u:p@db/coldcheck")
        monkeypatch.setenv("CORS_ORIGINS", "https://a.example, https://b.example,")
        monkeypatch.setenv("ENVIRONMENT", "production")

        settings = Settings(_env_file=None)

        assert not settings.is_sqlite
        assert settings.cors_origins_list == ["https://a.example", "https://b.example"]
        assert settings.is_production

    def test_country_code_normalised(self, monkeypatch):
        monkeypatch.setenv("PHONE_COUNTRY_CODE", "+61")
        assert Settings(_env_file=None).phone_country_code == "61"

        monkeypatch.setenv("PHONE_COUNTRY_CODE", "sixty")
        with pytest.raises(pydantic.ValidationError):
            Settings(_env_file=None)


class TestJSONFormatter:
    def test_extra_fields_included(self):
        record = logging.LogRecord(
            "coldcheck.test", logging.INFO, __file__, 10, "Report submitted", (), None
        )
        record.report_id = "abc"
        record.attention_count = 2

        data = json.loads(JSONFormatter().format(record))

        assert data["message"] == "Report submitted"
        assert data["level"] == "INFO"
        assert data["report_id"] == "abc"
        assert data["attention_count"] == 2
        assert "args" not in data

    def test_context_logger_adds_fields(self, caplog):
        logger = get_context_logger("coldcheck.test", submitted_by="user-1")

        with caplog.at_level(logging.INFO, logger="coldcheck.test"):
            logger.info("hello")

        assert caplog.records[-1].submitted_by == "user-1"
