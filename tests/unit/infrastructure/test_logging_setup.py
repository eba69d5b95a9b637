"""Tests for the structlog/stdlib logging config builder."""

from __future__ import annotations

import structlog

from nzbio.infrastructure.config.schema import AppConfig
from nzbio.infrastructure.logging.setup import (
    _drop_color_message,
    build_logging_config,
)


def _config(**overrides: object) -> AppConfig:
    return AppConfig.model_validate(overrides)


class TestBuildLoggingConfig:
    def test_handlers_use_structlog_formatter(self) -> None:
        cfg = build_logging_config(_config())
        assert cfg["handlers"]["default"]["formatter"] == "structlog"
        assert cfg["handlers"]["access"]["formatter"] == "structlog"
        assert cfg["formatters"]["structlog"]["()"] is structlog.stdlib.ProcessorFormatter

    def test_level_applied_to_loggers(self) -> None:
        cfg = build_logging_config(_config(log_level="DEBUG"))
        assert cfg["root"]["level"] == "DEBUG"
        assert cfg["loggers"]["uvicorn"]["level"] == "DEBUG"
        assert cfg["loggers"]["fastapi"]["level"] == "DEBUG"

    def test_httpx_quieted(self) -> None:
        cfg = build_logging_config(_config(log_level="DEBUG"))
        assert cfg["loggers"]["httpx"]["level"] == "WARNING"
        assert cfg["loggers"]["httpcore"]["level"] == "WARNING"

    def test_json_renderer_in_prod(self) -> None:
        cfg = build_logging_config(_config(environment="prod"))
        renderer = cfg["formatters"]["structlog"]["processors"][-1]
        assert isinstance(renderer, structlog.processors.JSONRenderer)

    def test_console_renderer_in_dev(self) -> None:
        cfg = build_logging_config(_config())
        renderer = cfg["formatters"]["structlog"]["processors"][-1]
        assert isinstance(renderer, structlog.dev.ConsoleRenderer)

    def test_access_log_goes_to_stdout(self) -> None:
        cfg = build_logging_config(_config())
        assert cfg["handlers"]["access"]["stream"] == "ext://sys.stdout"
        assert cfg["loggers"]["uvicorn.access"]["handlers"] == ["access"]


def test_drop_color_message() -> None:
    event = {"event": "x", "color_message": "\x1b[32mx"}
    assert _drop_color_message(None, None, event) == {"event": "x"}
