"""structlog rendering for both our own loggers and uvicorn's stdlib ones.

configure_logging() returns the dictConfig it applied so the CLI can hand
the same dict to ``uvicorn.run(log_config=...)``.
"""

from __future__ import annotations

import logging
import logging.config
from datetime import datetime, timezone
from typing import Any

import structlog

from nzbio.infrastructure.config.schema import AppConfig

log = structlog.get_logger(__name__)

# Chatty third-party loggers pinned above the app level.
_QUIET_LOGGERS: dict[str, str] = {"httpx": "WARNING", "httpcore": "WARNING"}


def _drop_color_message(_: Any, __: Any, event_dict: dict[str, Any]) -> dict[str, Any]:
    # uvicorn attaches "color_message" next to "message"; keep only one.
    event_dict.pop("color_message", None)
    return event_dict


def _stamp_from_record(_: Any, __: Any, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Use the stdlib record's creation time for foreign log lines."""
    record = event_dict.get("_record")
    if isinstance(record, logging.LogRecord):
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        event_dict["timestamp"] = created.isoformat().replace("+00:00", "Z")
    return event_dict


def _common_processors() -> list[structlog.typing.Processor]:
    return [
        _drop_color_message,
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
    ]


def _renderer(config: AppConfig) -> structlog.typing.Processor:
    if config.log_format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


def _stream_handler(stream: str) -> dict[str, Any]:
    return {
        "class": "logging.StreamHandler",
        "formatter": "structlog",
        "stream": stream,
    }


def build_logging_config(config: AppConfig) -> dict[str, Any]:
    """dictConfig routing every stdlib logger through ProcessorFormatter."""
    level = config.log_level
    loggers: dict[str, Any] = {
        "uvicorn": {"handlers": ["default"], "level": level, "propagate": False},
        "uvicorn.error": {"level": level},
        "uvicorn.access": {"handlers": ["access"], "level": level, "propagate": False},
        "fastapi": {"handlers": ["default"], "level": level, "propagate": False},
    }
    loggers.update({name: {"level": lvl} for name, lvl in _QUIET_LOGGERS.items()})

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "structlog": {
                "()": structlog.stdlib.ProcessorFormatter,
                "foreign_pre_chain": [*_common_processors(), _stamp_from_record],
                "processors": [
                    structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                    _renderer(config),
                ],
            },
        },
        "handlers": {
            "default": _stream_handler("ext://sys.stderr"),
            "access": _stream_handler("ext://sys.stdout"),
        },
        "loggers": loggers,
        "root": {"handlers": ["default"], "level": level},
    }


def configure_logging(config: AppConfig) -> dict[str, Any]:
    structlog.configure(
        processors=[
            *_common_processors(),
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    cfg = build_logging_config(config)
    logging.config.dictConfig(cfg)
    log.info(
        "logging_configured",
        log_format=config.log_format,
        log_level=config.log_level,
    )
    return cfg
