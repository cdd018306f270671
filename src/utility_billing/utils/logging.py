from __future__ import annotations

import logging
import sys
from typing import Any, MutableMapping, cast

import structlog

from utility_billing.core.constants import ADMIN_PIN_HEADER

REDACTED = "***"
_SECRET_KEYS = frozenset({"admin_pin", "pin", ADMIN_PIN_HEADER})


def redact_admin_pin(
    _logger: Any, _method: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """structlog processor: mask admin PIN values, including inside ``headers``."""
    for key in event_dict.keys() & _SECRET_KEYS:
        event_dict[key] = REDACTED
    headers = event_dict.get("headers")
    if isinstance(headers, dict) and ADMIN_PIN_HEADER in headers:
        event_dict["headers"] = {**headers, ADMIN_PIN_HEADER: REDACTED}
    return event_dict


def configure_logging(level: str = "INFO", json: bool = False) -> None:
    """Route structlog and stdlib logging through one handler on stdout.

    Args:
        level: "DEBUG", "INFO", "WARNING" or "ERROR"; unknown names mean INFO.
        json: Render entries with JSONRenderer instead of ConsoleRenderer.

    httpx logs every request at INFO; it is only let through at DEBUG.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        redact_admin_pin,
    ]

    if json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=shared_processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
        foreign_pre_chain=shared_processors,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level)

    http_level = logging.DEBUG if log_level <= logging.DEBUG else logging.WARNING
    for name in ("httpx", "httpcore"):
        logging.getLogger(name).setLevel(http_level)


def get_logger(name: str) -> structlog.BoundLogger:
    return cast(structlog.BoundLogger, structlog.get_logger(name))
