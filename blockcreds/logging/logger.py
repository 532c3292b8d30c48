"""
Logger Implementation
=====================

structlog configuration shared by the library, the HTTP service and the
scripts. Events are rendered as JSON in production and as colored console
lines elsewhere. Secrets and the private witness of a commitment are
redacted before rendering.

Version: 0.1.0
"""

import datetime
import logging
import sys
from typing import TYPE_CHECKING, Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger


if TYPE_CHECKING:
    from structlog.stdlib import BoundLogger


REDACTED = "***REDACTED***"

# Matched as substrings of the lowercased key
SENSITIVE_KEYS = frozenset({
    "password",
    "api_key",
    "secret",
    "authorization",
    "private_key",
})

# Private witness values of a commitment, matched exactly
WITNESS_KEYS = frozenset({"score", "salt"})

QUIET_LOGGERS = ("httpx", "httpcore", "asyncio")


def _is_sensitive(key: str) -> bool:
    lowered = key.lower()
    return lowered in WITNESS_KEYS or any(s in lowered for s in SENSITIVE_KEYS)


def _redact(values: dict[str, Any]) -> dict[str, Any]:
    redacted: dict[str, Any] = {}
    for key, value in values.items():
        if _is_sensitive(key):
            redacted[key] = REDACTED
        elif isinstance(value, dict):
            redacted[key] = _redact(value)
        else:
            redacted[key] = value
    return redacted


def censor_sensitive(
    logger: WrappedLogger | None,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """structlog processor that redacts secrets and witness values."""
    return _redact(event_dict)


def _utc_timestamp(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    event_dict["timestamp"] = datetime.datetime.now(datetime.UTC).isoformat()
    return event_dict


def _default_service(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    event_dict.setdefault("service", "blockcreds")
    return event_dict


def _pre_chain() -> list[Processor]:
    """Processors applied to both structlog and foreign stdlib records."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        _utc_timestamp,
        _default_service,
        censor_sensitive,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _renderer(json_logs: bool) -> tuple[Processor, Processor]:
    """Return the exception processor and the final renderer."""
    if json_logs:
        return structlog.processors.format_exc_info, structlog.processors.JSONRenderer()

    console = structlog.dev.ConsoleRenderer(
        colors=True,
        exception_formatter=structlog.dev.RichTracebackFormatter(
            show_locals=False,
            max_frames=10,
        ),
    )
    return structlog.dev.set_exc_info, console


def setup_logging(
    log_level: str = "INFO",
    json_logs: bool = False,
    service_name: str = "blockcreds",
) -> None:
    """
    Configure structlog and the stdlib root logger.

    Args:
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL
        json_logs: Render JSON lines instead of console output
        service_name: Bound as ``service`` on every event
    """
    level = getattr(logging, log_level.upper())
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    exc_processor, renderer = _renderer(json_logs)
    pre_chain = [*_pre_chain(), exc_processor]

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    structlog.contextvars.bind_contextvars(service=service_name)


def get_logger(name: str | None = None) -> "BoundLogger":
    """
    Get a structured logger.

    Example:
        logger = get_logger(__name__)
        logger.info("commitment_written", path="input.json")
    """
    return structlog.stdlib.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Bind values to every event logged from the current context."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
