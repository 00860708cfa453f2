"""
Switchyard logging - structured logging via structlog.

Manifesto:
    Registration and binding are the moments worth recording: they show
    how the composition root wired the system. The dispatch path itself
    stays silent and never logs errors on the caller's behalf.

    - **Structures:** JSON output for log aggregation
    - **Correlates:** context bound once, attached to every line
    - **Flexes:** Console output for development, JSON for production

Architecture:
    ::

        configure_logging(level="DEBUG", format="json")
            │
            ▼
        structlog processor chain:
          1. filter_by_level
          2. merge_contextvars
          3. add_log_level / add_logger_name
          4. TimeStamper (UTC ISO-8601)
          5. service.name metadata
          6. JSONRenderer (or ConsoleRenderer for dev)

Examples:
    >>> from switchyard.core.logging import configure_logging, get_logger
    >>> configure_logging(level="DEBUG", format="json")
    >>> logger = get_logger(__name__)
    >>> logger.debug("strategy.registered", key="percentage")

Tags:
    logging, structlog, observability, json-logging, switchyard
"""

from __future__ import annotations

import logging
import sys
from typing import Any, Literal

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from switchyard.core.settings import get_settings

# Track if logging has been configured
_configured = False
_service_name = "switchyard"


def _add_service_metadata(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Add service-level metadata to all logs."""
    event_dict.setdefault("service.name", _service_name)
    return event_dict


def configure_logging(
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] | None = None,
    format: Literal["json", "console"] | None = None,
    service: str | None = None,
    force: bool = False,
) -> None:
    """
    Configure structured logging for the application.

    Should be called once by the composition root. Subsequent calls are
    no-ops unless ``force=True``. Unset arguments come from
    ``SwitchyardSettings`` (``SWITCHYARD_LOG_LEVEL``, ``SWITCHYARD_LOG_FORMAT``,
    ``SWITCHYARD_SERVICE_NAME``).

    Args:
        level: Log level
        format: Output format
        service: Service name to include in logs
        force: Reconfigure even if already configured
    """
    global _configured, _service_name

    if _configured and not force:
        return

    settings = get_settings()
    log_level = (level or settings.log_level).upper()
    log_format = (format or settings.log_format).lower()
    _service_name = service or settings.service_name

    processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        _add_service_metadata,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if log_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # Configure stdlib logging to match
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, log_level),
        force=True,
    )
    logging.getLogger("switchyard").setLevel(getattr(logging, log_level))

    _configured = True


def is_configured() -> bool:
    """Check if logging has been configured."""
    return _configured


def get_logger(name: str | None = None) -> Any:
    """Get a structured logger.

    Args:
        name: Logger name (usually __name__)
    """
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Bind context to include in all subsequent logs.

    Example:
        bind_context(registry="pricing")
        logger.debug("strategy.registered", key="fixed")  # includes registry
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def unbind_context(*keys: str) -> None:
    """Remove specific keys from logging context."""
    structlog.contextvars.unbind_contextvars(*keys)


def clear_context() -> None:
    """Clear all bound context."""
    structlog.contextvars.clear_contextvars()


def get_context() -> dict[str, Any]:
    """Return a copy of the currently bound context."""
    return dict(structlog.contextvars.get_contextvars())


class LogContext:
    """Context manager for scoped logging context.

    Example:
        with LogContext(registry="pricing"):
            registry.register("fixed", FixedStrategy(15))
        # Context cleared here
    """

    def __init__(self, **kwargs: Any):
        self._context = kwargs

    def __enter__(self) -> LogContext:
        bind_context(**self._context)
        return self

    def __exit__(self, *args) -> None:
        unbind_context(*self._context.keys())

    async def __aenter__(self) -> LogContext:
        bind_context(**self._context)
        return self

    async def __aexit__(self, *args) -> None:
        unbind_context(*self._context.keys())


__all__ = [
    "configure_logging",
    "is_configured",
    "get_logger",
    "bind_context",
    "unbind_context",
    "clear_context",
    "get_context",
    "LogContext",
]
