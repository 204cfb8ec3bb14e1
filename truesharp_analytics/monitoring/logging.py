"""structlog setup for the analytics package.

Library code never prints. It emits snake_case events with keyword fields,
and the process entry point decides how they are rendered:

    from truesharp_analytics.monitoring import configure_logging, get_logger

    configure_logging("production")  # once, at process start
    log = get_logger(__name__)
    log.info("saved_filter_stored", filter_id="sharp-nba", filter_count=3)
"""

import logging
import sys

import structlog

LOG_MODES = ("development", "production")

_SHARED_PROCESSORS = (
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
    structlog.processors.UnicodeDecoder(),
)


def _renderer_for(mode: str):
    if mode == "production":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=True)


def configure_logging(mode: str = "development", level: int = logging.INFO) -> None:
    """Route structlog events through stdlib logging to stdout.

    Args:
        mode: "production" renders one JSON object per line, "development"
            renders colored key=value output
        level: Minimum stdlib level that reaches the handler

    Raises:
        ValueError: If mode is not in LOG_MODES
    """
    if mode not in LOG_MODES:
        raise ValueError(f"Unknown log mode {mode!r}. Expected one of {LOG_MODES}.")

    structlog.configure(
        processors=[*_SHARED_PROCESSORS, _renderer_for(mode)],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Logger for a module; pass ``__name__`` so events carry the logger name."""
    return structlog.get_logger(name)


def bind_correlation_id(correlation_id: str) -> None:
    """Tag every later event in this context (thread or task) with ``correlation_id``.

    The API layer binds its request id here; the CLI binds one id per run.
    """
    structlog.contextvars.bind_contextvars(correlation_id=correlation_id)


def unbind_correlation_id() -> None:
    structlog.contextvars.unbind_contextvars("correlation_id")
