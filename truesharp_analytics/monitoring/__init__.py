"""Monitoring module for structured logging.

Production renders JSON lines, development renders colored console output.
"""

from truesharp_analytics.monitoring.logging import (
    configure_logging,
    get_logger,
    bind_correlation_id,
    unbind_correlation_id,
)

__all__ = [
    "configure_logging",
    "get_logger",
    "bind_correlation_id",
    "unbind_correlation_id",
]
