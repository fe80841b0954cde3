"""structlog configuration shared by the service entry points."""

import logging

import structlog


def configure_logging(verbose: bool = False) -> None:
    """Configure structlog with level filtering and console rendering.

    Args:
        verbose: Emit debug-level events when True, info and above otherwise
    """
    log_level = logging.DEBUG if verbose else logging.INFO
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
    )


__all__ = ["configure_logging"]
