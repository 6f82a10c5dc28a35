import logging
import sys

import structlog

_HANDLER_NAME = "bundel_handler"
_structlog_configured = False


def _configure_structlog():
    """Configures structlog to produce JSON-formatted logs via stdlib."""
    if structlog.is_configured():
        return

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def configure_logging(level: str = "INFO") -> None:
    """
    Attaches a stderr handler to the ``bundel`` logger hierarchy.

    Libraries should not install handlers on their own, so this is opt-in.
    Calling it more than once only updates the level.
    """
    bundel_logger = logging.getLogger("bundel")
    if _HANDLER_NAME not in [h.get_name() for h in bundel_logger.handlers]:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(message)s"))
        handler.set_name(_HANDLER_NAME)
        bundel_logger.addHandler(handler)
    bundel_logger.setLevel(level.upper() if isinstance(level, str) else level)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Returns a structlog logger for the given name.

    The logger is integrated with the standard library's logging system, so
    its output is controlled by the usual ``logging`` levels and handlers.
    """
    global _structlog_configured
    if not _structlog_configured:
        _configure_structlog()
        _structlog_configured = True
    return structlog.get_logger(name)
