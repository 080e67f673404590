"""Structured logging setup.

The curses shell owns the terminal, so log lines only ever go to a file.
"""

import logging
from pathlib import Path

import structlog


def configure_logging(log_file: Path | None, level: str = "INFO") -> None:
    """Route structlog events as JSON lines to ``log_file``.

    Args:
        log_file: File to append to. None disables logging entirely.
        level: Standard logging level name.
    """
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    if log_file is None:
        root.addHandler(logging.NullHandler())
        root.setLevel(logging.CRITICAL + 1)
    else:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_file, encoding="utf-8")
        handler.setFormatter(logging.Formatter("%(message)s"))
        root.addHandler(handler)
        root.setLevel(logging.getLevelName(level.upper()))

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
