"""structlog configuration for cashrun.

All output goes to stderr so stdout stays clean for ``--json`` results.
stdlib loggers (``logging.getLogger(__name__)``) are routed through the
same processor chain, so order context bound with :func:`order_context`
shows up on every record emitted while a transition is in flight.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager

import structlog

# Third-party loggers that stay at WARNING even with --verbose.
_LIBRARY_LOGGERS = ("sqlalchemy", "sqlalchemy.engine", "sqlalchemy.pool")

_SHARED_PROCESSORS: list[structlog.types.Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.UnicodeDecoder(),
]


def _renderer(log_json: bool) -> structlog.types.Processor:
    if log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """Configure structlog and attach a single stderr handler to the root logger.

    Args:
        verbose: DEBUG for ``cashrun.*`` loggers; otherwise WARNING.
        log_json: One JSON object per line instead of console output.
    """
    structlog.configure(
        processors=[
            *_SHARED_PROCESSORS,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_SHARED_PROCESSORS,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_json),
            ],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.WARNING)

    logging.getLogger("cashrun").setLevel(logging.DEBUG if verbose else logging.WARNING)
    for name in _LIBRARY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


@contextmanager
def order_context(order_id: str, **extra: str) -> Iterator[None]:
    """Bind ``order_id`` (and *extra*) to every log record inside the block."""
    with structlog.contextvars.bound_contextvars(order_id=order_id, **extra):
        yield
