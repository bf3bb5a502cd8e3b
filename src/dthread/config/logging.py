"""structlog setup for dthread.

Log lines go to stderr so ``--json`` output on stdout stays parseable:
a colored console format by default, one JSON object per line with
``--log-json``. Library modules log through ``logging.getLogger(__name__)``
and are rendered by the same structlog formatter.
"""

from __future__ import annotations

import logging
import sys

import structlog

# Chatty third-party loggers held at WARNING regardless of --verbose.
_QUIET_LOGGERS = ("sqlalchemy.engine", "sqlalchemy.pool", "uvicorn.access", "httpx")


def _shared_processors() -> list[structlog.types.Processor]:
    return [
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
    """Route structlog and stdlib logging to one stderr handler.

    Args:
        verbose: ``dthread`` loggers at DEBUG instead of WARNING.
        log_json: JSON lines instead of the console renderer.
    """
    shared = _shared_processors()
    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared,
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

    logging.getLogger("dthread").setLevel(logging.DEBUG if verbose else logging.WARNING)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def bind_command(command_path: str) -> None:
    """Tag every log line of this invocation with the running command."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(command=command_path)
