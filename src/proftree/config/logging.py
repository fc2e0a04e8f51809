"""structlog configuration for proftree.

Every record from the ``proftree`` logger hierarchy, whether emitted via
structlog (the snapshot store) or plain ``logging`` (services), goes
through one stderr handler:

- Human (default): ``HH:MM:SS [level] event key=value`` console lines.
- JSON (``--log-json``): one object per line with an ISO timestamp.

The tree file a command works on is bound as ``tree`` so each line says
which snapshot it concerns. Only the ``proftree`` logger is touched;
the root logger and third-party loggers keep their own setup.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import structlog

from proftree import __version__

LOGGER_NAME = "proftree"


def _add_version(
    _logger: object, _method: str, event_dict: structlog.types.EventDict
) -> structlog.types.EventDict:
    event_dict.setdefault("proftree", __version__)
    return event_dict


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    tree_path: Path | None = None,
) -> None:
    """Configure structlog processors and the ``proftree`` stderr handler.

    Args:
        verbose: Enable DEBUG-level output. When False, only WARNING+.
        log_json: Use JSON renderer instead of console renderer.
        tree_path: Snapshot file bound to every log line as ``tree``.
    """
    level = logging.DEBUG if verbose else logging.WARNING

    structlog.contextvars.clear_contextvars()
    if tree_path is not None:
        structlog.contextvars.bind_contextvars(tree=str(tree_path))

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    renderer: structlog.types.Processor
    if log_json:
        shared_processors += [
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            _add_version,
            structlog.processors.format_exc_info,
        ]
        renderer = structlog.processors.JSONRenderer()
    else:
        shared_processors.append(structlog.processors.TimeStamper(fmt="%H:%M:%S"))
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
