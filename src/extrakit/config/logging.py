"""structlog configuration for extrakit.

Records from ``logging.getLogger(__name__)`` in extrakit modules and
structlog loggers share one stderr handler. When a project root is known,
every line carries it as ``project``.

Two output modes:
- Human (default): colored console output
- JSON (log_json): one JSON object per line
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import structlog

PACKAGE_LOGGER = "extrakit"


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


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    project_root: Path | None = None,
) -> None:
    """Route extrakit logging through structlog on stderr.

    Safe to call repeatedly: the root handler is replaced, not stacked,
    and previously bound context is cleared.

    Args:
        verbose: Let DEBUG records from the ``extrakit`` logger through
            (pyproject discovery, tool table loading). Otherwise WARNING+.
        log_json: Render JSON lines instead of console output.
        project_root: Bound as ``project`` on every line when given.
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

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)
    logging.getLogger(PACKAGE_LOGGER).setLevel(logging.DEBUG if verbose else logging.WARNING)

    structlog.contextvars.clear_contextvars()
    if project_root is not None:
        structlog.contextvars.bind_contextvars(project=str(project_root))
