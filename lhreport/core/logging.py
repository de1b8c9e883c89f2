"""Structured logging for lhreport.

Library modules log through ``logging.getLogger(__name__)``. This module only
decides how those records come out: structlog's ``ProcessorFormatter`` sits on
the root handlers, so stdlib records and structlog events share one processor
chain and one output format (JSON lines when piped, coloured text on a
terminal).

Anything bound with ``report_context`` or ``structlog.contextvars`` is merged
into every event logged inside the block, whichever API emitted it:

    from lhreport.core.logging import configure_logging, report_context

    configure_logging(module_levels={"lhreport.report": "DEBUG"})

    with report_context("https://example.com/"):
        build_report(lhr)  # every record carries report_id
"""

import logging
import sys
import uuid
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from lhreport import __version__

# Loggers given their own threshold by configure_logging, undone on reset
_module_log_levels: dict[str, int] = {}


def _to_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    return logging.getLevelNamesMapping().get(level.upper(), logging.INFO)


def generate_report_id() -> str:
    """Generate a unique report ID."""
    return str(uuid.uuid4())


def get_report_id() -> str | None:
    """Report ID bound to the current context, if any."""
    return structlog.contextvars.get_contextvars().get("report_id")


@contextmanager
def report_context(report_id: str | None = None) -> Iterator[str]:
    """Bind a report ID to every event logged inside the block.

    A fresh UUID is used when no ID is given. Nested blocks shadow the outer
    ID and restore it on exit.

    Example:
        with report_context("lhr-2024-01-01") as report_id:
            logger.info("rendering")  # includes report_id="lhr-2024-01-01"
    """
    report_id = report_id or generate_report_id()
    with structlog.contextvars.bound_contextvars(report_id=report_id):
        yield report_id


def add_version(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Stamp events with the package version."""
    event_dict.setdefault("lhreport_version", __version__)
    return event_dict


def set_module_log_level(module: str, level: str | int) -> None:
    """Give a logger and its children their own threshold.

    Args:
        module: Logger name, e.g. "lhreport.report".
        level: Level name or number.
    """
    numeric_level = _to_level(level)
    logging.getLogger(module).setLevel(numeric_level)
    _module_log_levels[module] = numeric_level


def _shared_processors() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        add_version,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        structlog.processors.format_exc_info,
    ]


def configure_logging(
    level: str | int = logging.INFO,
    json_output: bool | None = None,
    log_file: str | None = None,
    module_levels: Mapping[str, str | int] | None = None,
) -> None:
    """Route stdlib records and structlog events through one formatter.

    Args:
        level: Threshold of the root logger.
        json_output: Render JSON lines. When None, JSON is used unless
            stderr is a terminal.
        log_file: Also write every record to this file.
        module_levels: Logger name to threshold. Overrides ``level`` for that
            part of the logger tree, in either direction.
    """
    if json_output is None:
        json_output = not sys.stderr.isatty()

    root_level = _to_level(level)
    for module, module_level in (module_levels or {}).items():
        set_module_log_level(module, module_level)
    # Handlers must pass whatever a more verbose module lets through
    handler_level = min([root_level, *_module_log_levels.values()])

    shared_processors = _shared_processors()
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    renderer: Processor = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=True)
    )
    formatter = structlog.stdlib.ProcessorFormatter(
        processor=renderer,
        foreign_pre_chain=shared_processors,
    )

    # Reports go to stdout, so logs stay on stderr
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    root_logger.setLevel(root_level)
    for handler in handlers:
        handler.setLevel(handler_level)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)


def configure_logging_from_settings(
    settings: Any = None, level: str | None = None
) -> None:
    """Configure logging from the ``logging`` section of ReportSettings.

    Args:
        settings: Settings to use; defaults to the cached settings.
        level: Replaces the configured root level, as ``--verbose`` does.
    """
    from lhreport.core.settings import get_cached_settings

    settings = settings or get_cached_settings()

    configure_logging(
        level=level or settings.logging.level,
        json_output=settings.logging.json_output,
        log_file=settings.logging.file,
        module_levels=settings.logging.module_levels,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger for key-value events.

    Example:
        logger = get_logger(__name__)
        logger.debug("report_written", path="out.json")
    """
    return structlog.get_logger(name)


def reset_logging() -> None:
    """Drop handlers, bound context and module thresholds (used by tests)."""
    for module in _module_log_levels:
        logging.getLogger(module).setLevel(logging.NOTSET)
    _module_log_levels.clear()
    structlog.contextvars.clear_contextvars()

    structlog.reset_defaults()

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.WARNING)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
