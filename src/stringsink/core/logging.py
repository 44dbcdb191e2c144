# src/stringsink/core/logging.py
"""Structured logging for the benchmark harness and CLI.

StringSink itself never logs: every failure is an exception raised to the
caller. Log records come from bench.run_benchmarks (one per completed
suite, one on divergence) and from the CLI.

structlog and stdlib logging share one ProcessorFormatter chain, so
records from logging.getLogger(...) and structlog.get_logger(...) render
identically. Records go to stderr by default: stdout belongs to the
benchmark table or its JSON lines.
"""

import logging
import sys
from typing import Any, TextIO

import structlog
from structlog.stdlib import ProcessorFormatter

# Run on every record before rendering, structlog or stdlib alike
_PRE_CHAIN: tuple[Any, ...] = (
    structlog.contextvars.merge_contextvars,
    structlog.processors.add_log_level,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.StackInfoRenderer(),
)


def _strip_bookkeeping(
    logger: logging.Logger | None,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    event_dict.pop("_record", None)
    event_dict.pop("_from_structlog", None)
    return event_dict


def _render_chain(json_output: bool, stream: TextIO) -> list[Any]:
    if json_output:
        return [
            _strip_bookkeeping,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(sort_keys=True),
        ]
    return [
        _strip_bookkeeping,
        structlog.dev.ConsoleRenderer(colors=stream.isatty()),
    ]


def configure_logging(
    *,
    json_output: bool = False,
    level: str | int = "INFO",
    stream: TextIO | None = None,
) -> None:
    """Route structlog and stdlib logging through one handler.

    Replaces any handlers already on the root logger, so calling it again
    (the CLI does once a settings file is loaded) reconfigures rather than
    duplicates output.

    Args:
        json_output: Render one JSON object per line instead of console text
        level: Root level, by name (any case) or number
        stream: Destination; defaults to sys.stderr at call time
    """
    if isinstance(level, str):
        level = logging.getLevelNamesMapping()[level.upper()]
    stream = stream if stream is not None else sys.stderr

    structlog.configure(
        processors=[*_PRE_CHAIN, ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Reconfiguration must reach loggers that were already handed out
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(stream)
    handler.setFormatter(ProcessorFormatter(processors=_render_chain(json_output, stream), foreign_pre_chain=list(_PRE_CHAIN)))

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger bound to name (usually __name__)."""
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return logger
