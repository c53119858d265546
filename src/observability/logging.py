"""Structured logging configuration."""

import logging
import sys
from typing import TextIO

import structlog


def configure_logging(
    level: int | str = logging.INFO,
    output: TextIO = sys.stderr,
    json_format: bool = True,
) -> None:
    """Configure structlog for the reading queue.

    JSON lines are the default so logs can be piped into other tools; the
    console renderer is meant for interactive use.

    Args:
        level: Logging level as int or name (default: INFO).
        output: Output stream (default: stderr).
        json_format: Whether to render JSON (default: True).
    """
    if isinstance(level, str):
        level = logging.getLevelNamesMapping().get(level.upper(), logging.INFO)

    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if json_format:
        processors.append(structlog.processors.JSONRenderer(sort_keys=True))
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=output.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=output),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a bound logger instance.

    Args:
        name: Optional logger name.

    Returns:
        Bound logger instance.
    """
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return logger


def bind_run_context(run_id: str, owner_id: str | None = None) -> None:
    """Bind invocation context to all subsequent log messages.

    Args:
        run_id: Unique identifier of this invocation.
        owner_id: Reader whose collection is being processed.
    """
    context: dict[str, str] = {"run_id": run_id}
    if owner_id is not None:
        context["owner_id"] = owner_id
    structlog.contextvars.bind_contextvars(**context)


def clear_run_context() -> None:
    """Clear invocation context from log messages."""
    structlog.contextvars.unbind_contextvars("run_id", "owner_id")
