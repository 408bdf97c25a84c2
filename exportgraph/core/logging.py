"""Logging helpers for :mod:`exportgraph`."""

from __future__ import annotations

import logging
from typing import Any, Iterable

import structlog
from rich.console import Console
from rich.logging import RichHandler

Logger = structlog.stdlib.BoundLogger

_CONSOLE_PROCESSOR = structlog.dev.ConsoleRenderer(colors=False)
_TIMESTAMPER = structlog.processors.TimeStamper(fmt="iso", utc=True)


def _normalize_level(level: str) -> int:
    """Return the logging module level constant for ``level``.

    Raises:
        ValueError: If the level name is not recognized.
    """
    normalized = level.strip().upper()
    value = logging.getLevelName(normalized)
    if isinstance(value, str):  # ``getLevelName`` echoes unknown names.
        raise ValueError(f"Unsupported log level: {level!r}")
    return value


def _reset_root_logger(root: logging.Logger, handlers: Iterable[logging.Handler]) -> None:
    """Replace root handlers with the provided ones."""
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    for handler in handlers:
        root.addHandler(handler)


def _configure_structlog() -> None:
    structlog.reset_defaults()
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            _TIMESTAMPER,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def _build_console_handler(level: int, console: Console | None = None) -> RichHandler:
    """Return a Rich-backed console handler for structured logging."""
    handler = RichHandler(
        console=console or Console(stderr=True),
        rich_tracebacks=True,
        show_path=False,
        markup=False,
        enable_link_path=False,
        log_time_format="%Y-%m-%d %H:%M:%S",
    )
    handler.setLevel(level)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=_CONSOLE_PROCESSOR,
            foreign_pre_chain=[
                structlog.contextvars.merge_contextvars,
                structlog.stdlib.add_log_level,
                _TIMESTAMPER,
            ],
        )
    )
    return handler


def configure_logging(*, level: str = "WARNING", console: Console | None = None) -> None:
    """Configure structlog on top of stdlib logging with a Rich console handler.

    Args:
        level: Log level name for the root logger (case-insensitive).
        console: Optional Rich console override, mostly for tests.

    Raises:
        ValueError: If ``level`` is not a recognized log level name.
    """
    log_level = _normalize_level(level)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    _configure_structlog()
    _reset_root_logger(root_logger, [_build_console_handler(log_level, console=console)])

    logging.captureWarnings(True)


def get_logger(name: str | None = None, **initial_context: Any) -> Logger:
    """Return a structured logger bound to an optional context.

    The logger is a lazy proxy, so module-level loggers pick up the
    configuration installed later by ``configure_logging``.
    """
    args = (name,) if name else ()
    return structlog.get_logger(*args, **initial_context)


__all__ = ["Logger", "configure_logging", "get_logger"]
