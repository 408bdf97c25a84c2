"""Tests for :mod:`exportgraph.core.logging`."""

from __future__ import annotations

import io
import logging

import pytest
from rich.console import Console
from rich.logging import RichHandler

from exportgraph.core.logging import configure_logging, get_logger


def _clear_root_handlers() -> None:
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()


@pytest.fixture(autouse=True)
def reset_logging_state():
    """Ensure each test runs with a clean logging configuration."""
    _clear_root_handlers()
    yield
    _clear_root_handlers()


def _build_console() -> tuple[Console, io.StringIO]:
    buffer = io.StringIO()
    return Console(file=buffer, width=200), buffer


def test_configure_logging_installs_single_rich_handler() -> None:
    console, _ = _build_console()
    configure_logging(level="info", console=console)
    configure_logging(level="info", console=console)

    root = logging.getLogger()
    assert [type(h) for h in root.handlers] == [RichHandler]
    assert root.level == logging.INFO


def test_configure_logging_rejects_unknown_level() -> None:
    with pytest.raises(ValueError):
        configure_logging(level="chatty")


def test_logger_renders_context() -> None:
    console, buffer = _build_console()
    configure_logging(level="debug", console=console)

    get_logger("exportgraph.test", component="resolver").info("aliases resolved", resolved=3)

    output = buffer.getvalue()
    assert "aliases resolved" in output
    assert "resolved=3" in output
    assert "component=resolver" in output


def test_level_filters_messages() -> None:
    console, buffer = _build_console()
    configure_logging(level="warning", console=console)

    logger = get_logger("exportgraph.test")
    logger.debug("hidden")
    logger.warning("shown")

    output = buffer.getvalue()
    assert "hidden" not in output
    assert "shown" in output
