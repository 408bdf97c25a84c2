"""Analysis settings and the TOML loader."""

from __future__ import annotations

import fnmatch
import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from exportgraph.core.exceptions import ConfigError

CONFIG_FILENAME = "exportgraph.toml"
PYPROJECT_FILENAME = "pyproject.toml"

DEFAULT_EXCLUDES = [
    "node_modules",
    "bower_components",
    "dist",
    "build",
    "coverage",
    "out",
]

DEFAULT_EXTENSIONS = [".js", ".jsx", ".mjs", ".cjs", ".ts", ".tsx", ".mts", ".cts"]


class AnalysisSettings(BaseModel):
    """Settings for one analysis run."""

    entry_files: list[str] = Field(
        default_factory=list,
        description="Glob patterns of file addresses treated as entry points.",
    )
    exclude: list[str] = Field(
        default_factory=lambda: list(DEFAULT_EXCLUDES),
        description="Glob patterns of path components skipped when loading.",
    )
    ast_suffix: str = Field(
        default=".json",
        description="Suffix of the syntax tree dumps, stripped from addresses.",
    )
    extensions: list[str] = Field(
        default_factory=lambda: list(DEFAULT_EXTENSIONS),
        description="Extensions tried when resolving an import specifier.",
    )
    log_level: str = Field(
        default="WARNING",
        description="Log level name for the console handler.",
    )

    model_config = {
        "str_strip_whitespace": True,
        "validate_assignment": True,
        "extra": "forbid",
    }

    @field_validator("ast_suffix")
    @classmethod
    def _check_suffix(cls, value: str) -> str:
        if not value.startswith("."):
            raise ValueError("ast_suffix must start with '.'")
        return value

    @field_validator("extensions")
    @classmethod
    def _check_extensions(cls, value: list[str]) -> list[str]:
        return [ext if ext.startswith(".") else f".{ext}" for ext in value]

    @field_validator("log_level")
    @classmethod
    def _check_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level '{value}'")
        return level

    def is_entry(self, address: str) -> bool:
        """Whether a file address matches one of the entry patterns."""
        return any(fnmatch.fnmatch(address, pattern) for pattern in self.entry_files)


def _read_table(path: Path) -> dict[str, Any]:
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e

    if path.name == PYPROJECT_FILENAME:
        return data.get("tool", {}).get("exportgraph", {})
    return data


def find_config(directory: Path) -> Path | None:
    """Locate ``exportgraph.toml`` or a ``pyproject.toml`` in ``directory``."""
    for name in (CONFIG_FILENAME, PYPROJECT_FILENAME):
        candidate = directory / name
        if candidate.is_file():
            return candidate
    return None


def load_settings(path: Path | None = None, **overrides: Any) -> AnalysisSettings:
    """Build settings from a TOML file, then apply non-None overrides.

    ``path`` may be a standalone ``exportgraph.toml`` or a ``pyproject.toml``
    with a ``[tool.exportgraph]`` table.

    Raises:
        ConfigError: If the file cannot be read or holds invalid values.
    """
    values: dict[str, Any] = _read_table(path) if path is not None else {}
    values.update({key: value for key, value in overrides.items() if value is not None})
    try:
        return AnalysisSettings.model_validate(values)
    except ValidationError as e:
        source = str(path) if path is not None else "settings"
        raise ConfigError(f"Invalid {source}: {e}") from e
