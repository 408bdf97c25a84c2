"""Protocol for syntax adapters."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from exportgraph.languages.models import ModuleSyntax


class SyntaxAdapter(Protocol):
    """Protocol for adapters turning parser output into module syntax."""

    def parse(self, file: Path, address: str) -> ModuleSyntax:
        """Read a syntax tree dump and convert it."""
        ...

    def supports(self, file: Path) -> bool:
        """Check if this adapter reads the given file."""
        ...
