"""Data models for graph operations."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from exportgraph.core.models import ExportBinding, ImportBinding


@dataclass
class AliasLink:
    """An export slot waiting to be pointed at a binding of another file."""

    file: str
    container_id: int
    name: str
    import_binding: ImportBinding

    @property
    def slot(self) -> tuple[int, str]:
        return (self.container_id, self.name)


@dataclass
class StarLink:
    """``export * from source``: copy the source's names into ``file``."""

    file: str
    source_address: str


@dataclass
class OriginChain:
    """The (file, name) hops from a re-exported entry to its declaration."""

    steps: list[tuple[str, str]]
    binding: ExportBinding

    @property
    def origin(self) -> tuple[str, str]:
        return self.steps[-1]

    def __len__(self) -> int:
        return len(self.steps)

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return iter(self.steps)

    def __repr__(self) -> str:
        hops = " -> ".join(f"{file}:{name}" for file, name in self.steps)
        return f"OriginChain({hops})"


@dataclass
class UnusedExport:
    """An exported name no other file references."""

    file: str
    name: str
    binding: ExportBinding
