"""Data models for exportgraph."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

DEFAULT_EXPORT = "default"
NAMESPACE_EXPORT = "*"


class ImportKind(Enum):
    """How an imported name is bound to its source file."""

    WHOLE_MODULE_ALIAS = "whole_module_alias"
    NAMED_IMPORT = "named_import"
    NAMED_AS_OBJECT_IMPORT = "named_as_object_import"


class ExportKind(Enum):
    """Coarse shape of a normalized export statement."""

    PLAIN = "plain"
    OBJECT_LITERAL = "object_literal"


class BindingKind(Enum):
    """Types of export binding nodes held in the symbol graph."""

    SYMBOL = "symbol"
    NAMESPACE = "namespace"
    DEFAULT_OBJECT = "default_object"


class SkipReason(Enum):
    """Why an export pair was not bound."""

    UNRECOGNIZED_SHAPE = "unrecognized_shape"
    MALFORMED_PAIR = "malformed_pair"
    UNRESOLVED_FILE = "unresolved_file"
    UNRESOLVED_SYMBOL = "unresolved_symbol"
    CYCLIC_ALIAS = "cyclic_alias"


@dataclass
class ReferenceCounter:
    """Shared counter of the places that use one imported symbol."""

    count: int = 0

    def increment(self, by: int = 1) -> None:
        self.count += by


@dataclass(frozen=True)
class ExportPair:
    """A (local name, exported name) pair produced by the normalizer."""

    local: str
    exported: str


@dataclass
class NormalizedExport:
    """Result of normalizing one export statement."""

    pairs: list[ExportPair]
    kind: ExportKind = ExportKind.PLAIN
    fallback: bool = False


@dataclass
class ImportBinding:
    """A name a file pulls in from another file."""

    exported_name: str
    import_name: str
    kind: ImportKind
    source_address: str
    reference_counter: ReferenceCounter = field(default_factory=ReferenceCounter)
    is_reexport: bool = False


@dataclass(eq=False)
class ExportBinding:
    """One exported symbol, shared by every file that re-exports it.

    Namespace and default-object bindings hold their export slots in
    ``members`` (exported name -> binding id).
    """

    id: int
    file: str
    name: str
    kind: BindingKind = BindingKind.SYMBOL
    is_reachable_from_entry: bool = False
    individual_file_references: dict[str, ReferenceCounter] = field(default_factory=dict)
    members: dict[str, int] = field(default_factory=dict)

    @property
    def is_container(self) -> bool:
        return self.kind != BindingKind.SYMBOL

    def referencing_files(self) -> set[str]:
        """Files other than the owner that use this binding at least once."""
        return {
            address
            for address, counter in self.individual_file_references.items()
            if address != self.file and counter.count > 0
        }

    def __repr__(self) -> str:
        return (
            f"ExportBinding(id={self.id}, file={self.file!r}, name={self.name!r}, "
            f"kind={self.kind.value}, reachable={self.is_reachable_from_entry})"
        )


@dataclass
class FileRecord:
    """Per-file state: import table and the id of the file's export table."""

    address: str
    is_entry_file: bool = False
    namespace_id: int = -1
    import_table: dict[str, ImportBinding] = field(default_factory=dict)


@dataclass
class Diagnostic:
    """A symbol that was skipped, with the reason."""

    file: str
    name: str
    reason: SkipReason
    detail: str = ""

    def __str__(self) -> str:
        suffix = f": {self.detail}" if self.detail else ""
        return f"{self.file}: {self.name} skipped ({self.reason.value}){suffix}"


@dataclass
class BindOutcome:
    """Typed result of binding one export pair."""

    pair: ExportPair
    binding: ExportBinding | None = None
    deferred: bool = False
    diagnostic: Diagnostic | None = None

    @property
    def ok(self) -> bool:
        return self.diagnostic is None


class AnalysisStats:
    """Statistics from an analysis run."""

    def __init__(self) -> None:
        self.files: int = 0
        self.exports: int = 0
        self.aliases: int = 0
        self.skipped: int = 0
        self.errors: list[str] = []
        self.diagnostics: list[Diagnostic] = []

    def __repr__(self) -> str:
        return (
            f"AnalysisStats(files={self.files}, exports={self.exports}, "
            f"aliases={self.aliases}, skipped={self.skipped}, "
            f"errors={len(self.errors)}, diagnostics={len(self.diagnostics)})"
        )
