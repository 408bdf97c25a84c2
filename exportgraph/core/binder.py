"""Bind normalized export pairs into the symbol graph."""

from __future__ import annotations

from exportgraph.core.exceptions import (
    ExportGraphError,
    FileNotRegisteredError,
    MalformedPairError,
    UnresolvedReferenceError,
)
from exportgraph.core.graph import AliasLink, SymbolGraph
from exportgraph.core.logging import get_logger
from exportgraph.core.models import (
    BindOutcome,
    Diagnostic,
    ExportBinding,
    ExportKind,
    ExportPair,
    FileRecord,
    ImportBinding,
    NormalizedExport,
    SkipReason,
)

logger = get_logger(__name__)


def skip_reason_for(error: ExportGraphError) -> SkipReason:
    """Map a binding error to the reason reported for the skipped symbol."""
    if isinstance(error, MalformedPairError):
        return SkipReason.MALFORMED_PAIR
    if isinstance(error, FileNotRegisteredError):
        return SkipReason.UNRESOLVED_FILE
    if isinstance(error, UnresolvedReferenceError):
        return SkipReason.UNRESOLVED_SYMBOL
    return SkipReason.UNRECOGNIZED_SHAPE


class ExportBinder:
    """Writes export pairs of one file into the shared symbol graph.

    Local declarations get a fresh binding right away. Pairs naming an
    imported symbol are left as deferred alias links; ``AliasResolver`` calls
    ``bind_alias`` once the source binding exists.
    """

    def __init__(self, graph: SymbolGraph) -> None:
        self._graph = graph

    def bind(self, normalized: NormalizedExport, record: FileRecord) -> list[BindOutcome]:
        """Bind every pair of ``normalized`` for the file ``record``.

        A pair that cannot be bound is reported in its outcome and skipped;
        the remaining pairs are still bound.
        """
        outcomes: list[BindOutcome] = []
        for pair in normalized.pairs:
            try:
                outcomes.append(self._bind_pair(pair, normalized.kind, record))
            except ExportGraphError as e:
                diagnostic = Diagnostic(
                    file=record.address,
                    name=pair.exported or pair.local or "<unnamed>",
                    reason=skip_reason_for(e),
                    detail=str(e),
                )
                logger.debug("export skipped", file=record.address, reason=diagnostic.reason.value)
                outcomes.append(BindOutcome(pair=pair, diagnostic=diagnostic))
        return outcomes

    def _bind_pair(self, pair: ExportPair, kind: ExportKind, record: FileRecord) -> BindOutcome:
        if not pair.local or not pair.exported:
            raise MalformedPairError(f"Export pair {pair!r} is missing a name")

        if kind == ExportKind.PLAIN:
            target = self._graph.namespace(record.address)
        else:
            target = self._graph.default_container(record)

        imported = record.import_table.get(pair.local)
        if imported is None:
            binding = self._graph.new_binding(
                record.address, pair.local, reachable=record.is_entry_file
            )
            self._graph.assign(target, pair.exported, binding)
            return BindOutcome(pair=pair, binding=binding)

        self._graph.defer(
            AliasLink(
                file=record.address,
                container_id=target.id,
                name=pair.exported,
                import_binding=imported,
            )
        )
        return BindOutcome(pair=pair, deferred=True)

    def bind_alias(self, link: AliasLink, source: ExportBinding) -> None:
        """Point a deferred slot at the shared source binding.

        The slot stores the source's id, never a copy: the re-exporting file
        registers its reference counter on the shared binding and ORs its
        entry flag into the shared reachability.
        """
        record = self._graph.get_file(link.file)
        imported: ImportBinding = link.import_binding
        container = self._graph.get_binding(link.container_id)

        self._graph.assign(
            container,
            link.name,
            source,
            source=(imported.source_address, imported.exported_name),
        )
        source.individual_file_references[record.address] = imported.reference_counter
        source.is_reachable_from_entry |= record.is_entry_file
