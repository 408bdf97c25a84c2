"""Second analysis phase: resolve deferred re-export links."""

from __future__ import annotations

from exportgraph.core.binder import ExportBinder
from exportgraph.core.exceptions import FileNotRegisteredError
from exportgraph.core.graph import AliasLink, StarLink, SymbolGraph
from exportgraph.core.graph.analysis import (
    dependency_order,
    find_reexport_cycles,
    reexport_dependencies,
)
from exportgraph.core.logging import get_logger
from exportgraph.core.models import (
    DEFAULT_EXPORT,
    BindingKind,
    Diagnostic,
    ExportBinding,
    ImportBinding,
    ImportKind,
    SkipReason,
)

logger = get_logger(__name__)


class AliasResolver:
    """Resolves every deferred alias once all files have been walked.

    Links are tried in file dependency order, then repeatedly until a pass
    makes no progress, so forward references and cycles through other names
    resolve regardless of the order files were walked in. ``export *``
    links are expanded on every pass because a source file may gain names
    while its own links resolve.
    """

    def __init__(self, graph: SymbolGraph, binder: ExportBinder | None = None) -> None:
        self._graph = graph
        self._binder = binder or ExportBinder(graph)

    def resolve(self) -> list[Diagnostic]:
        """Resolve pending links and return a diagnostic per unresolved one."""
        graph = self._graph
        dependencies = reexport_dependencies(graph)
        rank = {address: i for i, address in enumerate(dependency_order(graph, dependencies))}
        links = sorted(graph.pending_links, key=lambda link: rank.get(link.file, len(rank)))
        diagnostics: list[Diagnostic] = []
        stars = self._check_stars(graph.star_links, diagnostics)

        resolved = 0
        passes = 0
        progress = True
        while progress and (links or stars):
            passes += 1
            progress = False
            remaining: list[AliasLink] = []
            for link in links:
                try:
                    source = self.find_source(link.import_binding)
                except FileNotRegisteredError as e:
                    diagnostics.append(self._diagnostic(link, SkipReason.UNRESOLVED_FILE, str(e)))
                    continue
                if source is None:
                    remaining.append(link)
                    continue
                self._binder.bind_alias(link, source)
                resolved += 1
                progress = True
            links = remaining

            for star in stars:
                if self._expand_star(star):
                    progress = True

        if links:
            cycles = find_reexport_cycles(graph, 100, dependencies)
            cyclic = {address for cycle in cycles for address in cycle}
            for link in links:
                source_address = link.import_binding.source_address
                name = link.import_binding.exported_name
                if link.file in cyclic and source_address in cyclic:
                    reason = SkipReason.CYCLIC_ALIAS
                    detail = f"'{name}' re-exported in a cycle through {source_address}"
                else:
                    reason = SkipReason.UNRESOLVED_SYMBOL
                    detail = f"{source_address} does not export '{name}'"
                diagnostics.append(self._diagnostic(link, reason, detail))

        logger.debug(
            "aliases resolved",
            resolved=resolved,
            unresolved=len(links),
            passes=passes,
        )
        return diagnostics

    def find_source(self, imported: ImportBinding) -> ExportBinding | None:
        """The binding an import points at, or None if not bound yet.

        Raises:
            FileNotRegisteredError: If the source file is not in the project.
        """
        namespace = self._graph.namespace(imported.source_address)
        if imported.kind == ImportKind.WHOLE_MODULE_ALIAS:
            return namespace

        binding = self._graph.member(namespace, imported.exported_name)
        if binding is not None or self._graph.is_pending(namespace, imported.exported_name):
            return binding

        # module.exports = { name } read through a named import
        container = self._graph.member(namespace, DEFAULT_EXPORT)
        if container is not None and container.kind == BindingKind.DEFAULT_OBJECT:
            return self._graph.member(container, imported.exported_name)
        return None

    def attach_import_references(self) -> int:
        """Register plain imports' reference counters on their source bindings.

        Imports of files outside the project, or of names the source does
        not export, are left alone. Returns the number attached.
        """
        attached = 0
        for address, record in self._graph.files.items():
            for imported in record.import_table.values():
                if imported.is_reexport or not self._graph.has_file(imported.source_address):
                    continue
                source = self.find_source(imported)
                if source is None:
                    logger.debug(
                        "import target missing",
                        file=address,
                        name=imported.exported_name,
                        source=imported.source_address,
                    )
                    continue
                source.individual_file_references[address] = imported.reference_counter
                attached += 1
        return attached

    def _check_stars(self, stars: list[StarLink], diagnostics: list[Diagnostic]) -> list[StarLink]:
        known: list[StarLink] = []
        for star in stars:
            if self._graph.has_file(star.source_address):
                known.append(star)
            else:
                diagnostics.append(
                    Diagnostic(
                        file=star.file,
                        name="*",
                        reason=SkipReason.UNRESOLVED_FILE,
                        detail=f"File '{star.source_address}' is not part of the project",
                    )
                )
        return known

    def _expand_star(self, star: StarLink) -> bool:
        """Alias source names the re-exporting file does not define itself."""
        graph = self._graph
        target = graph.namespace(star.file)
        source_namespace = graph.namespace(star.source_address)
        added = False
        for name in list(source_namespace.members):
            if name == DEFAULT_EXPORT or name in target.members or graph.is_pending(target, name):
                continue
            source = graph.member(source_namespace, name)
            if source is None:
                continue
            link = AliasLink(
                file=star.file,
                container_id=target.id,
                name=name,
                import_binding=ImportBinding(
                    exported_name=name,
                    import_name=name,
                    kind=ImportKind.NAMED_IMPORT,
                    source_address=star.source_address,
                    is_reexport=True,
                ),
            )
            self._binder.bind_alias(link, source)
            added = True
        return added

    def _diagnostic(self, link: AliasLink, reason: SkipReason, detail: str) -> Diagnostic:
        logger.debug("alias unresolved", file=link.file, name=link.name, reason=reason.value)
        return Diagnostic(file=link.file, name=link.name, reason=reason, detail=detail)
