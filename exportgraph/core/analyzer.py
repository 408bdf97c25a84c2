"""Analyzer that coordinates syntax loading and symbol binding."""

from __future__ import annotations

import fnmatch
from collections.abc import Callable
from pathlib import Path
from typing import Any

from exportgraph.core.binder import ExportBinder
from exportgraph.core.clauses import register_import_specifier, register_reexport_clause
from exportgraph.core.config import AnalysisSettings
from exportgraph.core.exceptions import ExportGraphError, ParseError
from exportgraph.core.graph import StarLink, SymbolGraph
from exportgraph.core.logging import get_logger
from exportgraph.core.models import AnalysisStats, Diagnostic, FileRecord, SkipReason
from exportgraph.core.normalizer import normalize_export
from exportgraph.core.resolver import AliasResolver
from exportgraph.languages.estree import ESTreeAdapter
from exportgraph.languages.models import (
    ExportAllDeclaration,
    ExportNamedDeclaration,
    ImportDeclaration,
    ModuleSyntax,
    Statement,
)
from exportgraph.languages.resolution import is_relative, resolve_module_address

ProgressCallback = Callable[[Path, int, int], None]

logger = get_logger(__name__)


class Analyzer:
    """Coordinates syntax loading, export binding and alias resolution.

    Files are collected first; ``analyze`` then builds a fresh symbol graph
    in two passes:
    1. Walk every file's statements in order, registering imports and
       binding local exports. Cross-file aliases are deferred.
    2. Resolve the deferred aliases, then attach import reference counts.

    Running ``analyze`` again rebuilds the graph from the collected files,
    so results do not depend on how often it is called.
    """

    def __init__(
        self,
        settings: AnalysisSettings | None = None,
        adapter: ESTreeAdapter | None = None,
    ) -> None:
        self.settings = settings or AnalysisSettings()
        self._adapter = adapter or ESTreeAdapter(self.settings.ast_suffix)
        self._modules: dict[str, ModuleSyntax] = {}
        self._entries: dict[str, bool] = {}
        self._load_errors: list[str] = []
        self._skipped = 0
        self.graph = SymbolGraph()

    def add_module(self, module: ModuleSyntax, is_entry_file: bool | None = None) -> None:
        """Add a converted module; a later module with the same address replaces it."""
        if is_entry_file is None:
            is_entry_file = self.settings.is_entry(module.address)
        self._modules[module.address] = module
        self._entries[module.address] = is_entry_file

    def add_tree(self, address: str, tree: Any, is_entry_file: bool | None = None) -> None:
        """Convert and add a syntax tree already loaded from JSON."""
        self.add_module(self._adapter.convert(address, tree), is_entry_file)

    def load_directory(
        self,
        directory: Path,
        exclude_patterns: list[str] | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> int:
        """Load every syntax tree dump below ``directory``.

        A dump's address is its path relative to ``directory`` with the
        dump suffix removed, so ``src/a.js.json`` becomes ``src/a.js``.
        Unreadable dumps are recorded as errors of the next analysis.

        Returns:
            Number of files loaded.
        """
        all_excludes = self.settings.exclude + (exclude_patterns or [])
        suffix = self.settings.ast_suffix
        dumps = sorted(f for f in directory.rglob(f"*{suffix}") if f.is_file())
        total = len(dumps)
        loaded = 0

        for i, file in enumerate(dumps):
            relative_path = file.relative_to(directory).as_posix()
            if self._should_exclude(relative_path, all_excludes):
                self._skipped += 1
            else:
                address = relative_path[: -len(suffix)]
                try:
                    self.add_module(self._adapter.parse(file, address))
                    loaded += 1
                except ParseError as e:
                    logger.warning("syntax tree skipped", file=relative_path, error=str(e))
                    self._load_errors.append(str(e))

            if on_progress:
                on_progress(file, i + 1, total)

        return loaded

    def analyze(self) -> AnalysisStats:
        """Build the symbol graph from every added module."""
        stats = AnalysisStats()
        stats.errors.extend(self._load_errors)
        stats.skipped = self._skipped

        self.graph = SymbolGraph()
        for address in self._modules:
            self.graph.add_file(address, self._entries[address])

        binder = ExportBinder(self.graph)
        for address, module in self._modules.items():
            record = self.graph.get_file(address)
            for statement in module.statements:
                self._walk_statement(statement, record, binder, stats)
            for imported in record.import_table.values():
                if not imported.is_reexport:
                    imported.reference_counter.increment(
                        module.references.get(imported.import_name, 0)
                    )
            stats.files += 1
            logger.debug("file walked", file=address, statements=len(module.statements))

        resolver = AliasResolver(self.graph, binder)
        unresolved = resolver.resolve()
        stats.diagnostics.extend(unresolved)
        stats.skipped += len(unresolved)
        stats.aliases = sum(
            1 for binding in self.graph.bindings for name in binding.members
            if self.graph.alias_source(binding, name) is not None
        )
        resolver.attach_import_references()

        logger.info(
            "analysis finished",
            files=stats.files,
            exports=stats.exports,
            aliases=stats.aliases,
            skipped=stats.skipped,
            errors=len(stats.errors),
        )
        return stats

    def analyze_directory(
        self,
        directory: Path,
        exclude_patterns: list[str] | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> AnalysisStats:
        """Load a directory of syntax tree dumps and analyze it.

        Args:
            directory: Directory holding the dumps
            exclude_patterns: Additional glob patterns to exclude (e.g., "test*")
            on_progress: Optional callback for progress updates (file, current, total)

        Returns:
            AnalysisStats with counts of files/exports/aliases processed
        """
        self.load_directory(directory, exclude_patterns, on_progress)
        return self.analyze()

    @property
    def modules(self) -> dict[str, ModuleSyntax]:
        return self._modules

    def _walk_statement(
        self,
        statement: Statement,
        record: FileRecord,
        binder: ExportBinder,
        stats: AnalysisStats,
    ) -> None:
        if isinstance(statement, ImportDeclaration):
            source = self._resolve(record.address, statement.source)
            if source is None:
                return
            for specifier in statement.specifiers:
                try:
                    register_import_specifier(specifier, record, source)
                except ExportGraphError as e:
                    self._report(
                        stats, record.address, "<import>", SkipReason.UNRECOGNIZED_SHAPE, e
                    )
            return

        if isinstance(statement, ExportAllDeclaration):
            source = self._resolve(record.address, statement.source, keep_unknown=True)
            if source is not None:
                self.graph.add_star(StarLink(file=record.address, source_address=source))
            return

        if isinstance(statement, ExportNamedDeclaration) and statement.source is not None:
            source = self._resolve(record.address, statement.source, keep_unknown=True)
            # package re-exports are bound as the file's own symbols
            for clause in statement.specifiers if source is not None else ():
                try:
                    register_reexport_clause(clause, record, source)
                except ExportGraphError as e:
                    self._report(
                        stats, record.address, "<clause>", SkipReason.UNRECOGNIZED_SHAPE, e
                    )

        normalized = normalize_export(statement)
        if normalized.fallback:
            # bound as default:default, but flagged
            diagnostic = Diagnostic(
                file=record.address,
                name=normalized.pairs[0].exported,
                reason=SkipReason.UNRECOGNIZED_SHAPE,
                detail=f"{type(statement).__name__} bound as default export",
            )
            stats.diagnostics.append(diagnostic)
            logger.debug("export shape not recognized", file=record.address)

        for outcome in binder.bind(normalized, record):
            if outcome.diagnostic is not None:
                stats.diagnostics.append(outcome.diagnostic)
                stats.skipped += 1
            elif outcome.binding is not None:
                stats.exports += 1

    def _resolve(self, importer: str, specifier: str, keep_unknown: bool = False) -> str | None:
        """Resolve a specifier to a known address.

        Package imports resolve to None. Unknown relative files resolve to
        None too, unless ``keep_unknown`` is set, so that re-exports from
        them are reported during resolution.
        """
        address = resolve_module_address(
            importer, specifier, self._modules, self.settings.extensions
        )
        if address in self._modules:
            return address
        if keep_unknown and is_relative(specifier):
            return address
        logger.debug("import outside project", file=importer, source=specifier)
        return None

    def _report(
        self,
        stats: AnalysisStats,
        file: str,
        name: str,
        reason: SkipReason,
        error: ExportGraphError,
    ) -> None:
        stats.diagnostics.append(Diagnostic(file=file, name=name, reason=reason, detail=str(error)))
        stats.skipped += 1

    def _should_exclude(self, path: str, patterns: list[str]) -> bool:
        """Check if a path matches any exclusion pattern.

        Excludes:
        - Any path component starting with '.' (hidden files/directories)
        - Any path component matching the exclusion patterns
        """
        parts = Path(path).parts
        for part in parts:
            if part.startswith("."):
                return True
            for pattern in patterns:
                if fnmatch.fnmatch(part, pattern):
                    return True
        return False
