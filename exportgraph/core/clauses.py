"""Classify binding clauses and register them in a file's import table."""

from __future__ import annotations

from typing import NamedTuple

from exportgraph.core.exceptions import UnrecognizedShapeError
from exportgraph.core.models import (
    DEFAULT_EXPORT,
    NAMESPACE_EXPORT,
    FileRecord,
    ImportBinding,
    ImportKind,
)
from exportgraph.languages.models import (
    ExportClause,
    ExportDefaultSpecifier,
    ExportNamespaceSpecifier,
    ExportSpecifier,
    ImportClause,
    ImportDefaultSpecifier,
    ImportNamespaceSpecifier,
    ImportSpecifier,
    node_name,
)


class BindingClause(NamedTuple):
    """What a re-export clause binds: its kind, exported name and import name."""

    kind: ImportKind
    exported_name: str
    import_name: str


def classify_binding_clause(clause: ExportClause) -> BindingClause:
    """Classify one clause of an ``export ... from`` statement.

    - ``export { a as b } from``: NAMED_IMPORT, import name ``a``
    - ``export * as ns from``: NAMED_AS_OBJECT_IMPORT, import name ``ns``
    - ``export v from``: NAMED_IMPORT, import name ``v``

    Raises:
        UnrecognizedShapeError: If the node is not a re-export clause.
    """
    if isinstance(clause, ExportSpecifier):
        exported = node_name(clause.exported)
        if exported is not None:
            local = node_name(clause.local) or exported
            return BindingClause(ImportKind.NAMED_IMPORT, exported, local)
    elif isinstance(clause, ExportNamespaceSpecifier):
        exported = node_name(clause.exported)
        if exported is not None:
            return BindingClause(ImportKind.NAMED_AS_OBJECT_IMPORT, exported, exported)
    elif isinstance(clause, ExportDefaultSpecifier):
        return BindingClause(ImportKind.NAMED_IMPORT, clause.exported.name, clause.exported.name)

    raise UnrecognizedShapeError(f"Not a re-export clause: {type(clause).__name__}")


def register_reexport_clause(
    clause: ExportClause,
    record: FileRecord,
    source_address: str,
) -> None:
    """Add the import side of a re-export clause to ``record.import_table``.

    Namespace clauses alias the whole source module; everything else is a
    named import. An existing entry under the same local name is replaced.
    """
    info = classify_binding_clause(clause)
    if info.kind == ImportKind.NAMED_AS_OBJECT_IMPORT:
        kind = ImportKind.WHOLE_MODULE_ALIAS
        source_name = NAMESPACE_EXPORT
    elif isinstance(clause, ExportDefaultSpecifier):
        kind = ImportKind.NAMED_IMPORT
        source_name = DEFAULT_EXPORT
    else:
        kind = ImportKind.NAMED_IMPORT
        source_name = info.import_name

    record.import_table[info.import_name] = ImportBinding(
        exported_name=source_name,
        import_name=info.import_name,
        kind=kind,
        source_address=source_address,
        is_reexport=True,
    )


def register_import_specifier(
    specifier: ImportClause,
    record: FileRecord,
    source_address: str,
) -> ImportBinding:
    """Add one specifier of a plain ``import`` statement to the import table."""
    if isinstance(specifier, ImportNamespaceSpecifier):
        kind = ImportKind.WHOLE_MODULE_ALIAS
        source_name = NAMESPACE_EXPORT
    elif isinstance(specifier, ImportDefaultSpecifier):
        kind = ImportKind.NAMED_IMPORT
        source_name = DEFAULT_EXPORT
    elif isinstance(specifier, ImportSpecifier):
        kind = ImportKind.NAMED_IMPORT
        source_name = node_name(specifier.imported) or specifier.local.name
    else:
        raise UnrecognizedShapeError(f"Not an import specifier: {type(specifier).__name__}")

    binding = ImportBinding(
        exported_name=source_name,
        import_name=specifier.local.name,
        kind=kind,
        source_address=source_address,
    )
    record.import_table[binding.import_name] = binding
    return binding
