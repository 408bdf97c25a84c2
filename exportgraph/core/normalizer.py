"""Normalize export statements into (local, exported) pairs."""

from __future__ import annotations

from collections.abc import Iterable

from exportgraph.core.models import DEFAULT_EXPORT, ExportKind, ExportPair, NormalizedExport
from exportgraph.languages.models import (
    AssignmentExpression,
    ExportDefaultDeclaration,
    ExportNamedDeclaration,
    ExportsPropertyAssignment,
    Identifier,
    ModuleExportsAssignment,
    NamedDeclaration,
    ObjectExpression,
    ObjectProperty,
    SpreadElement,
    Statement,
    VariableDeclaration,
    node_name,
)


def _fallback() -> NormalizedExport:
    return NormalizedExport(
        pairs=[ExportPair(DEFAULT_EXPORT, DEFAULT_EXPORT)],
        kind=ExportKind.PLAIN,
        fallback=True,
    )


def extract_object_pairs(properties: Iterable[ObjectProperty | SpreadElement]) -> list[ExportPair]:
    """Extract pairs from the properties of an exported object literal.

    ``{ a }`` and ``{ a: 1 }`` give ``(a, a)``, ``{ a: b }`` gives ``(b, a)``,
    ``{ a: function b() {} }`` gives ``(b, a)``. Spread entries and computed
    keys are skipped.
    """
    pairs: list[ExportPair] = []
    for prop in properties:
        if not isinstance(prop, ObjectProperty) or prop.computed:
            continue
        key = node_name(prop.key)
        if not key:
            continue

        value = prop.value
        if isinstance(value, Identifier):
            local = value.name
        elif isinstance(value, NamedDeclaration) and value.id is not None:
            local = value.id.name
        else:
            local = key
        pairs.append(ExportPair(local=local, exported=key))
    return pairs


def normalize_export(statement: Statement, is_default: bool | None = None) -> NormalizedExport:
    """Turn one export statement into a list of pairs and an export kind.

    Shapes are tried in order and the first match wins. A statement that
    matches nothing falls back to a single ``(default, default)`` pair, so the
    result always holds at least one pair unless a declaration binds no
    simple names.

    Args:
        statement: The export statement.
        is_default: Whether this is an ``export default`` statement. Derived
            from the statement type when omitted.
    """
    if is_default is None:
        is_default = isinstance(statement, ExportDefaultDeclaration)

    # module.exports = X
    if isinstance(statement, ModuleExportsAssignment):
        if isinstance(statement.value, Identifier):
            return NormalizedExport(
                pairs=[ExportPair(statement.value.name, DEFAULT_EXPORT)],
                kind=ExportKind.PLAIN,
            )
        if isinstance(statement.value, ObjectExpression):
            return NormalizedExport(
                pairs=extract_object_pairs(statement.value.properties),
                kind=ExportKind.OBJECT_LITERAL,
            )
        return _fallback()

    # exports.x = y
    if isinstance(statement, ExportsPropertyAssignment):
        value = statement.value
        if isinstance(value, Identifier):
            local = value.name
        elif isinstance(value, NamedDeclaration) and value.id is not None:
            local = value.id.name
        else:
            local = statement.name
        return NormalizedExport(pairs=[ExportPair(local, statement.name)], kind=ExportKind.PLAIN)

    # export { a as b }
    if isinstance(statement, ExportNamedDeclaration) and statement.specifiers:
        pairs = []
        for clause in statement.specifiers:
            exported = node_name(clause.exported)
            local = node_name(getattr(clause, "local", None)) or exported
            if exported:
                pairs.append(ExportPair(local=local, exported=exported))
        return NormalizedExport(pairs=pairs, kind=ExportKind.PLAIN)

    if isinstance(statement, (ExportNamedDeclaration, ExportDefaultDeclaration)):
        if statement.declaration is not None:
            return _normalize_declaration(statement.declaration, is_default)

    # export {}
    if isinstance(statement, ExportNamedDeclaration):
        return NormalizedExport(pairs=[])

    return _fallback()


def _normalize_declaration(declaration: object, is_default: bool) -> NormalizedExport:
    """Rules for ``export <declaration>`` and ``export default <declaration>``."""
    # export default x
    if isinstance(declaration, Identifier):
        exported = DEFAULT_EXPORT if is_default else declaration.name
        return NormalizedExport(pairs=[ExportPair(declaration.name, exported)])

    # export const a = 1, b = 2
    if isinstance(declaration, VariableDeclaration):
        pairs = [
            ExportPair(d.id.name, d.id.name)
            for d in declaration.declarations
            if isinstance(d.id, Identifier)
        ]
        return NormalizedExport(pairs=pairs)

    # export function x() {} / export default class X {}
    if isinstance(declaration, NamedDeclaration) and declaration.id is not None:
        name = declaration.id.name
        return NormalizedExport(pairs=[ExportPair(name, DEFAULT_EXPORT if is_default else name)])

    # export default x = () => {}
    if isinstance(declaration, AssignmentExpression) and isinstance(declaration.left, Identifier):
        name = declaration.left.name
        return NormalizedExport(pairs=[ExportPair(name, DEFAULT_EXPORT if is_default else name)])

    # export default { ... }
    if isinstance(declaration, ObjectExpression):
        return NormalizedExport(
            pairs=extract_object_pairs(declaration.properties),
            kind=ExportKind.OBJECT_LITERAL,
        )

    return _fallback()
