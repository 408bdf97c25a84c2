"""Tagged syntax node variants consumed by the export binder.

The ESTree adapter assigns every export/import statement one of these types
once; the core dispatches on the type and never sniffs for fields.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Identifier:
    name: str


@dataclass
class StringLiteral:
    value: str


@dataclass
class OpaqueNode:
    """Any node the analyzer does not look into (calls, patterns, literals...)."""

    type: str


@dataclass
class NamedDeclaration:
    """A function or class, declared or used as an expression."""

    id: Identifier | None = None
    kind: str = "function"


@dataclass
class VariableDeclarator:
    id: Identifier | OpaqueNode


@dataclass
class VariableDeclaration:
    declarations: list[VariableDeclarator] = field(default_factory=list)
    kind: str = "const"


@dataclass
class AssignmentExpression:
    left: Identifier | OpaqueNode
    right: Expression | None = None


@dataclass
class ObjectProperty:
    key: Identifier | StringLiteral | OpaqueNode
    value: Expression | None = None
    computed: bool = False


@dataclass
class SpreadElement:
    argument: Expression | None = None


@dataclass
class ObjectExpression:
    properties: list[ObjectProperty | SpreadElement] = field(default_factory=list)


@dataclass
class ExportSpecifier:
    """``export { local as exported }``, with or without a source."""

    exported: Identifier | StringLiteral
    local: Identifier | StringLiteral | None = None


@dataclass
class ExportNamespaceSpecifier:
    """``export * as exported from "..."``."""

    exported: Identifier | StringLiteral


@dataclass
class ExportDefaultSpecifier:
    """``export exported from "..."`` (re-export of the source's default)."""

    exported: Identifier


@dataclass
class ImportSpecifier:
    imported: Identifier | StringLiteral
    local: Identifier


@dataclass
class ImportDefaultSpecifier:
    local: Identifier


@dataclass
class ImportNamespaceSpecifier:
    local: Identifier


@dataclass
class ExportNamedDeclaration:
    declaration: Declaration | None = None
    specifiers: list[ExportClause] = field(default_factory=list)
    source: str | None = None


@dataclass
class ExportDefaultDeclaration:
    declaration: Declaration | None = None


@dataclass
class ExportAllDeclaration:
    """``export * from "..."`` without a namespace name."""

    source: str


@dataclass
class ModuleExportsAssignment:
    """``module.exports = value``."""

    value: Expression | None = None


@dataclass
class ExportsPropertyAssignment:
    """``exports.name = value`` or ``module.exports.name = value``."""

    name: str
    value: Expression | None = None


@dataclass
class ImportDeclaration:
    source: str
    specifiers: list[ImportClause] = field(default_factory=list)


Expression = (
    Identifier
    | StringLiteral
    | NamedDeclaration
    | AssignmentExpression
    | ObjectExpression
    | OpaqueNode
)
Declaration = Expression | VariableDeclaration
ExportClause = ExportSpecifier | ExportNamespaceSpecifier | ExportDefaultSpecifier
ImportClause = ImportSpecifier | ImportDefaultSpecifier | ImportNamespaceSpecifier
Statement = (
    ExportNamedDeclaration
    | ExportDefaultDeclaration
    | ExportAllDeclaration
    | ModuleExportsAssignment
    | ExportsPropertyAssignment
    | ImportDeclaration
)


@dataclass
class ModuleSyntax:
    """Export/import statements and identifier usages of one file."""

    address: str
    statements: list[Statement] = field(default_factory=list)
    references: dict[str, int] = field(default_factory=dict)


def node_name(node: object) -> str | None:
    """Name carried by an identifier or string literal, else None."""
    if isinstance(node, Identifier):
        return node.name
    if isinstance(node, StringLiteral):
        return node.value
    return None
