"""Adapter from Babel/ESTree JSON dumps to module syntax."""

from __future__ import annotations

import json
from collections import Counter
from pathlib import Path
from typing import Any

from exportgraph.core.exceptions import ParseError
from exportgraph.languages.models import (
    AssignmentExpression,
    Declaration,
    ExportAllDeclaration,
    ExportClause,
    ExportDefaultDeclaration,
    ExportDefaultSpecifier,
    ExportNamedDeclaration,
    ExportNamespaceSpecifier,
    ExportsPropertyAssignment,
    ExportSpecifier,
    Expression,
    Identifier,
    ImportClause,
    ImportDeclaration,
    ImportDefaultSpecifier,
    ImportNamespaceSpecifier,
    ImportSpecifier,
    ModuleExportsAssignment,
    ModuleSyntax,
    NamedDeclaration,
    ObjectExpression,
    ObjectProperty,
    OpaqueNode,
    SpreadElement,
    Statement,
    StringLiteral,
    VariableDeclaration,
    VariableDeclarator,
)

Node = dict[str, Any]

_DECLARATION_KINDS = {
    "FunctionDeclaration": "function",
    "FunctionExpression": "function",
    "ArrowFunctionExpression": "function",
    "TSDeclareFunction": "function",
    "ClassDeclaration": "class",
    "ClassExpression": "class",
    "TSInterfaceDeclaration": "type",
    "TSTypeAliasDeclaration": "type",
    "TSEnumDeclaration": "enum",
    "TSModuleDeclaration": "namespace",
}

_WRAPPERS = {
    "ParenthesizedExpression",
    "TSAsExpression",
    "TSSatisfiesExpression",
    "TSNonNullExpression",
    "TypeCastExpression",
}

_PROPERTY_TYPES = {
    "ObjectProperty",
    "Property",
    "ObjectMethod",
    "ClassProperty",
    "ClassMethod",
    "ClassPrivateProperty",
    "ClassAccessorProperty",
    "MethodDefinition",
    "PropertyDefinition",
    "TSPropertySignature",
    "TSMethodSignature",
}

# Fields that never hold identifier uses
_SKIP_FIELDS = {
    "type",
    "loc",
    "start",
    "end",
    "range",
    "extra",
    "comments",
    "leadingComments",
    "trailingComments",
    "innerComments",
    "id",
    "label",
    "key",
    "params",
}


class ESTreeAdapter:
    """Reads ``@babel/parser`` (or any ESTree) JSON output.

    Either a Babel ``File`` node or a bare ``Program`` node is accepted as
    the root. Every export/import statement becomes one tagged variant of
    ``exportgraph.languages.models``; everything else is dropped after
    identifier usages have been counted.
    """

    def __init__(self, suffix: str = ".json") -> None:
        self._suffix = suffix

    def supports(self, file: Path) -> bool:
        """Check if this adapter reads the given file."""
        return file.name.endswith(self._suffix)

    def parse(self, file: Path, address: str) -> ModuleSyntax:
        """Read a JSON dump and convert it."""
        try:
            tree = json.loads(file.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as e:
            raise ParseError(f"Cannot read {file}: {e}") from e
        except json.JSONDecodeError as e:
            raise ParseError(f"Invalid JSON in {file}: {e}") from e
        return self.convert(address, tree)

    def convert(self, address: str, tree: Any) -> ModuleSyntax:
        """Convert an already loaded syntax tree."""
        program = _program(tree)
        if program is None:
            raise ParseError(f"No program node in syntax tree for {address}")

        body = program.get("body") or []
        statements: list[Statement] = []
        for node in body:
            if isinstance(node, dict):
                statement = _statement(node)
                if statement is not None:
                    statements.append(statement)

        return ModuleSyntax(
            address=address,
            statements=statements,
            references=count_references(body),
        )


def _program(tree: Any) -> Node | None:
    if not isinstance(tree, dict):
        return None
    if tree.get("type") == "File":
        tree = tree.get("program")
    if isinstance(tree, dict) and tree.get("type") == "Program":
        return tree
    return None


def _string_value(node: Node | None) -> str | None:
    if not node:
        return None
    if node.get("type") in ("StringLiteral", "Literal") and isinstance(node.get("value"), str):
        return node["value"]
    return None


def _name_node(node: Node | None) -> Identifier | StringLiteral | None:
    if not node:
        return None
    if node.get("type") == "Identifier":
        return Identifier(node["name"])
    value = _string_value(node)
    return None if value is None else StringLiteral(value)


def _key(node: Node | None) -> Identifier | StringLiteral | OpaqueNode:
    name = _name_node(node)
    if name is not None:
        return name
    if node and node.get("type") in ("NumericLiteral", "Literal") and node.get("value") is not None:
        return StringLiteral(str(node["value"]))
    return OpaqueNode(node.get("type", "Unknown") if node else "Unknown")


def _identifier_or_opaque(node: Node | None) -> Identifier | OpaqueNode:
    if node and node.get("type") == "Identifier":
        return Identifier(node["name"])
    return OpaqueNode(node.get("type", "Unknown") if node else "Unknown")


def _member_name(node: Node) -> str | None:
    prop = node.get("property")
    if not prop:
        return None
    if not node.get("computed") and prop.get("type") == "Identifier":
        return prop["name"]
    if node.get("computed"):
        return _string_value(prop)
    return None


def _is_identifier(node: Node | None, name: str) -> bool:
    return bool(node) and node.get("type") == "Identifier" and node.get("name") == name


def _is_module_exports(node: Node | None) -> bool:
    return (
        bool(node)
        and node.get("type") == "MemberExpression"
        and _is_identifier(node.get("object"), "module")
        and _member_name(node) == "exports"
    )


def _commonjs_target(left: Node | None) -> tuple[bool, str | None] | None:
    """Classify the left side of an assignment.

    Returns ``(True, None)`` for ``module.exports``, ``(False, name)`` for
    ``exports.name`` / ``module.exports.name`` and None otherwise.
    """
    if _is_module_exports(left):
        return (True, None)
    if left and left.get("type") == "MemberExpression":
        obj = left.get("object")
        if _is_identifier(obj, "exports") or _is_module_exports(obj):
            name = _member_name(left)
            if name is not None:
                return (False, name)
    return None


def _expression(node: Node | None) -> Expression | None:
    if not node:
        return None
    node_type = node.get("type")

    if node_type in _WRAPPERS:
        return _expression(node.get("expression"))
    if node_type == "Identifier":
        return Identifier(node["name"])
    value = _string_value(node)
    if value is not None:
        return StringLiteral(value)
    if node_type in _DECLARATION_KINDS:
        ident = node.get("id")
        return NamedDeclaration(
            id=Identifier(ident["name"]) if ident and ident.get("type") == "Identifier" else None,
            kind=_DECLARATION_KINDS[node_type],
        )
    if node_type == "AssignmentExpression":
        return AssignmentExpression(
            left=_identifier_or_opaque(node.get("left")),
            right=_expression(node.get("right")),
        )
    if node_type == "ObjectExpression":
        return ObjectExpression(properties=[_property(p) for p in node.get("properties") or []])
    return OpaqueNode(node_type or "Unknown")


def _declaration(node: Node | None) -> Declaration | None:
    if node and node.get("type") == "VariableDeclaration":
        return VariableDeclaration(
            declarations=[
                VariableDeclarator(id=_identifier_or_opaque(d.get("id")))
                for d in node.get("declarations") or []
            ],
            kind=node.get("kind", "var"),
        )
    return _expression(node)


def _property(node: Node) -> ObjectProperty | SpreadElement:
    node_type = node.get("type")
    if node_type in ("SpreadElement", "RestElement"):
        return SpreadElement(argument=_expression(node.get("argument")))
    value = None if node_type == "ObjectMethod" else _expression(node.get("value"))
    return ObjectProperty(
        key=_key(node.get("key")),
        value=value,
        computed=bool(node.get("computed")),
    )


def _export_clause(node: Node) -> ExportClause | None:
    node_type = node.get("type")
    exported = _name_node(node.get("exported"))
    if exported is None:
        return None
    if node_type == "ExportSpecifier":
        return ExportSpecifier(exported=exported, local=_name_node(node.get("local")))
    if node_type == "ExportNamespaceSpecifier":
        return ExportNamespaceSpecifier(exported=exported)
    if node_type == "ExportDefaultSpecifier" and isinstance(exported, Identifier):
        return ExportDefaultSpecifier(exported=exported)
    return None


def _import_clause(node: Node) -> ImportClause | None:
    node_type = node.get("type")
    local = node.get("local")
    if not local or local.get("type") != "Identifier":
        return None
    ident = Identifier(local["name"])
    if node_type == "ImportSpecifier":
        return ImportSpecifier(imported=_name_node(node.get("imported")) or ident, local=ident)
    if node_type == "ImportDefaultSpecifier":
        return ImportDefaultSpecifier(local=ident)
    if node_type == "ImportNamespaceSpecifier":
        return ImportNamespaceSpecifier(local=ident)
    return None


def _statement(node: Node) -> Statement | None:
    node_type = node.get("type")
    source = _string_value(node.get("source"))

    if node_type == "ImportDeclaration" and source is not None:
        specifiers = [_import_clause(s) for s in node.get("specifiers") or []]
        return ImportDeclaration(source=source, specifiers=[s for s in specifiers if s])

    if node_type == "ExportNamedDeclaration":
        clauses = [_export_clause(s) for s in node.get("specifiers") or []]
        return ExportNamedDeclaration(
            declaration=_declaration(node.get("declaration")),
            specifiers=[c for c in clauses if c],
            source=source,
        )

    if node_type == "ExportDefaultDeclaration":
        return ExportDefaultDeclaration(declaration=_declaration(node.get("declaration")))

    if node_type == "ExportAllDeclaration" and source is not None:
        exported = _name_node(node.get("exported"))
        if exported is not None:
            # export * as ns from "..."
            return ExportNamedDeclaration(
                specifiers=[ExportNamespaceSpecifier(exported=exported)],
                source=source,
            )
        return ExportAllDeclaration(source=source)

    if node_type == "TSExportAssignment":
        return ModuleExportsAssignment(value=_expression(node.get("expression")))

    if node_type == "ExpressionStatement":
        expr = node.get("expression") or {}
        if expr.get("type") == "AssignmentExpression" and expr.get("operator", "=") == "=":
            target = _commonjs_target(expr.get("left"))
            if target is not None:
                whole, name = target
                value = _expression(expr.get("right"))
                if whole:
                    return ModuleExportsAssignment(value=value)
                return ExportsPropertyAssignment(name=name, value=value)

    return None


def _exported_value(node: Node | None) -> list[Node]:
    """Children of an exported value that count as uses.

    A bare identifier, or an identifier under an object key, is the export
    itself and not a use of the name.
    """
    if not node or node.get("type") == "Identifier":
        return []
    if node.get("type") != "ObjectExpression":
        return [node]
    children: list[Node] = []
    for prop in node.get("properties") or []:
        if prop.get("type") in ("ObjectProperty", "Property"):
            if prop.get("computed") and prop.get("key"):
                children.append(prop["key"])
            value = prop.get("value")
            if value and value.get("type") != "Identifier":
                children.append(value)
        else:
            children.append(prop)
    return children


def _roots(body: list[Any]) -> list[Node]:
    """Top-level nodes to scan for identifier usages."""
    roots: list[Node] = []
    for node in body:
        if not isinstance(node, dict):
            continue
        node_type = node.get("type")
        if node_type in ("ImportDeclaration", "ExportAllDeclaration"):
            continue
        if node_type == "ExportNamedDeclaration":
            if node.get("source") is None and node.get("declaration"):
                roots.append(node["declaration"])
            continue
        if node_type == "ExportDefaultDeclaration":
            roots.extend(_exported_value(node.get("declaration")))
            continue
        if node_type == "TSExportAssignment":
            roots.extend(_exported_value(node.get("expression")))
            continue
        if node_type == "ExpressionStatement":
            expr = node.get("expression") or {}
            if expr.get("type") == "AssignmentExpression" and _commonjs_target(expr.get("left")):
                roots.extend(_exported_value(expr.get("right")))
                continue
        roots.append(node)
    return roots


def count_references(body: list[Any]) -> dict[str, int]:
    """Count identifier usages in a program body.

    Declared names, object keys, labels and non-computed member properties
    are not usages. Import and export specifiers are not walked at all.
    """
    counts: Counter[str] = Counter()
    stack: list[Any] = list(reversed(_roots(body)))

    while stack:
        node = stack.pop()
        if isinstance(node, list):
            stack.extend(reversed(node))
            continue
        if not isinstance(node, dict):
            continue

        node_type = node.get("type")
        if node_type in ("Identifier", "JSXIdentifier"):
            counts[node["name"]] += 1
            continue
        if node_type in ("MemberExpression", "OptionalMemberExpression", "JSXMemberExpression"):
            stack.append(node.get("object"))
            if node.get("computed"):
                stack.append(node.get("property"))
            continue
        if node_type == "JSXAttribute":
            stack.append(node.get("value"))
            continue
        if node_type in _PROPERTY_TYPES and node.get("computed"):
            stack.append(node.get("key"))

        for field, value in node.items():
            if field in _SKIP_FIELDS:
                continue
            if isinstance(value, (dict, list)):
                stack.append(value)
        # default values and destructuring inside parameters
        for param in node.get("params") or []:
            if isinstance(param, dict) and param.get("type") != "Identifier":
                stack.append(param)

    return dict(counts)
