"""Unit tests for export statement normalization."""

import pytest

from exportgraph.core.models import ExportKind, ExportPair
from exportgraph.core.normalizer import extract_object_pairs, normalize_export
from exportgraph.languages.models import (
    AssignmentExpression,
    ExportAllDeclaration,
    ExportDefaultDeclaration,
    ExportNamedDeclaration,
    ExportNamespaceSpecifier,
    ExportsPropertyAssignment,
    ExportSpecifier,
    Identifier,
    ModuleExportsAssignment,
    NamedDeclaration,
    ObjectExpression,
    ObjectProperty,
    OpaqueNode,
    SpreadElement,
    StringLiteral,
    VariableDeclaration,
    VariableDeclarator,
)


def prop(key: str, value: object = None, computed: bool = False) -> ObjectProperty:
    """Create an object property with an identifier key."""
    return ObjectProperty(key=Identifier(key), value=value, computed=computed)


class TestObjectPairs:
    """Tests for object-literal pair extraction."""

    def test_shorthand_property(self) -> None:
        assert extract_object_pairs([prop("a", Identifier("a"))]) == [ExportPair("a", "a")]

    def test_renamed_property(self) -> None:
        assert extract_object_pairs([prop("a", Identifier("b"))]) == [ExportPair("b", "a")]

    def test_literal_value_uses_key(self) -> None:
        pairs = extract_object_pairs([prop("x", OpaqueNode("NumericLiteral"))])
        assert pairs == [ExportPair("x", "x")]

    def test_named_function_value(self) -> None:
        pairs = extract_object_pairs([prop("run", NamedDeclaration(Identifier("runTask")))])
        assert pairs == [ExportPair("runTask", "run")]

    def test_anonymous_function_value_uses_key(self) -> None:
        pairs = extract_object_pairs([prop("run", NamedDeclaration(None))])
        assert pairs == [ExportPair("run", "run")]

    def test_string_literal_key(self) -> None:
        pairs = extract_object_pairs(
            [ObjectProperty(key=StringLiteral("some-name"), value=Identifier("impl"))]
        )
        assert pairs == [ExportPair("impl", "some-name")]

    def test_keyless_entries_skipped(self) -> None:
        properties = [
            prop("a", Identifier("a")),
            SpreadElement(Identifier("rest")),
            prop("b", Identifier("c"), computed=True),
            ObjectProperty(key=OpaqueNode("TemplateLiteral")),
            prop("d"),
        ]
        pairs = extract_object_pairs(properties)
        assert pairs == [ExportPair("a", "a"), ExportPair("d", "d")]

    def test_pair_count_matches_keyed_properties(self) -> None:
        properties = [prop(f"k{i}", Identifier(f"v{i}")) for i in range(5)]
        properties.insert(2, SpreadElement())
        assert len(extract_object_pairs(properties)) == 5


class TestModuleExports:
    """Tests for CommonJS assignments."""

    def test_bare_name(self) -> None:
        result = normalize_export(ModuleExportsAssignment(Identifier("foo")))
        assert result.pairs == [ExportPair("foo", "default")]
        assert result.kind == ExportKind.PLAIN
        assert result.fallback is False

    def test_object_literal(self) -> None:
        statement = ModuleExportsAssignment(
            ObjectExpression([prop("a", Identifier("a")), prop("b", Identifier("c"))])
        )
        result = normalize_export(statement)
        assert result.pairs == [ExportPair("a", "a"), ExportPair("c", "b")]
        assert result.kind == ExportKind.OBJECT_LITERAL

    def test_other_value_falls_back(self) -> None:
        result = normalize_export(ModuleExportsAssignment(OpaqueNode("CallExpression")))
        assert result.pairs == [ExportPair("default", "default")]
        assert result.fallback is True

    def test_property_assignment(self) -> None:
        result = normalize_export(ExportsPropertyAssignment("x", Identifier("impl")))
        assert result.pairs == [ExportPair("impl", "x")]
        assert result.kind == ExportKind.PLAIN

    def test_property_assignment_with_literal(self) -> None:
        result = normalize_export(ExportsPropertyAssignment("x", OpaqueNode("NumericLiteral")))
        assert result.pairs == [ExportPair("x", "x")]


class TestNamedExports:
    """Tests for ``export`` statements with clauses or declarations."""

    def test_clause_list(self) -> None:
        statement = ExportNamedDeclaration(
            specifiers=[
                ExportSpecifier(exported=Identifier("b"), local=Identifier("a")),
                ExportSpecifier(exported=Identifier("c")),
            ]
        )
        result = normalize_export(statement)
        assert result.pairs == [ExportPair("a", "b"), ExportPair("c", "c")]
        assert result.kind == ExportKind.PLAIN

    def test_namespace_clause(self) -> None:
        statement = ExportNamedDeclaration(
            specifiers=[ExportNamespaceSpecifier(Identifier("ns"))], source="./x"
        )
        assert normalize_export(statement).pairs == [ExportPair("ns", "ns")]

    def test_variable_declaration(self) -> None:
        statement = ExportNamedDeclaration(
            declaration=VariableDeclaration(
                [
                    VariableDeclarator(Identifier("a")),
                    VariableDeclarator(OpaqueNode("ObjectPattern")),
                    VariableDeclarator(Identifier("b")),
                ]
            )
        )
        assert normalize_export(statement).pairs == [ExportPair("a", "a"), ExportPair("b", "b")]

    def test_named_class(self) -> None:
        statement = ExportNamedDeclaration(declaration=NamedDeclaration(Identifier("Foo"), "class"))
        assert normalize_export(statement).pairs == [ExportPair("Foo", "Foo")]

    def test_is_default_override(self) -> None:
        statement = ExportNamedDeclaration(declaration=Identifier("x"))
        assert normalize_export(statement, is_default=True).pairs == [ExportPair("x", "default")]

    def test_empty_export(self) -> None:
        result = normalize_export(ExportNamedDeclaration())
        assert result.pairs == []
        assert result.fallback is False


class TestDefaultExports:
    """Tests for ``export default``."""

    def test_bare_name(self) -> None:
        result = normalize_export(ExportDefaultDeclaration(Identifier("foo")))
        assert result.pairs == [ExportPair("foo", "default")]
        assert result.kind == ExportKind.PLAIN

    @pytest.mark.parametrize("name", ["a", "Widget", "$value"])
    def test_bare_name_gives_one_pair(self, name: str) -> None:
        result = normalize_export(ExportDefaultDeclaration(Identifier(name)))
        assert result.pairs == [ExportPair(name, "default")]

    def test_named_function(self) -> None:
        result = normalize_export(ExportDefaultDeclaration(NamedDeclaration(Identifier("foo"))))
        assert result.pairs == [ExportPair("foo", "default")]

    def test_assignment(self) -> None:
        statement = ExportDefaultDeclaration(
            AssignmentExpression(Identifier("x"), OpaqueNode("ArrowFunctionExpression"))
        )
        assert normalize_export(statement).pairs == [ExportPair("x", "default")]

    def test_object_literal(self) -> None:
        statement = ExportDefaultDeclaration(
            ObjectExpression(
                [prop("x", OpaqueNode("NumericLiteral")), prop("y", Identifier("foo"))]
            )
        )
        result = normalize_export(statement)
        assert result.pairs == [ExportPair("x", "x"), ExportPair("foo", "y")]
        assert result.kind == ExportKind.OBJECT_LITERAL

    def test_anonymous_function_falls_back(self) -> None:
        result = normalize_export(ExportDefaultDeclaration(NamedDeclaration(None)))
        assert result.pairs == [ExportPair("default", "default")]
        assert result.fallback is True

    def test_unknown_expression_falls_back(self) -> None:
        result = normalize_export(ExportDefaultDeclaration(OpaqueNode("ArrayExpression")))
        assert result.fallback is True
        assert result.kind == ExportKind.PLAIN

    def test_unrelated_statement_falls_back(self) -> None:
        assert normalize_export(ExportAllDeclaration("./x")).fallback is True
