"""Tests for error handling paths."""

import json
from pathlib import Path

import pytest

from exportgraph.core.analyzer import Analyzer
from exportgraph.core.exceptions import (
    ConfigError,
    ExportGraphError,
    FileNotRegisteredError,
    MalformedPairError,
    ParseError,
    UnrecognizedShapeError,
    UnresolvedReferenceError,
)
from exportgraph.core.models import Diagnostic, SkipReason
from exportgraph.languages.estree import ESTreeAdapter


def program(*body: dict) -> dict:
    return {"type": "Program", "sourceType": "module", "body": list(body)}


class TestExceptionHierarchy:
    """All errors share one base class."""

    @pytest.mark.parametrize(
        "error",
        [
            ParseError,
            ConfigError,
            UnrecognizedShapeError,
            MalformedPairError,
            FileNotRegisteredError,
            UnresolvedReferenceError,
        ],
    )
    def test_subclass(self, error: type[Exception]) -> None:
        assert issubclass(error, ExportGraphError)

    def test_diagnostic_str(self) -> None:
        diagnostic = Diagnostic("a.js", "x", SkipReason.CYCLIC_ALIAS, "through b.js")
        assert str(diagnostic) == "a.js: x skipped (cyclic_alias): through b.js"


class TestAdapterErrors:
    """Tests for adapter error handling."""

    def test_invalid_json(self, tmp_path: Path) -> None:
        file_path = tmp_path / "bad.js.json"
        file_path.write_text("{ not json")

        with pytest.raises(ParseError) as exc_info:
            ESTreeAdapter().parse(file_path, "bad.js")

        assert "Invalid JSON" in str(exc_info.value)

    def test_encoding_error(self, tmp_path: Path) -> None:
        file_path = tmp_path / "bad.js.json"
        file_path.write_bytes(b"\xff\xfe invalid utf-8 \x80\x81")

        with pytest.raises(ParseError) as exc_info:
            ESTreeAdapter().parse(file_path, "bad.js")

        assert "Cannot read" in str(exc_info.value)

    @pytest.mark.parametrize("tree", [[], {"type": "File"}, {"type": "Identifier", "name": "x"}])
    def test_missing_program(self, tree: object) -> None:
        with pytest.raises(ParseError) as exc_info:
            ESTreeAdapter().convert("a.js", tree)

        assert "No program" in str(exc_info.value)

    def test_empty_program(self) -> None:
        module = ESTreeAdapter().convert("a.js", program())
        assert module.statements == []
        assert module.references == {}


class TestAnalyzerErrors:
    """Tests for errors collected during analysis."""

    def test_bad_dump_is_collected(self, tmp_path: Path) -> None:
        (tmp_path / "good.js.json").write_text(json.dumps(program()))
        (tmp_path / "bad.js.json").write_text("{ not json")

        stats = Analyzer().analyze_directory(tmp_path)

        assert stats.files == 1
        assert len(stats.errors) == 1
        assert "bad.js.json" in stats.errors[0]

    def test_unrecognized_shape_is_flagged(self) -> None:
        analyzer = Analyzer()
        analyzer.add_tree(
            "a.js",
            program(
                {
                    "type": "ExportDefaultDeclaration",
                    "declaration": {"type": "ArrayExpression", "elements": []},
                }
            ),
        )
        stats = analyzer.analyze()

        assert [d.reason for d in stats.diagnostics] == [SkipReason.UNRECOGNIZED_SHAPE]
        assert "default" in analyzer.graph.export_table("a.js")

    def test_failures_do_not_cross_files(self) -> None:
        analyzer = Analyzer()
        analyzer.add_tree(
            "a.js",
            program(
                {
                    "type": "ExportNamedDeclaration",
                    "specifiers": [
                        {
                            "type": "ExportSpecifier",
                            "local": {"type": "Identifier", "name": "x"},
                            "exported": {"type": "Identifier", "name": "x"},
                        }
                    ],
                    "source": {"type": "StringLiteral", "value": "./missing"},
                }
            ),
        )
        analyzer.add_tree(
            "b.js",
            program(
                {
                    "type": "ExportNamedDeclaration",
                    "declaration": {
                        "type": "FunctionDeclaration",
                        "id": {"type": "Identifier", "name": "ok"},
                        "params": [],
                        "body": {"type": "BlockStatement", "body": []},
                    },
                    "specifiers": [],
                    "source": None,
                }
            ),
        )
        stats = analyzer.analyze()

        assert [(d.file, d.reason) for d in stats.diagnostics] == [
            ("a.js", SkipReason.UNRESOLVED_FILE)
        ]
        assert analyzer.graph.lookup("b.js", "ok") is not None
