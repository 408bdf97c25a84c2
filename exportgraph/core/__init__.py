"""
Core module: data models, exceptions, and the symbol graph.

This module provides the foundational types:

Models (models.py):
    - ExportBinding: A symbol exported by one file, shared along alias chains
    - ImportBinding: A name a file pulls in from another file
    - FileRecord: Per-file import table and export table id
    - ImportKind/ExportKind/BindingKind/SkipReason: Enums for categorization

Exceptions (exceptions.py):
    - ExportGraphError: Base exception for all exportgraph errors
    - ParseError: Syntax tree dump could not be read
    - UnrecognizedShapeError / MalformedPairError: Statement could not be bound

Graph (graph/):
    - SymbolGraph: Arena of export bindings plus per-file records
"""

from exportgraph.core.exceptions import (
    ConfigError,
    ExportGraphError,
    FileNotRegisteredError,
    MalformedPairError,
    ParseError,
    UnrecognizedShapeError,
    UnresolvedReferenceError,
)
from exportgraph.core.graph import SymbolGraph
from exportgraph.core.models import (
    AnalysisStats,
    BindingKind,
    BindOutcome,
    Diagnostic,
    ExportBinding,
    ExportKind,
    ExportPair,
    FileRecord,
    ImportBinding,
    ImportKind,
    NormalizedExport,
    ReferenceCounter,
    SkipReason,
)

__all__ = [
    # Models
    "ExportBinding",
    "ImportBinding",
    "FileRecord",
    "ExportPair",
    "NormalizedExport",
    "BindOutcome",
    "Diagnostic",
    "ReferenceCounter",
    "AnalysisStats",
    "ImportKind",
    "ExportKind",
    "BindingKind",
    "SkipReason",
    # Exceptions
    "ExportGraphError",
    "ParseError",
    "ConfigError",
    "UnrecognizedShapeError",
    "MalformedPairError",
    "FileNotRegisteredError",
    "UnresolvedReferenceError",
    # Graph
    "SymbolGraph",
]
