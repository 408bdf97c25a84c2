"""exportgraph custom exceptions."""


class ExportGraphError(Exception):
    """Base exception for exportgraph errors."""


class ParseError(ExportGraphError):
    """A syntax tree dump could not be read or converted."""


class ConfigError(ExportGraphError):
    """Invalid or unreadable analysis settings."""


class UnrecognizedShapeError(ExportGraphError):
    """A syntax node does not match any supported statement shape."""


class MalformedPairError(ExportGraphError):
    """An export pair is missing its local or exported name."""


class FileNotRegisteredError(ExportGraphError):
    """A file address is not part of the analyzed project."""


class UnresolvedReferenceError(ExportGraphError):
    """A re-exported symbol could not be found in its source file."""
