"""
Syntax adapters: Turn parser output into tagged module syntax.

This module provides the layer between an external JavaScript parser and the
core binder.

Components:
    - SyntaxAdapter: Protocol defining the adapter interface
    - ESTreeAdapter: Reads Babel/ESTree JSON dumps
    - ModuleSyntax: Export/import statements and identifier usages of a file
    - resolve_module_address: Maps import specifiers to file addresses

Every export/import statement is assigned one tagged variant (models.py)
once, by the adapter; the core never inspects raw parser nodes.
"""

from exportgraph.languages.base import SyntaxAdapter
from exportgraph.languages.estree import ESTreeAdapter
from exportgraph.languages.models import ModuleSyntax
from exportgraph.languages.resolution import resolve_module_address

__all__ = [
    "SyntaxAdapter",
    "ESTreeAdapter",
    "ModuleSyntax",
    "resolve_module_address",
]
