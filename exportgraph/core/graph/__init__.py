"""
Cross-file symbol graph and the algorithms that run over it.

Data Structures:
    - SymbolGraph: arena of export bindings plus per-file records
    - AliasLink / StarLink: re-exports waiting for their source binding
    - OriginChain: the hops from a re-exported name to its declaration

Algorithms:
    - analysis: re-export dependencies, cycles, resolution order, unused exports
    - pathfinding: origin_chain
"""

from exportgraph.core.graph.base import SymbolGraph
from exportgraph.core.graph.models import AliasLink, OriginChain, StarLink, UnusedExport

__all__ = [
    "SymbolGraph",
    "AliasLink",
    "StarLink",
    "OriginChain",
    "UnusedExport",
]
