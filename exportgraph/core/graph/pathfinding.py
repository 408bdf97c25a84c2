"""Follow re-export hops back to the declaring file."""

from __future__ import annotations

from typing import TYPE_CHECKING

from exportgraph.core.graph.models import OriginChain
from exportgraph.core.models import NAMESPACE_EXPORT

if TYPE_CHECKING:
    from exportgraph.core.graph.base import SymbolGraph


def origin_chain(graph: SymbolGraph, address: str, name: str) -> OriginChain | None:
    """Trace ``name`` exported by ``address`` to where it was declared.

    Returns None if the file does not export the name. O(chain length).
    """
    if not graph.has_file(address):
        return None
    binding = graph.lookup(address, name)
    if binding is None:
        return None

    steps: list[tuple[str, str]] = [(address, name)]
    current = (address, name)
    while current[1] != NAMESPACE_EXPORT:
        source = graph.alias_source(graph.namespace(current[0]), current[1])
        if source is None or source in steps:
            break
        steps.append(source)
        current = source

    declared = (binding.file, binding.name)
    if steps[-1] != declared:
        steps.append(declared)
    return OriginChain(steps=steps, binding=binding)
