"""Graph analysis: re-export dependencies, cycles, resolution order, unused exports."""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING

from exportgraph.core.graph.models import UnusedExport
from exportgraph.core.models import BindingKind

if TYPE_CHECKING:
    from exportgraph.core.graph.base import SymbolGraph
    from exportgraph.core.models import ExportBinding


def reexport_dependencies(graph: SymbolGraph) -> dict[str, set[str]]:
    """Map each file to the files its re-exports read from, resolved or not. O(L)."""
    deps: dict[str, set[str]] = {address: set() for address in graph.files}
    for binding in graph.bindings:
        for name in binding.members:
            source = graph.alias_source(binding, name)
            if source is not None:
                deps.setdefault(binding.file, set()).add(source[0])
    for link in graph.pending_links:
        deps.setdefault(link.file, set()).add(link.import_binding.source_address)
    for star in graph.star_links:
        deps.setdefault(star.file, set()).add(star.source_address)
    return deps


def find_reexport_cycles(
    graph: SymbolGraph,
    max_cycles: int = 10,
    dependencies: dict[str, set[str]] | None = None,
) -> list[list[str]]:
    """Find cycles of files re-exporting from each other."""
    deps = dependencies if dependencies is not None else reexport_dependencies(graph)
    cycles: list[list[str]] = []
    visited: set[str] = set()
    stack: list[str] = []
    stack_set: set[str] = set()

    def dfs(address: str) -> None:
        if len(cycles) >= max_cycles:
            return

        visited.add(address)
        stack.append(address)
        stack_set.add(address)

        for source in sorted(deps.get(address, ())):
            if source not in deps:
                continue
            if source not in visited:
                dfs(source)
            elif source in stack_set:
                idx = stack.index(source)
                cycles.append(stack[idx:])

        stack.pop()
        stack_set.remove(address)

    for address in deps:
        if address not in visited:
            dfs(address)

    return cycles


def dependency_order(
    graph: SymbolGraph,
    dependencies: dict[str, set[str]] | None = None,
) -> list[str]:
    """Order files so that re-export sources come before re-exporters.

    Kahn's algorithm, O(V + E). Files caught in cycles cannot be ordered and
    are appended in registration order.
    """
    deps = dependencies if dependencies is not None else reexport_dependencies(graph)
    dependents: dict[str, list[str]] = {address: [] for address in deps}
    in_degree: dict[str, int] = {}
    for address, sources in deps.items():
        known = [s for s in sources if s in deps and s != address]
        in_degree[address] = len(known)
        for source in known:
            dependents[source].append(address)

    queue: deque[str] = deque(a for a, d in in_degree.items() if d == 0)
    order: list[str] = []
    while queue:
        address = queue.popleft()
        order.append(address)
        for dependent in dependents[address]:
            in_degree[dependent] -= 1
            if in_degree[dependent] == 0:
                queue.append(dependent)

    placed = set(order)
    order.extend(a for a in deps if a not in placed)
    return order


def get_entry_files(graph: SymbolGraph) -> list[str]:
    return [address for address, record in graph.files.items() if record.is_entry_file]


def _live_bindings(graph: SymbolGraph) -> set[int]:
    """Ids of bindings that are reachable from an entry or used elsewhere.

    Members of a live container (namespace or default object) are live too:
    a namespace handed to another file may be read under any name.
    """
    live: set[int] = set()
    queue: deque[ExportBinding] = deque(
        b
        for b in graph.bindings
        if b.is_reachable_from_entry or (b.is_container and b.referencing_files())
    )
    while queue:
        binding = queue.popleft()
        if binding.id in live:
            continue
        live.add(binding.id)
        for member_id in binding.members.values():
            if member_id not in live:
                queue.append(graph.get_binding(member_id))
    return live


def find_unused_exports(graph: SymbolGraph) -> list[UnusedExport]:
    """List each file's own exports that nothing outside the file uses.

    Only entries whose binding is owned by the file are reported, so a
    re-export chain reports its symbol once, at the declaring file.
    """
    live = _live_bindings(graph)
    unused: list[UnusedExport] = []
    for address in graph.files:
        for name, binding in graph.export_table(address).items():
            if binding.file != address or _in_use(graph, binding, live):
                continue
            unused.append(UnusedExport(file=address, name=name, binding=binding))
    return unused


def _in_use(graph: SymbolGraph, binding: ExportBinding, live: set[int]) -> bool:
    """Live, referenced, or a default object with a member in use."""
    seen: set[int] = set()
    stack = [binding]
    while stack:
        current = stack.pop()
        if current.id in seen:
            continue
        seen.add(current.id)
        if current.id in live or current.referencing_files():
            return True
        if current.kind == BindingKind.DEFAULT_OBJECT:
            stack.extend(graph.get_binding(member_id) for member_id in current.members.values())
    return False
