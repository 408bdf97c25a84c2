"""Core SymbolGraph class: an arena of export bindings plus per-file records."""

from __future__ import annotations

from exportgraph.core.exceptions import FileNotRegisteredError
from exportgraph.core.graph.models import AliasLink, StarLink
from exportgraph.core.models import (
    DEFAULT_EXPORT,
    NAMESPACE_EXPORT,
    BindingKind,
    ExportBinding,
    FileRecord,
)


class SymbolGraph:
    """Cross-file symbol table.

    Bindings live in an arena and are addressed by id. An export slot (a
    container binding plus a name) stores the id of the binding it exports,
    so re-exported slots in different files resolve to the very same
    ``ExportBinding`` object.
    """

    __slots__ = ("_bindings", "_files", "_pending", "_stars", "_aliases")

    def __init__(self) -> None:
        self._bindings: list[ExportBinding] = []
        self._files: dict[str, FileRecord] = {}
        self._pending: dict[tuple[int, str], AliasLink] = {}
        self._stars: list[StarLink] = []
        self._aliases: dict[tuple[int, str], tuple[str, str]] = {}

    def add_file(self, address: str, is_entry_file: bool = False) -> FileRecord:
        """Register a file and create its export table. O(1)."""
        if address in self._files:
            return self._files[address]
        namespace = self.new_binding(
            address, NAMESPACE_EXPORT, BindingKind.NAMESPACE, reachable=is_entry_file
        )
        record = FileRecord(address=address, is_entry_file=is_entry_file, namespace_id=namespace.id)
        self._files[address] = record
        return record

    def has_file(self, address: str) -> bool:
        return address in self._files

    def get_file(self, address: str) -> FileRecord:
        """Get a file record by address."""
        record = self._files.get(address)
        if record is None:
            raise FileNotRegisteredError(f"File '{address}' is not part of the project")
        return record

    def new_binding(
        self,
        file: str,
        name: str,
        kind: BindingKind = BindingKind.SYMBOL,
        reachable: bool = False,
    ) -> ExportBinding:
        """Create a binding owned by ``file``. O(1)."""
        binding = ExportBinding(
            id=len(self._bindings),
            file=file,
            name=name,
            kind=kind,
            is_reachable_from_entry=reachable,
        )
        self._bindings.append(binding)
        return binding

    def get_binding(self, binding_id: int) -> ExportBinding:
        return self._bindings[binding_id]

    def namespace(self, address: str) -> ExportBinding:
        """The export table node of a file."""
        return self._bindings[self.get_file(address).namespace_id]

    def member(self, container: ExportBinding, name: str) -> ExportBinding | None:
        binding_id = container.members.get(name)
        return None if binding_id is None else self._bindings[binding_id]

    def lookup(self, address: str, name: str) -> ExportBinding | None:
        """Get the binding a file exports under ``name``, if bound."""
        return self.member(self.namespace(address), name)

    def export_table(self, address: str) -> dict[str, ExportBinding]:
        """A file's export table as a name -> binding mapping."""
        namespace = self.namespace(address)
        return {name: self._bindings[bid] for name, bid in namespace.members.items()}

    def default_container(self, record: FileRecord) -> ExportBinding:
        """Get or create the file's default-export container."""
        namespace = self._bindings[record.namespace_id]
        current = self.member(namespace, DEFAULT_EXPORT)
        if current is not None and current.file == record.address:
            return current
        container = self.new_binding(
            record.address,
            DEFAULT_EXPORT,
            BindingKind.DEFAULT_OBJECT,
            reachable=record.is_entry_file,
        )
        self.assign(namespace, DEFAULT_EXPORT, container)
        return container

    def assign(
        self,
        container: ExportBinding,
        name: str,
        binding: ExportBinding,
        source: tuple[str, str] | None = None,
    ) -> None:
        """Point an export slot at ``binding``, replacing whatever was there.

        ``source`` records the (file, name) the slot was re-exported from.
        """
        slot = (container.id, name)
        container.members[name] = binding.id
        self._pending.pop(slot, None)
        if source is None:
            self._aliases.pop(slot, None)
        else:
            self._aliases[slot] = source

    def defer(self, link: AliasLink) -> None:
        """Leave an export slot open until its source binding is known."""
        container = self._bindings[link.container_id]
        container.members.pop(link.name, None)
        self._aliases.pop(link.slot, None)
        self._pending[link.slot] = link

    def is_pending(self, container: ExportBinding, name: str) -> bool:
        return (container.id, name) in self._pending

    def add_star(self, link: StarLink) -> None:
        self._stars.append(link)

    def alias_source(self, container: ExportBinding, name: str) -> tuple[str, str] | None:
        """The (file, name) an export slot was re-exported from, if any."""
        return self._aliases.get((container.id, name))

    @property
    def pending_links(self) -> list[AliasLink]:
        return list(self._pending.values())

    @property
    def star_links(self) -> list[StarLink]:
        return list(self._stars)

    @property
    def files(self) -> dict[str, FileRecord]:
        return self._files

    @property
    def bindings(self) -> list[ExportBinding]:
        return self._bindings

    @property
    def num_files(self) -> int:
        return len(self._files)

    @property
    def num_bindings(self) -> int:
        return len(self._bindings)

    def __repr__(self) -> str:
        return (
            f"SymbolGraph(files={self.num_files}, bindings={self.num_bindings}, "
            f"pending={len(self._pending)})"
        )
