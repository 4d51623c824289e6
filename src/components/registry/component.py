"""
Registry component - In-memory token registry.

Holds every declared resource for one build, keyed by (category, name)
and ordered by ingestion.

Invariants:
- I1: (category, human_name) is unique; the same name may appear once
  per category
- I2: Ingestion order is preserved for deterministic emission
- I3: A sealed registry rejects all further registration
- I4: A failed registration leaves existing entries unchanged
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from src.core.entities import Category, ResourceManifestEntry
from src.core.errors import DuplicateNameError, SealedRegistryError


class TokenRegistry:
    """Ordered store of manifest entries for one generation pass."""

    def __init__(self, entries: Iterable[ResourceManifestEntry] | None = None) -> None:
        self._entries: list[ResourceManifestEntry] = []
        self._keys: set[tuple[Category, str]] = set()
        self._sealed = False
        if entries is not None:
            self.register_all(entries)

    def register(self, entry: ResourceManifestEntry) -> ResourceManifestEntry:
        """
        Add an entry.

        Raises:
            SealedRegistryError: registry has been sealed
            DuplicateNameError: (category, name) already registered
        """
        if self._sealed:
            raise SealedRegistryError(entry.human_name)
        if entry.key in self._keys:
            raise DuplicateNameError(entry.category, entry.human_name)

        self._keys.add(entry.key)
        self._entries.append(entry)
        return entry

    def register_all(self, entries: Iterable[ResourceManifestEntry]) -> int:
        """Register entries in order, stopping at the first failure."""
        count = 0
        for entry in entries:
            self.register(entry)
            count += 1
        return count

    def seal(self) -> None:
        """Make the registry read-only. Sealing twice is a no-op."""
        self._sealed = True

    @property
    def is_sealed(self) -> bool:
        return self._sealed

    def all(self) -> tuple[ResourceManifestEntry, ...]:
        """All entries in ingestion order."""
        return tuple(self._entries)

    def by_category(self, category: Category) -> tuple[ResourceManifestEntry, ...]:
        return tuple(e for e in self._entries if e.category is category)

    def get(self, category: Category, name: str) -> ResourceManifestEntry | None:
        if (category, name) not in self._keys:
            return None
        for entry in self._entries:
            if entry.key == (category, name):
                return entry
        return None

    def __contains__(self, key: object) -> bool:
        return key in self._keys

    def __iter__(self) -> Iterator[ResourceManifestEntry]:
        return iter(self.all())

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        state = "sealed" if self._sealed else "open"
        return f"<TokenRegistry {len(self)} entries, {state}>"


def create_registry(
    entries: Iterable[ResourceManifestEntry] | None = None,
    *,
    seal: bool = False,
) -> TokenRegistry:
    """Factory for a registry, optionally sealed after ingesting entries."""
    registry = TokenRegistry(entries)
    if seal:
        registry.seal()
    return registry
