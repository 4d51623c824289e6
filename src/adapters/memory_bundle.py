"""
In-memory bundle adapter.

Used in development and tests in place of a packaged asset catalog.
Satisfies BundlePort and BundleLoaderPort.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable, Mapping

from src.core.entities import (
    BASE_VARIANT,
    BundleIdentity,
    Category,
    ColorValue,
    ImageValue,
    ResourceManifestEntry,
)
from src.core.errors import BundleUnavailableError

Value = ColorValue | ImageValue | None


class InMemoryBundle:
    """Bundle backed by a dict; writes are lock-guarded."""

    def __init__(self, bundle_id: str) -> None:
        self._bundle_id = bundle_id
        self._lock = threading.Lock()
        self._values: dict[tuple[Category, str], dict[str, Value]] = {}
        self._revision = 0

    @property
    def bundle_id(self) -> str:
        return self._bundle_id

    @property
    def revision(self) -> int:
        with self._lock:
            return self._revision

    def add(
        self,
        name: str,
        category: Category = Category.COLOR,
        values: Mapping[str, Value] | None = None,
    ) -> None:
        """Add or replace a resource; default is a single base variant."""
        variants = dict(values) if values else {BASE_VARIANT: None}
        with self._lock:
            self._values[(category, name)] = variants
            self._revision += 1

    def remove(self, name: str, category: Category = Category.COLOR) -> None:
        with self._lock:
            if self._values.pop((category, name), None) is not None:
                self._revision += 1

    def _find(self, name: str, category: Category | None) -> dict[str, Value] | None:
        with self._lock:
            if category is not None:
                return self._values.get((category, name))
            for cat in Category:
                if (cat, name) in self._values:
                    return self._values[(cat, name)]
        return None

    def has(self, name: str, category: Category | None = None) -> bool:
        return self._find(name, category) is not None

    def variants(self, name: str, category: Category | None = None) -> frozenset[str]:
        found = self._find(name, category)
        return frozenset(found) if found else frozenset()

    def get(self, name: str, variant: str, category: Category | None = None) -> Value:
        found = self._find(name, category)
        return found.get(variant) if found else None

    def entries(self) -> list[ResourceManifestEntry]:
        with self._lock:
            items = list(self._values.items())
        return [
            ResourceManifestEntry(human_name=name, category=cat, variants=frozenset(values))
            for (cat, name), values in items
        ]


class InMemoryBundleLoader:
    """Loader over a fixed set of in-memory bundles."""

    def __init__(self, bundles: Iterable[InMemoryBundle] = ()) -> None:
        self._bundles = {b.bundle_id: b for b in bundles}

    def add(self, bundle: InMemoryBundle) -> None:
        self._bundles[bundle.bundle_id] = bundle

    def open(self, identity: BundleIdentity) -> InMemoryBundle:
        bundle = self._bundles.get(identity.bundle_id)
        if bundle is None:
            raise BundleUnavailableError(identity.bundle_id)
        return bundle
