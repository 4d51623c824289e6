"""
Asset catalog bundle adapter.

Implements BundlePort over an asset catalog directory and
BundleLoaderPort over a bundle-id -> directory mapping.

Catalog contents are read once when a bundle is opened; opened bundles
are immutable and shared between threads. Each read gets a new revision
so cached handles from an earlier read are not reused.
"""

from __future__ import annotations

import itertools
import logging
import threading
from collections.abc import Iterable, Mapping
from pathlib import Path

from src.core.entities import (
    BundleIdentity,
    Category,
    ColorValue,
    ImageValue,
    ResourceManifestEntry,
)
from src.core.errors import BundleUnavailableError, ManifestError
from src.manifest.scan import CatalogResource, read_catalog

logger = logging.getLogger(__name__)


class CatalogBundle:
    """Read-only view of one asset catalog."""

    def __init__(
        self,
        bundle_id: str,
        resources: Iterable[CatalogResource],
        revision: int = 0,
    ) -> None:
        self._bundle_id = bundle_id
        self._revision = revision
        self._resources: dict[tuple[Category, str], CatalogResource] = {}
        for resource in resources:
            self._resources[resource.entry.key] = resource

    @classmethod
    def from_path(cls, bundle_id: str, root: Path, revision: int = 0) -> CatalogBundle:
        return cls(bundle_id, read_catalog(root), revision)

    @property
    def bundle_id(self) -> str:
        return self._bundle_id

    @property
    def revision(self) -> int:
        return self._revision

    def _find(self, name: str, category: Category | None) -> CatalogResource | None:
        if category is not None:
            return self._resources.get((category, name))
        for cat in Category:
            resource = self._resources.get((cat, name))
            if resource is not None:
                return resource
        return None

    def has(self, name: str, category: Category | None = None) -> bool:
        return self._find(name, category) is not None

    def variants(self, name: str, category: Category | None = None) -> frozenset[str]:
        resource = self._find(name, category)
        return resource.entry.variants if resource else frozenset()

    def get(
        self,
        name: str,
        variant: str,
        category: Category | None = None,
    ) -> ColorValue | ImageValue | None:
        resource = self._find(name, category)
        if resource is None:
            return None
        return resource.values.get(variant)

    def entries(self) -> list[ResourceManifestEntry]:
        return [resource.entry for resource in self._resources.values()]

    def __len__(self) -> int:
        return len(self._resources)


class CatalogBundleLoader:
    """
    Opens catalog bundles by id.

    Each catalog is read at most once; call invalidate() after the
    catalog changes on disk.
    """

    def __init__(self, catalogs: Mapping[str, Path | str]) -> None:
        self._paths = {bundle_id: Path(path) for bundle_id, path in catalogs.items()}
        self._lock = threading.Lock()
        self._opened: dict[str, CatalogBundle] = {}
        self._reads = itertools.count(1)

    def open(self, identity: BundleIdentity) -> CatalogBundle:
        bundle_id = identity.bundle_id
        with self._lock:
            opened = self._opened.get(bundle_id)
            if opened is not None:
                return opened

            path = self._paths.get(bundle_id)
            if path is None:
                raise BundleUnavailableError(bundle_id, "no catalog configured")
            if not path.is_dir():
                raise BundleUnavailableError(bundle_id, f"catalog not found at {path}")

            try:
                opened = CatalogBundle.from_path(bundle_id, path, next(self._reads))
            except ManifestError as e:
                raise BundleUnavailableError(bundle_id, str(e)) from e

            logger.info("Opened bundle %s (%d resources) from %s", bundle_id, len(opened), path)
            self._opened[bundle_id] = opened
            return opened

    def invalidate(self, bundle_id: str | None = None) -> None:
        with self._lock:
            if bundle_id is None:
                self._opened.clear()
            else:
                self._opened.pop(bundle_id, None)
