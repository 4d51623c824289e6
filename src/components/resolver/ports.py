"""
Resolver component port definitions.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol

from src.core.entities import (
    BundleIdentity,
    Category,
    ColorValue,
    ImageValue,
    ResourceManifestEntry,
)


class BundlePort(Protocol):
    """Packaged resource container addressed by resource name."""

    @property
    def bundle_id(self) -> str:
        ...

    @property
    def revision(self) -> int:
        """Changes whenever the bundle contents change."""
        ...

    def has(self, name: str, category: Category | None = None) -> bool:
        """Check if a resource with this name exists."""
        ...

    def variants(self, name: str, category: Category | None = None) -> frozenset[str]:
        """Variant tags declared for a resource (empty if absent)."""
        ...

    def get(
        self,
        name: str,
        variant: str,
        category: Category | None = None,
    ) -> ColorValue | ImageValue | None:
        """Get the value of one variant, or None if not found."""
        ...

    def entries(self) -> Iterable[ResourceManifestEntry]:
        """Every resource packaged in the bundle."""
        ...


class BundleLoaderPort(Protocol):
    """Opens bundles by identity."""

    def open(self, identity: BundleIdentity) -> BundlePort:
        """
        Open a bundle.

        Raises BundleUnavailableError if the bundle cannot be opened.
        """
        ...
