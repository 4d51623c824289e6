"""
Error taxonomy for asset symbol generation and resolution.

Build-time errors abort a generation pass with no output.
Resolution errors are raised to the caller; the resolver never
substitutes a default resource.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from src.core.entities import Category, ResourceManifestEntry


class AssetSymbolsError(Exception):
    """Base class for all asset symbol errors."""


# --- Build-time errors ---


class BuildError(AssetSymbolsError):
    """Fatal to the generation step."""


class DuplicateNameError(BuildError):
    """Raised when a (category, name) pair is registered twice."""

    def __init__(self, category: Category, name: str) -> None:
        self.category = category
        self.name = name
        super().__init__(f"Duplicate {category.value} resource: '{name}'")


class SealedRegistryError(BuildError):
    """Raised when registering into a sealed registry."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Registry is sealed; cannot register '{name}'")


class RegistryNotSealedError(BuildError):
    """Raised when emitting from a registry that is still accepting entries."""

    def __init__(self) -> None:
        super().__init__("Registry must be sealed before emission")


class SymbolCollisionError(BuildError):
    """Raised when two distinct resources map to the same identifier."""

    def __init__(
        self,
        symbol: str,
        first: ResourceManifestEntry,
        second: ResourceManifestEntry,
    ) -> None:
        self.symbol = symbol
        self.first = first
        self.second = second
        super().__init__(
            f"Symbol '{symbol}' generated by both "
            f"{first.category.value} '{first.human_name}' and "
            f"{second.category.value} '{second.human_name}'"
        )


class InvalidTokenNameError(BuildError):
    """Raised when a resource name yields no usable identifier characters."""

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"Invalid resource name '{name}': {reason}")


class PipelineStateError(BuildError):
    """Raised on an illegal generation pipeline transition."""

    def __init__(self, current: str, requested: str) -> None:
        self.current = current
        self.requested = requested
        super().__init__(f"Invalid pipeline transition from {current} to {requested}")


class ManifestError(BuildError):
    """Raised when a manifest or asset catalog cannot be read."""

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"Manifest error in {source}: {reason}")


# --- Runtime resolution errors ---


class ResolutionError(AssetSymbolsError):
    """Base class for runtime lookup failures."""


class ResourceNotFoundError(ResolutionError):
    """Raised when one or more names are absent from a bundle."""

    def __init__(self, bundle_id: str, names: list[str]) -> None:
        self.bundle_id = bundle_id
        self.names = names
        super().__init__(
            f"Resource(s) not found in bundle '{bundle_id}': {', '.join(names)}"
        )


class BundleUnavailableError(ResolutionError):
    """Raised when a bundle cannot be opened."""

    def __init__(self, bundle_id: str, reason: str = "bundle not installed") -> None:
        self.bundle_id = bundle_id
        self.reason = reason
        super().__init__(f"Bundle '{bundle_id}' unavailable: {reason}")


class VariantNotFoundError(ResolutionError):
    """Raised when no variant matches the requested appearance."""

    def __init__(self, name: str, requested: list[str], available: list[str]) -> None:
        self.name = name
        self.requested = requested
        self.available = available
        super().__init__(
            f"No variant of '{name}' matches {requested}; "
            f"available: {', '.join(available) or 'none'}"
        )


class UndeclaredResourceError(ResolutionError):
    """Raised by strict verification when a bundle entry has no symbol."""

    def __init__(self, bundle_id: str, names: list[str]) -> None:
        self.bundle_id = bundle_id
        self.names = names
        super().__init__(
            f"Bundle '{bundle_id}' contains undeclared resource(s): {', '.join(names)}"
        )
