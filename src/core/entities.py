"""
Domain entities for asset symbol generation.

Manifest entries are fixed at build time, symbolic constants are generated
once per build, and resolved handles are created on demand at runtime.
All entities are immutable.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import Enum

__all__ = [
    "BASE_VARIANT",
    "HIGH_CONTRAST",
    "AppearanceContext",
    "BundleIdentity",
    "Category",
    "ColorValue",
    "ImageValue",
    "ResolvedHandle",
    "ResourceManifestEntry",
    "SymbolicConstant",
    "Visibility",
]

BASE_VARIANT = "base"
HIGH_CONTRAST = "high-contrast"


class Category(str, Enum):
    """Kind of packaged resource."""

    COLOR = "color"
    IMAGE = "image"

    @property
    def folder_extension(self) -> str:
        """Asset catalog folder suffix for this category."""
        return f".{self.value}set"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class Visibility(str, Enum):
    PUBLIC = "public"
    INTERNAL = "internal"


@dataclass(frozen=True)
class ResourceManifestEntry:
    """A named resource as exported by the authoring tool."""

    human_name: str
    category: Category
    variants: frozenset[str] = frozenset({BASE_VARIANT})
    public: bool = False

    def __post_init__(self) -> None:
        if not self.human_name or not self.human_name.strip():
            raise ValueError("Resource name must be non-empty")
        if not self.variants:
            raise ValueError(f"Resource '{self.human_name}' declares no variants")
        if any(not tag for tag in self.variants):
            raise ValueError(f"Resource '{self.human_name}' has an empty variant tag")

    @classmethod
    def create(
        cls,
        human_name: str,
        category: Category | str,
        variants: Iterable[str] | None = None,
        public: bool = False,
    ) -> ResourceManifestEntry:
        """Build an entry, rejecting repeated variant tags."""
        tags = list(variants) if variants is not None else [BASE_VARIANT]
        seen: set[str] = set()
        for tag in tags:
            if tag in seen:
                raise ValueError(f"Resource '{human_name}' repeats variant '{tag}'")
            seen.add(tag)
        return cls(
            human_name=human_name,
            category=Category(category),
            variants=frozenset(tags),
            public=public,
        )

    @property
    def key(self) -> tuple[Category, str]:
        return (self.category, self.human_name)


@dataclass(frozen=True)
class SymbolicConstant:
    """Generated identifier bound to a bundle resource name."""

    symbol_name: str
    target_name: str
    category: Category
    visibility: Visibility
    accessor_name: str
    source: ResourceManifestEntry = field(compare=False, repr=False)

    @property
    def is_public(self) -> bool:
        return self.visibility is Visibility.PUBLIC


@dataclass(frozen=True)
class BundleIdentity:
    """Identifies the packaged bundle to query; fixed for the process lifetime."""

    bundle_id: str

    def __post_init__(self) -> None:
        if not self.bundle_id:
            raise ValueError("bundle_id must be non-empty")


@dataclass(frozen=True)
class ColorValue:
    """Colour components, nominally 0..1; extended-range spaces may exceed it."""

    red: float
    green: float
    blue: float
    alpha: float = 1.0
    color_space: str = "srgb"

    @property
    def hex(self) -> str:
        channels = [self.red, self.green, self.blue]
        if self.alpha < 1.0:
            channels.append(self.alpha)
        # Extended-range components are clamped to what 8 bits can show
        return "#" + "".join(f"{round(min(max(c, 0.0), 1.0) * 255):02X}" for c in channels)


@dataclass(frozen=True)
class ImageValue:
    filenames: tuple[str, ...] = ()


@dataclass(frozen=True)
class ResolvedHandle:
    """Result of looking up a constant's target name in a bundle."""

    bundle_id: str
    name: str
    category: Category
    variant: str
    value: ColorValue | ImageValue | None = None


@dataclass(frozen=True)
class AppearanceContext:
    """Externally supplied appearance used to choose a variant."""

    appearance: str | None = None  # "light", "dark" or None for any
    high_contrast: bool = False

    def candidate_tags(self) -> Iterator[str]:
        """Yield variant tags in preference order, most specific first."""
        if self.appearance:
            if self.high_contrast:
                yield f"{self.appearance}+{HIGH_CONTRAST}"
            yield self.appearance
        if self.high_contrast:
            yield HIGH_CONTRAST

    @property
    def cache_key(self) -> str:
        return f"{self.appearance or '-'}/{int(self.high_contrast)}"
