"""
Identifiers component configuration models.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from src.core.entities import Category


def _default_prefixes() -> dict[Category, str]:
    return {
        Category.COLOR: "ColorName",
        Category.IMAGE: "ImageName",
    }


def _default_suffixes() -> dict[Category, str]:
    return {
        Category.COLOR: "Color",
        Category.IMAGE: "Image",
    }


@dataclass(frozen=True)
class IdentifierConfig:
    """Naming rules for generated identifiers."""

    category_prefixes: dict[Category, str] = field(default_factory=_default_prefixes)
    # Trailing word dropped from accessor names, e.g. AccentColor -> accent
    accessor_suffixes: dict[Category, str] = field(default_factory=_default_suffixes)
    strip_accessor_suffix: bool = True

    def prefix_for(self, category: Category) -> str:
        return self.category_prefixes.get(category, f"{category.label}Name")


DEFAULT_CONFIG = IdentifierConfig()
