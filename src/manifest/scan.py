"""
Asset catalog scanning.

Reads an on-disk asset catalog (the authoring tool's export) into
manifest entries plus per-variant values:

    Assets.xcassets/
        Contents.json
        Amber.colorset/Contents.json
        Brand/                      (provides-namespace -> "Brand/...")
            Contents.json
            Logo.imageset/Contents.json
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from src.core.entities import (
    BASE_VARIANT,
    HIGH_CONTRAST,
    Category,
    ColorValue,
    ImageValue,
    ResourceManifestEntry,
)
from src.core.errors import ManifestError

logger = logging.getLogger(__name__)

IGNORE_DIRS = {"__pycache__", ".DS_Store", ".git"}
CONTENTS_FILE = "Contents.json"


@dataclass(frozen=True)
class CatalogResource:
    """One resource folder with its values keyed by variant tag."""

    entry: ResourceManifestEntry
    values: dict[str, ColorValue | ImageValue | None] = field(default_factory=dict)


def variant_tag(appearances: list[dict[str, Any]] | None) -> str:
    """Map catalog appearances to a variant tag (dark, dark+high-contrast, base...)."""
    luminosity: str | None = None
    high_contrast = False
    for appearance in appearances or []:
        kind = appearance.get("appearance")
        value = appearance.get("value")
        if kind == "luminosity" and value in ("light", "dark"):
            luminosity = value
        elif kind == "contrast" and value == "high":
            high_contrast = True

    if luminosity and high_contrast:
        return f"{luminosity}+{HIGH_CONTRAST}"
    if luminosity:
        return luminosity
    if high_contrast:
        return HIGH_CONTRAST
    return BASE_VARIANT


def parse_component(raw: Any) -> float:
    """
    Normalise one colour component.

    Integer notation is 8-bit, whether a JSON number (232), a string
    ("232") or hex ("0xE8"). Decimal notation ("0.910", 0.91) is taken
    as is, so extended-range values such as "1.050" are kept.
    """
    if isinstance(raw, bool):
        raise ValueError(f"Invalid colour component: {raw!r}")
    if isinstance(raw, int):
        return raw / 255.0
    if isinstance(raw, float):
        return raw

    text = str(raw).strip()
    try:
        if text.lower().startswith("0x"):
            return int(text, 16) / 255.0
        if "." in text:
            return float(text)
        return int(text) / 255.0
    except ValueError as e:
        raise ValueError(f"Invalid colour component: {raw!r}") from e


def parse_color(color: dict[str, Any] | None) -> ColorValue | None:
    """Parse a catalog colour definition; None for system-provided colours."""
    if not color or "components" not in color:
        return None
    components = color["components"]
    return ColorValue(
        red=parse_component(components.get("red", 0)),
        green=parse_component(components.get("green", 0)),
        blue=parse_component(components.get("blue", 0)),
        alpha=parse_component(components.get("alpha", "1.000")),
        color_space=color.get("color-space", "srgb"),
    )


def _read_contents(folder: Path) -> dict[str, Any]:
    path = folder / CONTENTS_FILE
    if not path.exists():
        return {}
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ManifestError(str(path), f"invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ManifestError(str(path), "expected a JSON object")
    return data


def _by_idiom(items: list[dict[str, Any]]) -> list[dict[str, Any]]:
    # Universal definitions take precedence over device-specific ones
    return sorted(items, key=lambda item: item.get("idiom", "universal") != "universal")


def read_colorset(folder: Path, name: str) -> CatalogResource:
    data = _read_contents(folder)
    values: dict[str, ColorValue | ImageValue | None] = {}
    for item in _by_idiom(data.get("colors", [])):
        tag = variant_tag(item.get("appearances"))
        if tag in values:
            continue
        try:
            values[tag] = parse_color(item.get("color"))
        except ValueError as e:
            raise ManifestError(str(folder), str(e)) from e

    if not values:
        values[BASE_VARIANT] = None
    entry = ResourceManifestEntry(
        human_name=name, category=Category.COLOR, variants=frozenset(values)
    )
    return CatalogResource(entry=entry, values=values)


def read_imageset(folder: Path, name: str) -> CatalogResource:
    data = _read_contents(folder)
    files: dict[str, list[str]] = {}
    for item in _by_idiom(data.get("images", [])):
        filename = item.get("filename")
        if not filename:
            continue
        files.setdefault(variant_tag(item.get("appearances")), []).append(filename)

    values: dict[str, ColorValue | ImageValue | None] = {
        tag: ImageValue(filenames=tuple(names)) for tag, names in files.items()
    }
    if not values:
        values[BASE_VARIANT] = ImageValue()
    entry = ResourceManifestEntry(
        human_name=name, category=Category.IMAGE, variants=frozenset(values)
    )
    return CatalogResource(entry=entry, values=values)


READERS = {
    Category.COLOR: read_colorset,
    Category.IMAGE: read_imageset,
}


def _category_for(folder: Path) -> Category | None:
    for category in Category:
        if folder.name.endswith(category.folder_extension):
            return category
    return None


def _provides_namespace(folder: Path) -> bool:
    properties = _read_contents(folder).get("properties", {})
    return bool(properties.get("provides-namespace", False))


def _walk(folder: Path, namespace: str, found: list[CatalogResource]) -> None:
    for child in sorted(folder.iterdir(), key=lambda p: p.name):
        if not child.is_dir() or child.name in IGNORE_DIRS:
            continue

        category = _category_for(child)
        if category is not None:
            name = namespace + child.name[: -len(category.folder_extension)]
            found.append(READERS[category](child, name))
        elif child.name.endswith("set"):
            # App icons, data sets, symbol sets: not part of the symbol table
            logger.debug("Skipping unsupported catalog folder %s", child)
        else:
            child_namespace = namespace
            if _provides_namespace(child):
                child_namespace = f"{namespace}{child.name}/"
            _walk(child, child_namespace, found)


def read_catalog(root: Path) -> list[CatalogResource]:
    """
    Read every supported resource in an asset catalog.

    Resources are sorted by name so output does not depend on directory
    listing order.

    Raises:
        ManifestError: catalog missing or a Contents.json is malformed
    """
    root = Path(root)
    if not root.is_dir():
        raise ManifestError(str(root), "asset catalog not found")

    found: list[CatalogResource] = []
    _walk(root, "", found)
    found.sort(key=lambda r: (r.entry.human_name, r.entry.category.value))
    logger.debug("Read %d resources from %s", len(found), root)
    return found


def scan_catalog(root: Path) -> list[ResourceManifestEntry]:
    """Manifest entries for every resource in an asset catalog."""
    return [resource.entry for resource in read_catalog(root)]
