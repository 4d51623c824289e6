import json
from collections.abc import Callable
from pathlib import Path

import pytest

from src.core.entities import Category, ResourceManifestEntry
from src.rules.loader import load_rules
from src.rules.models import Rules

PROJECT_ROOT = Path(__file__).parent.parent

# Focal palette: name -> {variant tag: hex}
FOCAL_COLORS: dict[str, dict[str, str]] = {
    "AccentColor": {"base": "#E8847C"},
    "Amber": {"base": "#D4A853", "dark": "#B8923F"},
    "AmberLight": {"base": "#FBF7EE"},
    "Background": {"base": "#FAFAF9", "dark": "#1C1917"},
    "CardBackground": {"base": "#FFFFFF", "dark": "#292524"},
    "Coral": {"base": "#E8847C", "dark": "#D66B63"},
    "Divider": {"base": "#E7E5E4", "dark": "#44403C"},
    "Sky": {"base": "#6BA3D6", "dark": "#4A8BC7"},
    "TextPrimary": {
        "base": "#1C1917",
        "dark": "#FAFAF9",
        "dark+high-contrast": "#FFFFFF",
    },
}


def _appearances(tag: str) -> list[dict[str, str]]:
    appearances = []
    for part in tag.split("+"):
        if part in ("light", "dark"):
            appearances.append({"appearance": "luminosity", "value": part})
        elif part == "high-contrast":
            appearances.append({"appearance": "contrast", "value": "high"})
    return appearances


def colorset_contents(variants: dict[str, str]) -> dict:
    colors = []
    for tag, hex_value in variants.items():
        red, green, blue = (int(hex_value[i : i + 2], 16) for i in (1, 3, 5))
        item: dict = {
            "color": {
                "color-space": "srgb",
                "components": {
                    "alpha": "1.000",
                    "blue": f"{blue / 255:.3f}",
                    "green": f"{green / 255:.3f}",
                    "red": f"{red / 255:.3f}",
                },
            },
            "idiom": "universal",
        }
        if tag != "base":
            item["appearances"] = _appearances(tag)
        colors.append(item)
    return {"colors": colors, "info": {"author": "xcode", "version": 1}}


@pytest.fixture
def write_colorset() -> Callable[..., Path]:
    """Write Name.colorset/Contents.json under a catalog folder."""

    def _write(folder: Path, name: str, variants: dict[str, str]) -> Path:
        target = folder / f"{name}.colorset"
        target.mkdir(parents=True, exist_ok=True)
        (target / "Contents.json").write_text(json.dumps(colorset_contents(variants)))
        return target

    return _write


@pytest.fixture
def write_imageset() -> Callable[..., Path]:
    """Write Name.imageset/Contents.json with {variant tag: filename}."""

    def _write(folder: Path, name: str, files: dict[str, str]) -> Path:
        target = folder / f"{name}.imageset"
        target.mkdir(parents=True, exist_ok=True)
        images = []
        for tag, filename in files.items():
            item: dict = {"filename": filename, "idiom": "universal", "scale": "1x"}
            if tag != "base":
                item["appearances"] = _appearances(tag)
            images.append(item)
        (target / "Contents.json").write_text(json.dumps({"images": images}))
        return target

    return _write


@pytest.fixture
def focal_catalog(tmp_path: Path, write_colorset, write_imageset) -> Path:
    """Asset catalog with the Focal palette and one namespaced image."""
    root = tmp_path / "Assets.xcassets"
    root.mkdir()
    (root / "Contents.json").write_text(json.dumps({"info": {"author": "xcode", "version": 1}}))

    for name, variants in FOCAL_COLORS.items():
        write_colorset(root, name, variants)

    brand = root / "Brand"
    brand.mkdir()
    (brand / "Contents.json").write_text(
        json.dumps({"properties": {"provides-namespace": True}})
    )
    write_imageset(brand, "Logo", {"base": "logo.png", "dark": "logo-dark.png"})

    # Not part of the symbol table
    (root / "AppIcon.appiconset").mkdir()
    return root


@pytest.fixture
def rules() -> Rules:
    """Rules loaded from the project-root rules.yaml."""
    rules_path = (PROJECT_ROOT / "rules.yaml").resolve()
    if not rules_path.exists():
        raise FileNotFoundError(f"Rules not found at {rules_path}")
    return load_rules(rules_path)


@pytest.fixture
def palette_entries() -> list[ResourceManifestEntry]:
    return [
        ResourceManifestEntry.create(name, Category.COLOR, variants)
        for name, variants in FOCAL_COLORS.items()
    ]
