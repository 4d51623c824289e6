"""
Tests for manifest loading, asset catalog scanning and the sync check.
"""

import json

import pytest

from src.adapters.memory_bundle import InMemoryBundle
from src.components.identifiers import generate_all
from src.core.entities import Category, ColorValue, ImageValue, ResourceManifestEntry
from src.core.errors import ManifestError
from src.manifest.check import check_sync
from src.manifest.loader import (
    load_entries,
    load_manifest,
    load_source,
    parse_manifest,
    to_entries,
)
from src.manifest.scan import parse_component, read_catalog, scan_catalog, variant_tag


# --- Manifest files ---


def test_parse_manifest_defaults():
    manifest = parse_manifest("resources:\n  - name: Amber\n")

    assert manifest.bundle_id is None
    resource = manifest.resources[0]
    assert resource.category is Category.COLOR
    assert resource.variants == ["base"]
    assert resource.public is False


def test_bare_list_manifest():
    manifest = parse_manifest("- name: Amber\n- name: Logo\n  category: image\n")
    assert [r.name for r in manifest.resources] == ["Amber", "Logo"]


def test_empty_manifest():
    assert parse_manifest("").resources == []


def test_invalid_yaml():
    with pytest.raises(ManifestError) as exc_info:
        parse_manifest("resources: [", source="tokens.yaml")
    assert exc_info.value.source == "tokens.yaml"


@pytest.mark.parametrize(
    "content",
    [
        "resources:\n  - name: ''\n",
        "resources:\n  - name: Amber\n    category: font\n",
        "resources:\n  - name: Amber\n    variants: [dark, dark]\n",
        "resources:\n  - name: Amber\n    colour: red\n",
    ],
)
def test_schema_errors(content):
    with pytest.raises(ManifestError):
        parse_manifest(content)


def test_load_json_manifest(tmp_path):
    path = tmp_path / "tokens.json"
    path.write_text(
        json.dumps(
            {
                "bundle_id": "com.example.app",
                "resources": [{"name": "Sky", "variants": ["base", "dark"], "public": True}],
            }
        )
    )

    manifest = load_manifest(path)
    assert manifest.bundle_id == "com.example.app"
    assert manifest.resources[0].public


def test_load_invalid_json(tmp_path):
    path = tmp_path / "tokens.json"
    path.write_text("{not json")
    with pytest.raises(ManifestError):
        load_manifest(path)


def test_load_missing_manifest(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_manifest(tmp_path / "missing.yaml")


def test_to_entries_keeps_order():
    manifest = parse_manifest(
        "resources:\n  - name: Slate\n  - name: Amber\n    variants: [base, dark]\n"
    )
    entries = to_entries(manifest)

    assert [e.human_name for e in entries] == ["Slate", "Amber"]
    assert entries[1].variants == frozenset({"base", "dark"})


def test_whitespace_name_is_manifest_error():
    manifest = parse_manifest("resources:\n  - name: '   '\n")
    with pytest.raises(ManifestError):
        to_entries(manifest)


def test_load_source_reports_bundle_id(tmp_path):
    path = tmp_path / "tokens.yaml"
    path.write_text("bundle_id: com.example.app\nresources:\n  - name: Amber\n")

    entries, bundle_id = load_source(path)
    assert bundle_id == "com.example.app"
    assert entries[0].human_name == "Amber"


# --- Asset catalogs ---


def test_scan_catalog_names_sorted(focal_catalog, palette_entries):
    names = [e.human_name for e in scan_catalog(focal_catalog)]
    assert names == sorted([e.human_name for e in palette_entries] + ["Brand/Logo"])


def test_scan_catalog_skips_unsupported_sets(focal_catalog):
    names = {e.human_name for e in scan_catalog(focal_catalog)}
    assert "AppIcon" not in names


def test_scan_catalog_variants(focal_catalog):
    entries = {e.human_name: e for e in scan_catalog(focal_catalog)}

    assert entries["AmberLight"].variants == frozenset({"base"})
    assert entries["Amber"].variants == frozenset({"base", "dark"})
    assert entries["TextPrimary"].variants == frozenset({"base", "dark", "dark+high-contrast"})
    assert entries["Brand/Logo"].category is Category.IMAGE


def test_folder_without_namespace(tmp_path, write_colorset):
    root = tmp_path / "Assets.xcassets"
    write_colorset(root / "Palette", "Slate", {"base": "#64748B"})

    assert [e.human_name for e in scan_catalog(root)] == ["Slate"]


def test_read_catalog_values(focal_catalog):
    resources = {r.entry.human_name: r for r in read_catalog(focal_catalog)}

    amber_dark = resources["Amber"].values["dark"]
    assert isinstance(amber_dark, ColorValue)
    assert amber_dark.hex == "#B8923F"

    logo = resources["Brand/Logo"].values["dark"]
    assert logo == ImageValue(filenames=("logo-dark.png",))


def test_system_color_has_no_value(tmp_path):
    folder = tmp_path / "Assets.xcassets" / "Label.colorset"
    folder.mkdir(parents=True)
    (folder / "Contents.json").write_text(
        json.dumps({"colors": [{"color": {"platform": "ios", "reference": "labelColor"}, "idiom": "universal"}]})
    )

    [resource] = read_catalog(tmp_path / "Assets.xcassets")
    assert resource.values == {"base": None}


def test_universal_idiom_preferred(tmp_path):
    folder = tmp_path / "Assets.xcassets" / "Tint.colorset"
    folder.mkdir(parents=True)
    phone = {"color": {"components": {"red": "1.000", "green": "0", "blue": "0"}}, "idiom": "iphone"}
    universal = {"color": {"components": {"red": "0", "green": "0", "blue": "1.000"}}, "idiom": "universal"}
    (folder / "Contents.json").write_text(json.dumps({"colors": [phone, universal]}))

    [resource] = read_catalog(tmp_path / "Assets.xcassets")
    assert resource.values["base"].blue == 1.0


def test_extended_range_components(tmp_path):
    folder = tmp_path / "Assets.xcassets" / "Glow.colorset"
    folder.mkdir(parents=True)
    color = {
        "color-space": "extended-srgb",
        "components": {"red": "1.050", "green": "0.000", "blue": "0.000", "alpha": "1.000"},
    }
    (folder / "Contents.json").write_text(json.dumps({"colors": [{"color": color, "idiom": "universal"}]}))

    [resource] = read_catalog(tmp_path / "Assets.xcassets")
    value = resource.values["base"]
    assert value.red == pytest.approx(1.05)
    assert value.color_space == "extended-srgb"
    assert value.hex == "#FF0000"


def test_malformed_contents(tmp_path):
    folder = tmp_path / "Assets.xcassets" / "Bad.colorset"
    folder.mkdir(parents=True)
    (folder / "Contents.json").write_text("{")

    with pytest.raises(ManifestError):
        scan_catalog(tmp_path / "Assets.xcassets")


def test_missing_catalog(tmp_path):
    with pytest.raises(ManifestError):
        scan_catalog(tmp_path / "Nope.xcassets")


def test_load_entries_accepts_catalog(focal_catalog, palette_entries):
    assert len(load_entries(focal_catalog)) == len(palette_entries) + 1


@pytest.mark.parametrize(
    ("appearances", "expected"),
    [
        (None, "base"),
        ([{"appearance": "luminosity", "value": "light"}], "light"),
        ([{"appearance": "luminosity", "value": "dark"}], "dark"),
        ([{"appearance": "contrast", "value": "high"}], "high-contrast"),
        (
            [
                {"appearance": "luminosity", "value": "dark"},
                {"appearance": "contrast", "value": "high"},
            ],
            "dark+high-contrast",
        ),
    ],
)
def test_variant_tag(appearances, expected):
    assert variant_tag(appearances) == expected


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("0.910", 0.910),
        ("232", 232 / 255),
        ("0xE8", 232 / 255),
        ("1.050", 1.05),
        (1, 1 / 255),
        ("1", 1 / 255),
        (1.0, 1.0),
        (0.5, 0.5),
        (128, 128 / 255),
    ],
)
def test_parse_component(raw, expected):
    assert parse_component(raw) == pytest.approx(expected)


def test_parse_component_rejects_garbage():
    with pytest.raises(ValueError):
        parse_component("red")


def test_parse_component_rejects_bool():
    with pytest.raises(ValueError):
        parse_component(True)


# --- Sync check ---


def test_check_sync_pass():
    bundle = InMemoryBundle("com.example.app")
    bundle.add("Amber")
    constants = generate_all([ResourceManifestEntry.create("Amber", Category.COLOR)])

    assert check_sync(constants, bundle) == []


def test_check_sync_missing_and_undeclared():
    bundle = InMemoryBundle("com.example.app")
    bundle.add("Overlay")
    constants = generate_all([ResourceManifestEntry.create("Amber", Category.COLOR)])

    assert check_sync(constants, bundle) == ["Missing from bundle 'com.example.app': 'Amber'"]

    errors = check_sync(constants, bundle, strict=True)
    assert len(errors) == 2
    assert "Undeclared resource in bundle 'com.example.app': 'Overlay'" in errors[1]
