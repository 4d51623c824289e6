"""
Tests for the asset catalog bundle adapter.
"""

from __future__ import annotations

import shutil
from pathlib import Path

import pytest

from src.adapters.catalog.bundle import CatalogBundle, CatalogBundleLoader
from src.components.identifiers import generate, generate_all
from src.components.resolver import ResolverConfig, create_resolver
from src.core.entities import (
    AppearanceContext,
    BundleIdentity,
    Category,
    ColorValue,
    ImageValue,
    ResourceManifestEntry,
)
from src.core.errors import BundleUnavailableError, ResourceNotFoundError
from src.manifest.scan import scan_catalog

BUNDLE_ID = "com.venkat.focal.app"


@pytest.fixture
def loader(focal_catalog: Path) -> CatalogBundleLoader:
    return CatalogBundleLoader({BUNDLE_ID: focal_catalog})


class TestCatalogBundle:
    def test_lookup(self, focal_catalog: Path) -> None:
        bundle = CatalogBundle.from_path(BUNDLE_ID, focal_catalog)

        assert bundle.bundle_id == BUNDLE_ID
        assert bundle.has("Amber")
        assert bundle.has("Amber", Category.COLOR)
        assert not bundle.has("Amber", Category.IMAGE)
        assert bundle.variants("Amber") == frozenset({"base", "dark"})
        assert bundle.variants("Overlay") == frozenset()
        assert isinstance(bundle.get("Amber", "dark"), ColorValue)
        assert bundle.get("Overlay", "base") is None

    def test_entries_match_scan(self, focal_catalog: Path) -> None:
        bundle = CatalogBundle.from_path(BUNDLE_ID, focal_catalog)
        assert sorted(e.human_name for e in bundle.entries()) == [
            e.human_name for e in scan_catalog(focal_catalog)
        ]
        assert len(bundle) == len(bundle.entries())


class TestCatalogBundleLoader:
    def test_open_is_memoised(self, loader: CatalogBundleLoader) -> None:
        identity = BundleIdentity(BUNDLE_ID)
        assert loader.open(identity) is loader.open(identity)

    def test_invalidate_rereads(
        self, loader: CatalogBundleLoader, focal_catalog: Path, write_colorset
    ) -> None:
        identity = BundleIdentity(BUNDLE_ID)
        assert not loader.open(identity).has("Overlay")

        write_colorset(focal_catalog, "Overlay", {"base": "#000000"})
        assert not loader.open(identity).has("Overlay")

        loader.invalidate(BUNDLE_ID)
        assert loader.open(identity).has("Overlay")

    def test_each_read_gets_new_revision(self, loader: CatalogBundleLoader) -> None:
        identity = BundleIdentity(BUNDLE_ID)
        first = loader.open(identity).revision

        assert loader.open(identity).revision == first
        loader.invalidate()
        assert loader.open(identity).revision > first

    def test_unconfigured_bundle(self, loader: CatalogBundleLoader) -> None:
        with pytest.raises(BundleUnavailableError) as exc_info:
            loader.open(BundleIdentity("com.other.app"))
        assert exc_info.value.reason == "no catalog configured"

    def test_missing_directory(self, tmp_path: Path) -> None:
        loader = CatalogBundleLoader({BUNDLE_ID: tmp_path / "Gone.xcassets"})
        with pytest.raises(BundleUnavailableError):
            loader.open(BundleIdentity(BUNDLE_ID))

    def test_malformed_catalog(self, tmp_path: Path) -> None:
        folder = tmp_path / "Assets.xcassets" / "Bad.colorset"
        folder.mkdir(parents=True)
        (folder / "Contents.json").write_text("[")

        loader = CatalogBundleLoader({BUNDLE_ID: tmp_path / "Assets.xcassets"})
        with pytest.raises(BundleUnavailableError):
            loader.open(BundleIdentity(BUNDLE_ID))


class TestResolveFromCatalog:
    def test_text_primary_high_contrast(self, loader: CatalogBundleLoader) -> None:
        resolver = create_resolver(loader)
        constant = generate(ResourceManifestEntry.create("TextPrimary", Category.COLOR))

        handle = resolver.resolve(
            constant,
            BundleIdentity(BUNDLE_ID),
            AppearanceContext(appearance="dark", high_contrast=True),
        )

        assert handle.variant == "dark+high-contrast"
        assert handle.value.hex == "#FFFFFF"

    def test_amber_light_is_independent(self, loader: CatalogBundleLoader) -> None:
        resolver = create_resolver(loader)
        constant = generate(ResourceManifestEntry.create("Amber", Category.COLOR))

        handle = resolver.resolve(
            constant, BundleIdentity(BUNDLE_ID), AppearanceContext(appearance="light")
        )

        # Light appearance falls back to Amber's base, never to AmberLight
        assert handle.name == "Amber"
        assert handle.variant == "base"
        assert handle.value.hex == "#D4A853"

    def test_namespaced_image(self, loader: CatalogBundleLoader) -> None:
        resolver = create_resolver(loader, ResolverConfig(cache_handles=True))
        constant = generate(ResourceManifestEntry.create("Brand/Logo", Category.IMAGE))

        handle = resolver.resolve(
            constant, BundleIdentity(BUNDLE_ID), AppearanceContext(appearance="dark")
        )

        assert constant.symbol_name == "ImageNameBrandLogo"
        assert handle.value == ImageValue(filenames=("logo-dark.png",))

    def test_verify_catalog(self, loader: CatalogBundleLoader, focal_catalog: Path) -> None:
        resolver = create_resolver(loader)
        constants = generate_all(scan_catalog(focal_catalog))

        assert resolver.verify(constants, BundleIdentity(BUNDLE_ID), strict=True).in_sync

        extra = generate_all(
            list(scan_catalog(focal_catalog))
            + [ResourceManifestEntry.create("Overlay", Category.COLOR)]
        )
        with pytest.raises(ResourceNotFoundError) as exc_info:
            resolver.verify(extra, BundleIdentity(BUNDLE_ID))
        assert exc_info.value.names == ["Overlay"]

    def test_cached_handle_refreshed_after_invalidate(
        self, loader: CatalogBundleLoader, focal_catalog: Path, write_colorset
    ) -> None:
        resolver = create_resolver(loader, ResolverConfig(cache_handles=True))
        amber = generate(ResourceManifestEntry.create("Amber", Category.COLOR))
        identity = BundleIdentity(BUNDLE_ID)
        assert resolver.resolve(amber, identity).value.hex == "#D4A853"

        write_colorset(focal_catalog, "Amber", {"base": "#000000"})
        # Still the catalog as first read
        assert resolver.resolve(amber, identity).value.hex == "#D4A853"

        loader.invalidate(BUNDLE_ID)
        assert resolver.resolve(amber, identity).value.hex == "#000000"

    def test_cached_handle_dropped_when_resource_deleted(
        self, loader: CatalogBundleLoader, focal_catalog: Path
    ) -> None:
        resolver = create_resolver(loader, ResolverConfig(cache_handles=True))
        sky = generate(ResourceManifestEntry.create("Sky", Category.COLOR))
        identity = BundleIdentity(BUNDLE_ID)
        resolver.resolve(sky, identity)

        shutil.rmtree(focal_catalog / "Sky.colorset")
        loader.invalidate()

        with pytest.raises(ResourceNotFoundError):
            resolver.resolve(sky, identity)
