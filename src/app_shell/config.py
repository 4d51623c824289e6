import logging
from pathlib import Path

from src.adapters.catalog.bundle import CatalogBundleLoader
from src.rules.loader import resolve_catalog_paths
from src.rules.models import Rules

logger = logging.getLogger(__name__)


def validate_catalog_rules(rules: Rules, base_dir: Path) -> list[str]:
    """
    Check catalog configuration before a build.
    Returns problems found (empty when every catalog exists).
    """
    problems = []

    # 1. The project's own bundle should have a catalog
    if rules.catalogs and rules.project.bundle_id not in rules.catalogs:
        problems.append(
            f"No catalog configured for project bundle '{rules.project.bundle_id}'"
        )

    # 2. Every configured catalog must exist on disk
    for bundle_id, path in resolve_catalog_paths(rules, base_dir).items():
        if not path.is_dir():
            problems.append(f"Catalog for '{bundle_id}' not found at {path}")

    return problems


def build_loader(
    rules: Rules,
    base_dir: Path,
    source: Path | None = None,
    bundle_id: str | None = None,
) -> CatalogBundleLoader:
    """
    Catalog loader for the configured bundles.

    When the generation source is itself a catalog directory it stands in
    for a bundle that has no configured catalog.
    """
    paths = resolve_catalog_paths(rules, base_dir)
    bundle_id = bundle_id or rules.project.bundle_id
    if source is not None and source.is_dir() and bundle_id not in paths:
        logger.debug("Using %s as catalog for %s", source, bundle_id)
        paths[bundle_id] = source
    return CatalogBundleLoader(paths)
