import json
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from src.core.entities import ResourceManifestEntry
from src.core.errors import ManifestError
from src.manifest.models import Manifest
from src.manifest.scan import scan_catalog


def validate_manifest(data: Any, source: str = "<manifest>") -> Manifest:
    """
    Validate decoded manifest data.
    Raises ManifestError if the schema is invalid.
    """
    if data is None:
        data = {}
    # A bare list is shorthand for {"resources": [...]}
    if isinstance(data, list):
        data = {"resources": data}

    try:
        return Manifest.model_validate(data)
    except ValidationError as e:
        raise ManifestError(source, f"schema validation failed:\n{e}") from e


def parse_manifest(content: str, source: str = "<manifest>") -> Manifest:
    """
    Parse manifest text (YAML).
    Raises ManifestError on syntax or schema problems.
    """
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ManifestError(source, f"invalid YAML syntax: {e}") from e
    return validate_manifest(data, source)


def load_manifest(path: Path) -> Manifest:
    """
    Load a YAML or JSON manifest file.
    Raises FileNotFoundError if file missing.
    Raises ManifestError if the content is invalid.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Manifest file not found at: {path}")

    with open(path, encoding="utf-8") as f:
        content = f.read()

    if path.suffix == ".json":
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise ManifestError(str(path), f"invalid JSON: {e}") from e
        return validate_manifest(data, str(path))

    return parse_manifest(content, str(path))


def to_entries(manifest: Manifest, source: str = "<manifest>") -> list[ResourceManifestEntry]:
    """Convert validated manifest resources into entries, keeping file order."""
    entries = []
    for r in manifest.resources:
        try:
            entries.append(
                ResourceManifestEntry.create(
                    human_name=r.name,
                    category=r.category,
                    variants=r.variants,
                    public=r.public,
                )
            )
        except ValueError as e:
            raise ManifestError(source, str(e)) from e
    return entries


def load_source(source: Path) -> tuple[list[ResourceManifestEntry], str | None]:
    """
    Entries from a manifest file or an asset catalog directory, plus the
    bundle id the manifest declares (catalogs declare none).
    """
    source = Path(source)
    if source.is_dir():
        return scan_catalog(source), None
    manifest = load_manifest(source)
    return to_entries(manifest, str(source)), manifest.bundle_id


def load_entries(source: Path) -> list[ResourceManifestEntry]:
    """Entries from a manifest file or an asset catalog directory."""
    entries, _bundle_id = load_source(source)
    return entries
