from pathlib import Path

import yaml
from pydantic import ValidationError

from src.rules.models import Rules


def load_rules(path: Path) -> Rules:
    """
    Load and validate rules.yaml.

    Raises FileNotFoundError if the file is missing and ValueError when
    it is empty, not YAML, or does not match the schema.
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Rules file not found at: {path}")

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML syntax in {path.name}: {e}") from e

    if data is None:
        raise ValueError(f"Rules file {path.name} is empty")
    if not isinstance(data, dict):
        raise ValueError(f"Rules file {path.name} must be a mapping, got {type(data).__name__}")

    try:
        return Rules.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Rules validation failed for {path.name}:\n{e}") from e


def resolve_catalog_paths(rules: Rules, base_dir: Path) -> dict[str, Path]:
    """Catalog paths from rules, relative entries anchored at base_dir."""
    paths = {}
    for bundle_id, raw in rules.catalogs.items():
        path = Path(raw)
        paths[bundle_id] = path if path.is_absolute() else base_dir / path
    return paths
