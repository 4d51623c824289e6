"""
Emission component - Serialise a sealed registry into source text.

Invariants:
- I1: Exactly one constant per registry entry, in registry order,
  grouped by category
- I2: Only entries flagged public are exported
- I3: Output is a pure function of its inputs (byte-identical on re-run)
- I4: Output is produced whole or not at all; files are replaced in one
  step, never patched
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from src.components.identifiers import IdentifierConfig, generate_all
from src.components.identifiers import DEFAULT_CONFIG as DEFAULT_IDENTIFIERS
from src.components.registry import TokenRegistry
from src.core.entities import BundleIdentity, SymbolicConstant
from src.core.errors import RegistryNotSealedError

from ._impl import RENDERERS
from .models import DEFAULT_CONFIG, EmissionConfig, TargetSyntax

logger = logging.getLogger(__name__)


def render(
    constants: tuple[SymbolicConstant, ...],
    target: TargetSyntax | str,
    bundle: BundleIdentity | None = None,
    config: EmissionConfig = DEFAULT_CONFIG,
) -> str:
    """Render already generated constants for a target syntax."""
    return RENDERERS[TargetSyntax(target)](constants, bundle, config)


def emit(
    registry: TokenRegistry,
    target: TargetSyntax | str,
    bundle: BundleIdentity | None = None,
    config: EmissionConfig = DEFAULT_CONFIG,
    identifiers: IdentifierConfig = DEFAULT_IDENTIFIERS,
) -> str:
    """
    Emit source for every entry of a sealed registry.

    Raises:
        RegistryNotSealedError: registry still accepts entries
        SymbolCollisionError: two entries produce the same identifier
        InvalidTokenNameError: a name has no identifier characters
    """
    if not registry.is_sealed:
        raise RegistryNotSealedError()

    constants = generate_all(registry.all(), identifiers)
    return render(constants, target, bundle, config)


def write_output(text: str, path: Path) -> Path:
    """
    Replace the file at path with text in a single rename.

    The temporary file lives beside the target so the rename stays on one
    filesystem.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
            f.write(text)
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.remove(tmp_name)
        raise

    logger.info("Wrote %s (%d bytes)", path, len(text.encode("utf-8")))
    return path
