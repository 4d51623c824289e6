"""
Emission component models.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TargetSyntax(str, Enum):
    """Source language written by the emitter."""

    PYTHON = "python"
    OBJC_HEADER = "objc_header"
    SWIFT = "swift"

    @property
    def file_suffix(self) -> str:
        return {
            TargetSyntax.PYTHON: ".py",
            TargetSyntax.OBJC_HEADER: ".h",
            TargetSyntax.SWIFT: ".swift",
        }[self]


@dataclass(frozen=True)
class EmissionConfig:
    """Target-specific naming for emitted source."""

    # C has no namespaces, so header symbols carry this prefix
    namespace_prefix: str = "AC"
    bundle_id_symbol: str = "BundleID"
    python_bundle_id_symbol: str = "BUNDLE_ID"
    swift_bundle_id_symbol: str = "resourceBundleID"
    generator_name: str = "asset-symbols"
    # Swift only: NSColor/UIColor/SwiftUI.Color and NSImage/UIImage accessors
    swift_framework_extensions: bool = False


DEFAULT_CONFIG = EmissionConfig()
