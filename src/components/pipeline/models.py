"""
Pipeline component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from src.components.emission import TargetSyntax
from src.core.entities import SymbolicConstant

# --- Error ---


@dataclass(frozen=True)
class GenerationError:
    """Generation failure with actionable message."""

    code: str
    message: str


# --- Input Models ---


@dataclass(frozen=True)
class GenerateInput:
    """Input for one generation run."""

    source: Path  # manifest file or asset catalog directory
    target: TargetSyntax | None = None  # None uses rules.emission.target
    output_path: Path | None = None  # None returns text without writing
    bundle_id: str | None = None  # None uses rules.project.bundle_id
    verify: bool | None = None  # None uses rules.resolver.validate_bundle


@dataclass(frozen=True)
class VerifyInput:
    """Input for checking a source against its packaged bundle."""

    source: Path
    bundle_id: str | None = None
    strict: bool | None = None


# --- Output Models ---


@dataclass(frozen=True)
class GenerateOutput:
    """Output from a generation run. text is None on failure."""

    text: str | None = None
    constants: tuple[SymbolicConstant, ...] = ()
    output_path: Path | None = None
    errors: list[GenerationError] = field(default_factory=list)
    success: bool = True


@dataclass(frozen=True)
class VerifyOutput:
    violations: list[str] = field(default_factory=list)
    errors: list[GenerationError] = field(default_factory=list)
    success: bool = True
