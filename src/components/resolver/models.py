"""
Resolver component configuration and output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from src.core.entities import BASE_VARIANT


@dataclass(frozen=True)
class ResolverConfig:
    """Resolver behaviour from rules."""

    # Variant used when the appearance context has no match; None disables
    fallback_variant: str | None = BASE_VARIANT
    validate_bundle: bool = True
    # Also fail when the bundle has entries with no generated symbol
    strict_validation: bool = False
    cache_handles: bool = False


DEFAULT_CONFIG = ResolverConfig()


@dataclass(frozen=True)
class VerificationReport:
    """Outcome of comparing generated symbols with a bundle."""

    bundle_id: str
    missing: list[str] = field(default_factory=list)
    undeclared: list[str] = field(default_factory=list)

    @property
    def in_sync(self) -> bool:
        return not self.missing and not self.undeclared
