"""
Resolver component - Runtime bundle lookups for generated symbols.
"""

from ._cache import HandleCache
from .component import (
    BundleResolver,
    compare_with_bundle,
    create_resolver,
    select_variant,
)
from .models import DEFAULT_CONFIG, ResolverConfig, VerificationReport
from .ports import BundleLoaderPort, BundlePort

__all__ = [
    # Service
    "BundleResolver",
    "create_resolver",
    "HandleCache",
    # Helper functions
    "compare_with_bundle",
    "select_variant",
    # Models
    "DEFAULT_CONFIG",
    "ResolverConfig",
    "VerificationReport",
    # Ports
    "BundleLoaderPort",
    "BundlePort",
]
