"""
Resolver component - Runtime symbol to resource resolution.

Looks up a generated constant's target name in a packaged bundle and
picks one variant for the caller's appearance context.

Invariants:
- I1: Resolution never mutates shared state (cache aside)
- I2: The same (constant, bundle, context) yields an equivalent handle
  while the bundle is unchanged
- I3: Missing resources and variants are errors, never defaults
- I4: The cache computes each key at most once concurrently
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from src.core.entities import (
    AppearanceContext,
    BundleIdentity,
    ResolvedHandle,
    SymbolicConstant,
)
from src.core.errors import (
    ResourceNotFoundError,
    UndeclaredResourceError,
    VariantNotFoundError,
)

from ._cache import HandleCache
from .models import DEFAULT_CONFIG, ResolverConfig, VerificationReport
from .ports import BundleLoaderPort, BundlePort

logger = logging.getLogger(__name__)


def select_variant(
    name: str,
    available: frozenset[str],
    context: AppearanceContext | None,
    fallback: str | None,
) -> str:
    """
    Pick exactly one variant tag.

    Context tags are tried most specific first, then the fallback.

    Raises:
        VariantNotFoundError: nothing matches and no fallback is declared
    """
    requested = list(context.candidate_tags()) if context else []
    if fallback and fallback not in requested:
        requested.append(fallback)

    for tag in requested:
        if tag in available:
            return tag

    raise VariantNotFoundError(name, requested, sorted(available))


def compare_with_bundle(
    constants: Iterable[SymbolicConstant],
    bundle: BundlePort,
) -> VerificationReport:
    """Pure comparison of declared symbols against bundle contents."""
    declared = list(constants)
    missing = [c.target_name for c in declared if not bundle.has(c.target_name, c.category)]

    declared_keys = {(c.category, c.target_name) for c in declared}
    undeclared = [
        entry.human_name for entry in bundle.entries() if entry.key not in declared_keys
    ]
    return VerificationReport(bundle_id=bundle.bundle_id, missing=missing, undeclared=undeclared)


class BundleResolver:
    """
    Resolves symbolic constants against packaged bundles.

    Safe to share between threads.
    """

    def __init__(
        self,
        loader: BundleLoaderPort,
        config: ResolverConfig = DEFAULT_CONFIG,
    ) -> None:
        self._loader = loader
        self._config = config
        self._cache = HandleCache() if config.cache_handles else None

    @property
    def config(self) -> ResolverConfig:
        return self._config

    @property
    def cache(self) -> HandleCache | None:
        return self._cache

    def resolve(
        self,
        constant: SymbolicConstant,
        bundle: BundleIdentity,
        context: AppearanceContext | None = None,
    ) -> ResolvedHandle:
        """
        Resolve a constant to a handle.

        Cached handles are keyed on the opened bundle's revision, so a
        bundle that changed or was reloaded is looked up again.

        Raises:
            BundleUnavailableError: bundle cannot be opened
            ResourceNotFoundError: no entry named constant.target_name
            VariantNotFoundError: no variant matches the context
        """
        opened = self._loader.open(bundle)
        if self._cache is None:
            return self._lookup(constant, opened, context)

        key = (
            bundle.bundle_id,
            opened.revision,
            constant.category,
            constant.target_name,
            context.cache_key if context else None,
        )
        return self._cache.get_or_compute(
            key, lambda: self._lookup(constant, opened, context)
        )

    def invalidate(self, bundle_id: str | None = None) -> int:
        """
        Drop cached handles for one bundle, or for all of them.

        Returns the number of handles dropped.
        """
        if self._cache is None:
            return 0
        if bundle_id is None:
            dropped = self._cache.clear()
        else:
            dropped = self._cache.clear(lambda key: key[0] == bundle_id)
        logger.debug("Dropped %d cached handle(s) for %s", dropped, bundle_id or "all bundles")
        return dropped

    def resolve_many(
        self,
        constants: Iterable[SymbolicConstant],
        bundle: BundleIdentity,
        context: AppearanceContext | None = None,
    ) -> list[ResolvedHandle]:
        return [self.resolve(c, bundle, context) for c in constants]

    def verify(
        self,
        constants: Iterable[SymbolicConstant],
        bundle: BundleIdentity,
        *,
        strict: bool | None = None,
    ) -> VerificationReport:
        """
        Check that every declared symbol exists in the bundle.

        With strict, also fail on bundle entries that have no symbol.

        Raises:
            BundleUnavailableError: bundle cannot be opened
            ResourceNotFoundError: declared symbols missing from the bundle
            UndeclaredResourceError: strict and undeclared entries exist
        """
        strict = self._config.strict_validation if strict is None else strict
        report = compare_with_bundle(constants, self._loader.open(bundle))

        if report.missing:
            raise ResourceNotFoundError(bundle.bundle_id, report.missing)
        if strict and report.undeclared:
            raise UndeclaredResourceError(bundle.bundle_id, report.undeclared)
        if report.undeclared:
            logger.warning(
                "Bundle %s has %d undeclared resource(s): %s",
                bundle.bundle_id,
                len(report.undeclared),
                ", ".join(report.undeclared),
            )
        return report

    def _lookup(
        self,
        constant: SymbolicConstant,
        opened: BundlePort,
        context: AppearanceContext | None,
    ) -> ResolvedHandle:
        name = constant.target_name

        available = opened.variants(name, constant.category)
        if not available:
            raise ResourceNotFoundError(opened.bundle_id, [name])

        variant = select_variant(name, available, context, self._config.fallback_variant)
        return ResolvedHandle(
            bundle_id=opened.bundle_id,
            name=name,
            category=constant.category,
            variant=variant,
            value=opened.get(name, variant, constant.category),
        )


def create_resolver(
    loader: BundleLoaderPort,
    config: ResolverConfig | None = None,
) -> BundleResolver:
    """Factory for BundleResolver."""
    return BundleResolver(loader=loader, config=config or DEFAULT_CONFIG)
