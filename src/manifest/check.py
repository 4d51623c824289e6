from collections.abc import Iterable

from src.components.resolver import BundlePort, compare_with_bundle
from src.core.entities import SymbolicConstant


def check_sync(
    constants: Iterable[SymbolicConstant],
    bundle: BundlePort,
    strict: bool = False,
) -> list[str]:
    """
    Compare generated symbols with a packaged bundle.
    Returns human-readable violations (empty when in sync).
    """
    errors = []
    report = compare_with_bundle(constants, bundle)

    # 1. Declared symbols must exist in the bundle
    for name in report.missing:
        errors.append(f"Missing from bundle '{bundle.bundle_id}': '{name}'")

    # 2. Bundle entries must be declared (strict only)
    if strict:
        for name in report.undeclared:
            errors.append(
                f"Undeclared resource in bundle '{bundle.bundle_id}': '{name}'. "
                "Regenerate symbols."
            )

    return errors
