"""
Identifiers component - Symbol name generation.

Turns human-authored resource names into identifiers usable from source
code.

Invariants:
- I1: Output is deterministic for identical input order
- I2: Symbol names are unique across the generated namespace
- I3: Accessor names are unique within a category
- I4: Collisions are reported, never resolved by renaming
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from src.core.entities import (
    Category,
    ResourceManifestEntry,
    SymbolicConstant,
    Visibility,
)
from src.core.errors import InvalidTokenNameError, SymbolCollisionError

from .models import DEFAULT_CONFIG, IdentifierConfig

_WORD_SPLIT = re.compile(r"[^A-Za-z0-9]+")
_LEADING_CAPS = re.compile(r"^([A-Z]+)(?=[A-Z][a-z]|$)")


def split_words(name: str) -> list[str]:
    """Split a name on every character that cannot appear in an identifier."""
    return [w for w in _WORD_SPLIT.split(name) if w]


def sanitize_name(name: str) -> str:
    """
    Convert a resource name to an UpperCamel identifier fragment.

    Existing case boundaries are kept: only the first letter of each word
    is upper-cased.

    Raises:
        InvalidTokenNameError: no identifier characters in the name
    """
    words = split_words(name)
    if not words:
        raise InvalidTokenNameError(name, "no identifier characters")
    return "".join(w[0].upper() + w[1:] for w in words)


def lower_camel(fragment: str) -> str:
    """Lower-case the leading word of an UpperCamel fragment (URLBar -> urlBar)."""
    match = _LEADING_CAPS.match(fragment)
    if match and len(match.group(1)) > 1:
        head = match.group(1)
        return head.lower() + fragment[len(head):]
    return fragment[0].lower() + fragment[1:]


def accessor_name(
    name: str,
    category: Category,
    config: IdentifierConfig = DEFAULT_CONFIG,
) -> str:
    """
    Derive the lowerCamel accessor used by typed resource extensions.

    A trailing category word is dropped when something remains, so
    "AccentColor" becomes "accent".
    """
    fragment = sanitize_name(name)
    suffix = config.accessor_suffixes.get(category, "")
    if (
        config.strip_accessor_suffix
        and suffix
        and fragment.endswith(suffix)
        and len(fragment) > len(suffix)
    ):
        fragment = fragment[: -len(suffix)]

    accessor = lower_camel(fragment)
    if accessor[0].isdigit():
        accessor = f"_{accessor}"
    return accessor


def generate(
    entry: ResourceManifestEntry,
    config: IdentifierConfig = DEFAULT_CONFIG,
) -> SymbolicConstant:
    """Generate the symbolic constant for one manifest entry."""
    return SymbolicConstant(
        symbol_name=config.prefix_for(entry.category) + sanitize_name(entry.human_name),
        target_name=entry.human_name,
        category=entry.category,
        visibility=Visibility.PUBLIC if entry.public else Visibility.INTERNAL,
        accessor_name=accessor_name(entry.human_name, entry.category, config),
        source=entry,
    )


def generate_all(
    entries: Iterable[ResourceManifestEntry],
    config: IdentifierConfig = DEFAULT_CONFIG,
) -> tuple[SymbolicConstant, ...]:
    """
    Generate constants for every entry, preserving order.

    Raises:
        SymbolCollisionError: two entries share a symbol name, or an
            accessor name within one category
    """
    constants: list[SymbolicConstant] = []
    by_symbol: dict[str, ResourceManifestEntry] = {}
    by_accessor: dict[tuple[Category, str], ResourceManifestEntry] = {}

    for entry in entries:
        constant = generate(entry, config)

        owner = by_symbol.get(constant.symbol_name)
        if owner is not None:
            raise SymbolCollisionError(constant.symbol_name, owner, entry)

        accessor_key = (constant.category, constant.accessor_name)
        owner = by_accessor.get(accessor_key)
        if owner is not None:
            raise SymbolCollisionError(constant.accessor_name, owner, entry)

        by_symbol[constant.symbol_name] = entry
        by_accessor[accessor_key] = entry
        constants.append(constant)

    return tuple(constants)
