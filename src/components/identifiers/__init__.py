"""
Identifiers component - Resource name to symbol name mapping.
"""

from .component import (
    accessor_name,
    generate,
    generate_all,
    lower_camel,
    sanitize_name,
    split_words,
)
from .models import DEFAULT_CONFIG, IdentifierConfig

__all__ = [
    # Entry points
    "generate",
    "generate_all",
    # Helper functions
    "accessor_name",
    "lower_camel",
    "sanitize_name",
    "split_words",
    # Configuration
    "DEFAULT_CONFIG",
    "IdentifierConfig",
]
