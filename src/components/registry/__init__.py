"""
Registry component - Ordered, sealable store of declared resources.
"""

from .component import TokenRegistry, create_registry

__all__ = [
    "TokenRegistry",
    "create_registry",
]
