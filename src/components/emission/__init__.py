"""
Emission component - Generated source output.
"""

from ._impl import (
    RENDERERS,
    objc_string,
    python_string,
    render_objc_header,
    render_python,
    render_swift,
    swift_string,
)
from .component import emit, render, write_output
from .models import DEFAULT_CONFIG, EmissionConfig, TargetSyntax

__all__ = [
    # Entry points
    "emit",
    "render",
    "write_output",
    # Renderers
    "RENDERERS",
    "objc_string",
    "python_string",
    "swift_string",
    "render_objc_header",
    "render_python",
    "render_swift",
    # Models
    "DEFAULT_CONFIG",
    "EmissionConfig",
    "TargetSyntax",
]
