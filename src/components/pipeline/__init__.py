"""
Pipeline component - Manifest to generated source, all or nothing.
"""

from .component import GenerationPipeline, run, run_generate, run_verify
from .models import (
    GenerateInput,
    GenerateOutput,
    GenerationError,
    VerifyInput,
    VerifyOutput,
)

__all__ = [
    # Entry points
    "run",
    "run_generate",
    "run_verify",
    # Service
    "GenerationPipeline",
    # Input models
    "GenerateInput",
    "VerifyInput",
    # Output models
    "GenerateOutput",
    "GenerationError",
    "VerifyOutput",
]
