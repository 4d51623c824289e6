"""
Pipeline component - One build's generation pass.

State machine: empty -> ingesting -> sealed -> emitted.

Invariants:
- I1: Transitions follow src.domain.state; anything else is an error
- I2: A sealed or emitted pipeline never accepts entries; reset() starts
  over from empty with a fresh registry
- I3: Any build error aborts the pass with no output written
- I4: Output files are replaced whole
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable

from src.components.emission import (
    EmissionConfig,
    TargetSyntax,
    render,
    write_output,
)
from src.components.emission import DEFAULT_CONFIG as DEFAULT_EMISSION
from src.components.identifiers import IdentifierConfig, generate_all
from src.components.identifiers import DEFAULT_CONFIG as DEFAULT_IDENTIFIERS
from src.components.registry import TokenRegistry
from src.components.resolver import BundleLoaderPort, create_resolver
from src.core.entities import BundleIdentity, ResourceManifestEntry, SymbolicConstant
from src.core.errors import AssetSymbolsError, BuildError
from src.domain.state import PipelineState, transition
from src.manifest.check import check_sync
from src.manifest.loader import load_source
from src.rules.models import Rules

from .models import (
    GenerateInput,
    GenerateOutput,
    GenerationError,
    VerifyInput,
    VerifyOutput,
)

logger = logging.getLogger(__name__)


class GenerationPipeline:
    """Drives a registry from ingestion to emitted source."""

    def __init__(
        self,
        identifiers: IdentifierConfig = DEFAULT_IDENTIFIERS,
        emission: EmissionConfig = DEFAULT_EMISSION,
    ) -> None:
        self._identifiers = identifiers
        self._emission = emission
        self._registry = TokenRegistry()
        self._state: PipelineState = "empty"
        self._constants: tuple[SymbolicConstant, ...] = ()

    @property
    def state(self) -> PipelineState:
        return self._state

    @property
    def registry(self) -> TokenRegistry:
        return self._registry

    @property
    def constants(self) -> tuple[SymbolicConstant, ...]:
        """Generated constants; empty until sealed."""
        return self._constants

    def ingest(self, entries: Iterable[ResourceManifestEntry]) -> int:
        """
        Register entries in order.

        Raises:
            PipelineStateError: pipeline already sealed
            DuplicateNameError: repeated (category, name)
        """
        self._state = transition(self._state, "ingesting")
        return self._registry.register_all(entries)

    def seal(self) -> tuple[SymbolicConstant, ...]:
        """
        Seal the registry and generate constants.

        Raises:
            SymbolCollisionError: two entries produce the same identifier
        """
        new_state = transition(self._state, "sealed")
        constants = generate_all(self._registry.all(), self._identifiers)
        self._registry.seal()
        self._constants = constants
        self._state = new_state
        return constants

    def emit(
        self,
        target: TargetSyntax | str,
        bundle: BundleIdentity | None = None,
    ) -> str:
        """Render the sealed registry. May be called once per target."""
        new_state = transition(self._state, "emitted")
        text = render(self._constants, target, bundle, self._emission)
        self._state = new_state
        return text

    def reset(self) -> None:
        """Discard everything and start again from empty."""
        self._registry = TokenRegistry()
        self._constants = ()
        self._state = "empty"


# --- Entry points ---


def _error_code(exc: Exception) -> str:
    name = type(exc).__name__.removesuffix("Error")
    return re.sub(r"(?<!^)(?=[A-Z])", "_", name).lower()


def _to_error(exc: Exception) -> GenerationError:
    return GenerationError(code=_error_code(exc), message=str(exc))


def run_generate(
    inp: GenerateInput,
    rules: Rules,
    loader: BundleLoaderPort | None = None,
) -> GenerateOutput:
    """
    Run a full generation pass.

    Bundle id precedence: input, then the manifest's own, then rules.
    Nothing is written unless every step succeeds.
    """
    target = inp.target or rules.emission.target
    verify = rules.resolver.validate_bundle if inp.verify is None else inp.verify

    pipeline = GenerationPipeline(
        identifiers=rules.identifiers.to_config(),
        emission=rules.emission.to_config(),
    )

    try:
        entries, declared_id = load_source(inp.source)
        identity = BundleIdentity(inp.bundle_id or declared_id or rules.project.bundle_id)

        pipeline.ingest(entries)
        constants = pipeline.seal()

        if verify:
            if loader is None:
                return GenerateOutput(
                    errors=[
                        GenerationError(
                            code="no_bundle_loader",
                            message="Bundle verification requested but no loader configured",
                        )
                    ],
                    success=False,
                )
            resolver = create_resolver(loader, rules.resolver.to_config())
            resolver.verify(constants, identity)

        text = pipeline.emit(target, identity)
    except (AssetSymbolsError, FileNotFoundError) as e:
        level = logging.ERROR if isinstance(e, BuildError) else logging.WARNING
        logger.log(level, "Generation aborted: %s", e)
        return GenerateOutput(errors=[_to_error(e)], success=False)

    written = None
    if inp.output_path:
        try:
            written = write_output(text, inp.output_path)
        except OSError as e:
            logger.error("Could not write %s: %s", inp.output_path, e)
            return GenerateOutput(
                errors=[
                    GenerationError(
                        code="write_failed",
                        message=f"Could not write {inp.output_path}: {e}",
                    )
                ],
                success=False,
            )

    logger.info(
        "Generated %d symbol(s) for %s (%s)",
        len(constants),
        identity.bundle_id,
        TargetSyntax(target).value,
    )
    return GenerateOutput(text=text, constants=constants, output_path=written)


def run_verify(
    inp: VerifyInput,
    rules: Rules,
    loader: BundleLoaderPort,
) -> VerifyOutput:
    """Compare the symbols a source would generate with the packaged bundle."""
    strict = rules.resolver.strict_validation if inp.strict is None else inp.strict

    try:
        entries, declared_id = load_source(inp.source)
        identity = BundleIdentity(inp.bundle_id or declared_id or rules.project.bundle_id)
        constants = generate_all(entries, rules.identifiers.to_config())
        violations = check_sync(constants, loader.open(identity), strict=strict)
    except (AssetSymbolsError, FileNotFoundError) as e:
        return VerifyOutput(errors=[_to_error(e)], success=False)

    return VerifyOutput(violations=violations, success=not violations)


def run(inp: GenerateInput, rules: Rules, loader: BundleLoaderPort | None = None) -> GenerateOutput:
    """Main entry point."""
    return run_generate(inp, rules, loader)
