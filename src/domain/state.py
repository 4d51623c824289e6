from typing import Literal

from src.core.errors import PipelineStateError

PipelineState = Literal["empty", "ingesting", "sealed", "emitted"]


def can_transition(current: PipelineState, new: PipelineState) -> bool:
    """
    Determine if a generation pipeline transition is allowed.
    """
    if current == "empty":
        # Sealing an empty registry is allowed (emits an empty symbol table)
        return new in ("ingesting", "sealed")

    if current == "ingesting":
        return new in ("ingesting", "sealed")

    if current == "sealed":
        # Emission may be repeated for several targets
        return new == "emitted"

    if current == "emitted":
        return new == "emitted"

    return False


def transition(current: PipelineState, new: PipelineState) -> PipelineState:
    """
    Return the new state.
    Raises PipelineStateError if the transition is invalid.
    """
    if not can_transition(current, new):
        raise PipelineStateError(current, new)
    return new
