"""Matching of a single parameter against candidate entities."""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from slotfill.entities import CandidateEntity, without_span
from slotfill.parameters import ParameterSpec


@dataclass
class MatchResult:
    """Outcome of matching one parameter."""
    new_value: Any
    remaining_candidates: List[CandidateEntity]


def empty_like(value: Any) -> Any:
    """Empty value of the same shape: [] for sequences, None otherwise."""
    if isinstance(value, (list, tuple)):
        return []
    return None


def match_parameter(
    parameter: ParameterSpec,
    candidates: Sequence[CandidateEntity],
    initial_value: Any = None,
    context: Optional[Dict[str, Any]] = None,
) -> MatchResult:
    """
    Feed candidates of the parameter's dimension to its reducer.

    Candidates are consumed in order until the parameter is fulfilled.
    Every consumed candidate is removed, by position, from the returned
    pool so that no other parameter can claim the same span.

    A parameter that is already fulfilled is reset when a candidate of
    its dimension shows up, letting the user correct a previous answer.

    Args:
        parameter: Parameter to match
        candidates: Candidates still available in this pass
        initial_value: Value carried over from previous turns
        context: Passed to the parameter's fulfillment predicate

    Returns:
        The new value and the candidates left for other parameters
    """
    matching = [c for c in candidates if c.dimension == parameter.dimension]
    remaining = list(candidates)
    value = initial_value

    if matching and parameter.is_fulfilled(value, context):
        value = empty_like(value)

    for candidate in matching:
        if parameter.is_fulfilled(value, context):
            continue
        value = parameter.reducer(value, candidate)
        remaining = without_span(remaining, candidate)

    return MatchResult(new_value=value, remaining_candidates=remaining)
