"""Dialog parameter definitions and their defaults."""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Mapping, Optional, Union

from slotfill.entities import CandidateEntity
from slotfill.exceptions import ParameterConfigError

Priority = Union[float, Callable[[], float]]
FulfilledPredicate = Callable[[Any, Optional[Dict[str, Any]]], bool]
Reducer = Callable[[Any, CandidateEntity], Any]


def replace_reducer(old_value: Any, candidate: CandidateEntity) -> Any:
    """Replace the previous value with the new candidate."""
    return candidate


def append_reducer(old_value: Any, candidate: CandidateEntity) -> Any:
    """Append the candidate to a sequence-valued parameter."""
    return [*(old_value or []), candidate]


def is_present(value: Any, context: Optional[Dict[str, Any]] = None) -> bool:
    """Fulfilled as soon as the parameter holds a value."""
    return value is not None


def has_at_least(count: int) -> FulfilledPredicate:
    """Fulfilled once a sequence-valued parameter holds ``count`` items."""

    def predicate(value: Any, context: Optional[Dict[str, Any]] = None) -> bool:
        return value is not None and len(value) >= count

    return predicate


@dataclass(frozen=True)
class ParameterSpec:
    """
    Configuration of one slot the dialog must fill.

    Parameters are matched against candidates in order of priority,
    highest first. ``priority`` may be a number or a function returning
    one; functions are evaluated every time parameters are sorted.
    """
    dimension: str
    priority: Priority = 0
    is_fulfilled: FulfilledPredicate = field(default=is_present)
    reducer: Reducer = field(default=replace_reducer)

    def resolve_priority(self) -> float:
        """Get the numeric priority."""
        if callable(self.priority):
            return self.priority()
        return self.priority


# Keys accepted in dict configuration, botfuel-style names included
_DICT_KEYS = {
    "dimension": "dimension",
    "dim": "dimension",
    "priority": "priority",
    "is_fulfilled": "is_fulfilled",
    "isFulfilled": "is_fulfilled",
    "reducer": "reducer",
}


def parameter_from_dict(name: str, config: Mapping[str, Any]) -> ParameterSpec:
    """Build a parameter from a plain configuration mapping."""
    kwargs: Dict[str, Any] = {}
    for key, value in config.items():
        target = _DICT_KEYS.get(key)
        if target is None:
            raise ParameterConfigError(f"Unknown option {key!r} for parameter {name!r}")
        if value is not None:
            kwargs[target] = value

    if not kwargs.get("dimension"):
        raise ParameterConfigError(f"Parameter {name!r} has no dimension")

    return ParameterSpec(**kwargs)


def normalize_parameters(
    parameters: Mapping[str, Union[ParameterSpec, Mapping[str, Any]]],
) -> Dict[str, ParameterSpec]:
    """
    Apply defaults to every parameter.

    Returns a new mapping in declaration order; the input is left
    untouched.
    """
    normalized: Dict[str, ParameterSpec] = {}
    for name, spec in parameters.items():
        if isinstance(spec, ParameterSpec):
            normalized[name] = spec
        elif isinstance(spec, Mapping):
            normalized[name] = parameter_from_dict(name, spec)
        else:
            raise ParameterConfigError(
                f"Parameter {name!r} must be a ParameterSpec or a mapping, "
                f"got {type(spec).__name__}"
            )
    return normalized
