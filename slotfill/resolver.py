"""Resolution of all dialog parameters for one turn."""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

import structlog

from slotfill.entities import CandidateEntity, coerce_candidates
from slotfill.matcher import match_parameter
from slotfill.parameters import ParameterSpec, normalize_parameters


@dataclass
class ResolutionResult:
    """Parameters matched so far and those still missing."""
    matched_entities: Dict[str, Any] = field(default_factory=dict)
    missing_entities: Dict[str, ParameterSpec] = field(default_factory=dict)

    @property
    def is_complete(self) -> bool:
        """Check if every parameter is fulfilled."""
        return not self.missing_entities


class EntityResolver:
    """
    Distributes candidate entities over dialog parameters.

    Parameters are visited by descending priority (declaration order
    breaks ties). Parameters fulfilled on a previous turn are visited
    last, so they never take a candidate away from an unfulfilled one
    but can still be overridden by a leftover candidate of their
    dimension.
    """

    def __init__(self, logger: Optional[Any] = None):
        self.logger = logger or structlog.get_logger(__name__)

    def resolve(
        self,
        candidates: Optional[Iterable[Any]],
        parameters: Mapping[str, Union[ParameterSpec, Mapping[str, Any]]],
        previous_entities: Optional[Mapping[str, Any]] = None,
    ) -> ResolutionResult:
        """
        Match candidates with parameters.

        Args:
            candidates: Candidate entities extracted from the message
            parameters: Parameter configuration by name
            previous_entities: Values matched on previous turns

        Returns:
            Matched values for every parameter and the missing ones
        """
        pool: List[CandidateEntity] = coerce_candidates(candidates)
        previous = dict(previous_entities or {})
        specs = normalize_parameters(parameters)
        context = {"dialog_entities": previous}

        self.logger.debug(
            "resolve_started",
            candidates=len(pool),
            parameters=list(specs),
        )

        priorities = {
            name: float("-inf")
            if spec.is_fulfilled(previous.get(name), context)
            else spec.resolve_priority()
            for name, spec in specs.items()
        }
        # sorted() is stable, so equal priorities keep declaration order
        ordered = sorted(specs, key=lambda name: priorities[name], reverse=True)

        matched: Dict[str, Any] = dict(previous)
        missing: Dict[str, ParameterSpec] = dict(specs)

        for name in ordered:
            spec = specs[name]
            result = match_parameter(
                spec,
                pool,
                initial_value=previous.get(name),
                context=context,
            )
            pool = result.remaining_candidates
            matched[name] = result.new_value

            fulfilled = spec.is_fulfilled(result.new_value, context)
            if fulfilled:
                missing.pop(name, None)

            self.logger.debug(
                "parameter_matched",
                parameter=name,
                priority=priorities[name],
                fulfilled=fulfilled,
                remaining_candidates=len(pool),
            )

        self.logger.debug(
            "resolve_completed",
            matched=[name for name in specs if name not in missing],
            missing=list(missing),
        )

        return ResolutionResult(matched_entities=matched, missing_entities=missing)


def resolve_entities(
    candidates: Optional[Iterable[Any]],
    parameters: Mapping[str, Union[ParameterSpec, Mapping[str, Any]]],
    previous_entities: Optional[Mapping[str, Any]] = None,
) -> ResolutionResult:
    """Resolve entities with the module logger."""
    return EntityResolver().resolve(candidates, parameters, previous_entities)
