"""Candidate entities produced by extractors for one utterance."""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple


@dataclass(frozen=True)
class CandidateEntity:
    """
    A typed span extracted from a user message.

    Candidates are compared by position (start, end) when the resolver
    de-duplicates them, never by value.
    """
    dimension: str
    text: str
    start: int
    end: int
    values: Tuple[Dict[str, Any], ...] = field(default_factory=tuple)

    def __post_init__(self):
        # Extractors hand over lists
        if not isinstance(self.values, tuple):
            object.__setattr__(self, "values", tuple(self.values))

    @property
    def span(self) -> Tuple[int, int]:
        """Position of the entity in the message."""
        return (self.start, self.end)

    @property
    def value(self) -> Optional[Any]:
        """The first parsed value, if any."""
        if not self.values:
            return None
        return self.values[0].get("value")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "dimension": self.dimension,
            "text": self.text,
            "start": self.start,
            "end": self.end,
            "values": [dict(v) for v in self.values],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CandidateEntity":
        """Create from dictionary. Accepts ``dim``/``body`` extractor keys."""
        return cls(
            dimension=data.get("dimension", data.get("dim")),
            text=data.get("text", data.get("body", "")),
            start=data["start"],
            end=data["end"],
            values=tuple(dict(v) for v in data.get("values", ())),
        )


def positions_equal(a: CandidateEntity, b: CandidateEntity) -> bool:
    """Check whether two candidates cover the same span."""
    return a.start == b.start and a.end == b.end


def without_span(
    candidates: Iterable[CandidateEntity],
    entity: CandidateEntity,
) -> List[CandidateEntity]:
    """Drop every candidate covering the same span as ``entity``."""
    return [c for c in candidates if not positions_equal(c, entity)]


def coerce_candidates(candidates: Optional[Iterable[Any]]) -> List[CandidateEntity]:
    """Turn extractor output (entities or dicts) into a candidate list."""
    if not candidates:
        return []
    return [
        c if isinstance(c, CandidateEntity) else CandidateEntity.from_dict(c)
        for c in candidates
    ]
