"""Candidate sources."""

from abc import ABC, abstractmethod
from typing import List, Sequence

import structlog

from slotfill.entities import CandidateEntity

logger = structlog.get_logger(__name__)


class Extractor(ABC):
    """Base class for entity extractors."""

    @abstractmethod
    async def compute(self, sentence: str) -> List[CandidateEntity]:
        """Extract candidate entities from a sentence."""
        pass


class CompositeExtractor(Extractor):
    """
    Extractor combining several extractors.

    Results are concatenated in extractor order. Candidates from
    different extractors may overlap; the resolver sorts that out by
    position.

    Usage:
        extractor = CompositeExtractor([CityExtractor(), BooleanExtractor()])
        candidates = await extractor.compute("I leave from Paris")
    """

    def __init__(self, extractors: Sequence[Extractor] = ()):
        self._extractors: List[Extractor] = list(extractors)

    def add_extractor(self, extractor: Extractor) -> None:
        """Add an extractor to the composite."""
        self._extractors.append(extractor)

    async def compute(self, sentence: str) -> List[CandidateEntity]:
        candidates: List[CandidateEntity] = []
        for extractor in self._extractors:
            candidates.extend(await extractor.compute(sentence))

        logger.debug(
            "entities_extracted",
            extractors=len(self._extractors),
            candidates=len(candidates),
        )
        return candidates
