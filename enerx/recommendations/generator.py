"""
Asynchronous recommendation generators.

Every generator follows the same contract:
  1. ``generate()`` is a coroutine and the sole public API.
  2. It reads no mutable shared state and returns a fresh list each call.
  3. It may be cancelled while suspended; ``asyncio.CancelledError`` is
     never caught here.
  4. A source that cannot produce a batch raises ``GenerationFailure``.

``ScriptedRecommendationGenerator`` is the only concrete generator: it waits
``latency_seconds`` to exercise the loading state, then returns the candidate
pool. It cannot fail on its own.

Usage::

    generator = ScriptedRecommendationGenerator(latency_seconds=1.5)
    recs = await generator.generate()
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Optional, Sequence

from enerx.models.recommendation import Recommendation
from enerx.recommendations.candidates import candidate_pool

logger = logging.getLogger(__name__)

DEFAULT_LATENCY_SECONDS = 1.5


class RecommendationGenerator(ABC):
    """Abstract base for all recommendation sources.

    Subclasses implement ``generate()``. The dashboard controller owns the
    request token; generators know nothing about sessions or tabs.
    """

    name: str = "generator"

    @abstractmethod
    async def generate(self) -> list[Recommendation]:
        """Produce one batch of recommendations.

        Returns:
            Ordered recommendations; order is display order. May be empty.

        Raises:
            GenerationFailure: If the source cannot produce a batch.
        """
        ...


class ScriptedRecommendationGenerator(RecommendationGenerator):
    """Fixed candidate set behind a simulated analysis delay.

    Attributes:
        latency_seconds: Simulated analysis time before the batch is returned.
    """

    name = "scripted"

    def __init__(
        self,
        latency_seconds: float = DEFAULT_LATENCY_SECONDS,
        candidates: Optional[Sequence[Recommendation]] = None,
    ) -> None:
        if latency_seconds < 0:
            raise ValueError(f"latency_seconds must be non-negative, got {latency_seconds}.")
        self.latency_seconds = latency_seconds
        self._candidates = tuple(candidates) if candidates is not None else None

    async def generate(self) -> list[Recommendation]:
        logger.debug("Generating recommendations | latency=%.2fs", self.latency_seconds)
        await asyncio.sleep(self.latency_seconds)

        if self._candidates is None:
            recs = candidate_pool()
        else:
            recs = [r.model_copy() for r in self._candidates]

        logger.debug("Generated %d recommendation(s).", len(recs))
        return recs
