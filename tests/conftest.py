"""
Shared pytest fixtures for the EnerX test suite.

Provides:
  - Sample domain object factories (telemetry bundle, recommendations, batch).
  - ``ControlledGenerator``: a recommendation generator whose calls stay
    pending until the test resolves or fails them, so tests decide exactly
    when each in-flight generation completes.
  - ``settle()``: yield to the event loop enough times for scheduled tasks
    to run to their next suspension point.
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from typing import Optional

import pytest

from enerx.models.recommendation import Recommendation, RecommendationBatch
from enerx.models.telemetry import TelemetryBundle
from enerx.recommendations.candidates import candidate_pool
from enerx.recommendations.generator import RecommendationGenerator
from enerx.taxonomy.dashboard_taxonomy import CategoryIcon, Priority
from enerx.telemetry.loader import demo_telemetry


class ControlledGenerator(RecommendationGenerator):
    """Generator whose results are released by the test.

    Each ``generate()`` call appends a future to ``pending``. With
    ``ignore_cancel=True`` the call keeps waiting through task cancellation,
    modelling a back-end that answers even after the caller moved on.
    """

    name = "controlled"

    def __init__(self, ignore_cancel: bool = False) -> None:
        self.ignore_cancel = ignore_cancel
        self.pending: list[asyncio.Future] = []

    @property
    def calls(self) -> int:
        return len(self.pending)

    async def generate(self) -> list[Recommendation]:
        fut = asyncio.get_running_loop().create_future()
        self.pending.append(fut)
        if not self.ignore_cancel:
            return await fut
        while True:
            try:
                return await asyncio.shield(fut)
            except asyncio.CancelledError:
                continue

    def resolve(self, index: int, recs: Optional[list[Recommendation]] = None) -> None:
        fut = self.pending[index]
        if not fut.done():
            fut.set_result(candidate_pool() if recs is None else recs)

    def fail(self, index: int, exc: BaseException) -> None:
        fut = self.pending[index]
        if not fut.done():
            fut.set_exception(exc)


async def settle(rounds: int = 10) -> None:
    """Let scheduled tasks run until they block again."""
    for _ in range(rounds):
        await asyncio.sleep(0)


# ── Sample domain object factories ────────────────────────────────────────────

@pytest.fixture
def demo_bundle() -> TelemetryBundle:
    """The built-in demo ``TelemetryBundle``."""
    return demo_telemetry()


@pytest.fixture
def sample_recommendation() -> Recommendation:
    """A valid ``Recommendation`` for testing."""
    return Recommendation(
        id=1,
        title="Peak Generation Window Optimization",
        description="Run heavy loads between 11 AM and 2 PM.",
        impact_label="Save ₹450/month",
        priority=Priority.HIGH,
        category_icon=CategoryIcon.SUN,
    )


@pytest.fixture
def sample_batch() -> RecommendationBatch:
    """A full five-item batch for request 1."""
    return RecommendationBatch(
        request_id=1,
        recommendations=tuple(candidate_pool()),
        generated_at=datetime(2026, 6, 15, 12, 0, 0, tzinfo=timezone.utc),
    )


@pytest.fixture
def controlled_generator() -> ControlledGenerator:
    return ControlledGenerator()


@pytest.fixture
def stubborn_generator() -> ControlledGenerator:
    """A ``ControlledGenerator`` that keeps running through cancellation."""
    return ControlledGenerator(ignore_cancel=True)


@pytest.fixture
def run_settle():
    """The ``settle()`` coroutine function, for tests that drive the loop."""
    return settle
