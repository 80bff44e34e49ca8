"""
Session and view-state models.

``SessionState``            — login flag plus the active dashboard tab.
``RecommendationLoadState`` — idle / loading / ready(batch) / failed(reason).
``DashboardState``          — the single owned value the state machine
                              transitions; carries the request token counter.
``DashboardSnapshot``       — read-only view handed to the presentation layer.

All models are frozen. Transitions build new instances with
``model_copy(update=...)``; nothing is mutated in place, so an observer that
kept an older snapshot still sees exactly what it was given.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, model_validator

from enerx.models.recommendation import RecommendationBatch
from enerx.models.telemetry import GenerationSample, SavingsSample, UserStats
from enerx.taxonomy.dashboard_taxonomy import DashboardTab, LoadStatus


class SessionState(BaseModel):
    """Login flag and active tab.

    Attributes:
        is_authenticated: ``True`` once ``login`` has been applied.
        active_tab: Currently displayed dashboard tab.
    """

    model_config = ConfigDict(frozen=True)

    is_authenticated: bool = False
    active_tab: DashboardTab = DashboardTab.OVERVIEW


class RecommendationLoadState(BaseModel):
    """Lifecycle state of the recommendation fetch.

    ``batch`` is set only for ``ready`` and ``reason`` only for ``failed``.
    Use the ``idle()``, ``loading()``, ``ready()`` and ``failed()``
    constructors rather than building the model directly.

    Attributes:
        status: Current lifecycle status.
        batch: Delivered batch when ``status == "ready"``.
        reason: Failure description when ``status == "failed"``.
    """

    model_config = ConfigDict(frozen=True)

    status: LoadStatus = LoadStatus.IDLE
    batch: Optional[RecommendationBatch] = None
    reason: Optional[str] = None

    @model_validator(mode="after")
    def validate_payload_matches_status(self) -> "RecommendationLoadState":
        if self.status == LoadStatus.READY:
            if self.batch is None:
                raise ValueError("ready state requires a batch.")
        elif self.batch is not None:
            raise ValueError(f"{self.status.value} state must not carry a batch.")

        if self.status == LoadStatus.FAILED:
            if not self.reason or not self.reason.strip():
                raise ValueError("failed state requires a non-empty reason.")
        elif self.reason is not None:
            raise ValueError(f"{self.status.value} state must not carry a reason.")
        return self

    @classmethod
    def idle(cls) -> "RecommendationLoadState":
        return cls(status=LoadStatus.IDLE)

    @classmethod
    def loading(cls) -> "RecommendationLoadState":
        return cls(status=LoadStatus.LOADING)

    @classmethod
    def ready(cls, batch: RecommendationBatch) -> "RecommendationLoadState":
        return cls(status=LoadStatus.READY, batch=batch)

    @classmethod
    def failed(cls, reason: str) -> "RecommendationLoadState":
        return cls(status=LoadStatus.FAILED, reason=reason)

    @property
    def is_settled(self) -> bool:
        """``True`` only for ``ready``; every other status re-triggers on entry."""
        return self.status == LoadStatus.READY


class DashboardState(BaseModel):
    """Authoritative state owned by the dashboard state machine.

    ``LoggedOut`` is ``session.is_authenticated == False`` with an idle load
    state and the overview tab. ``request_seq`` only ever grows: it is the
    token of the most recent generation request, and logout advances it so
    that nothing started in a previous session can match.

    Attributes:
        session: Login flag and active tab.
        recommendations: Recommendation fetch lifecycle.
        request_seq: Token of the latest generation request (0 = none yet).
    """

    model_config = ConfigDict(frozen=True)

    session: SessionState = SessionState()
    recommendations: RecommendationLoadState = RecommendationLoadState()
    request_seq: int = 0

    @model_validator(mode="after")
    def validate_logged_out_is_clean(self) -> "DashboardState":
        if self.request_seq < 0:
            raise ValueError("request_seq must be non-negative.")
        if not self.session.is_authenticated:
            if self.recommendations.status != LoadStatus.IDLE:
                raise ValueError("A logged-out state must have an idle recommendation state.")
            if self.session.active_tab != DashboardTab.OVERVIEW:
                raise ValueError("A logged-out state must be on the overview tab.")
        return self

    @property
    def is_logged_in(self) -> bool:
        return self.session.is_authenticated

    @property
    def active_tab(self) -> DashboardTab:
        return self.session.active_tab


class DashboardSnapshot(BaseModel):
    """Read-only view of everything the presentation layer renders.

    Attributes:
        session: Login flag and active tab.
        stats: Aggregate stat-card values.
        generation: Intra-day generation series.
        savings: Monthly carbon savings series.
        recommendations: Recommendation fetch lifecycle.
    """

    model_config = ConfigDict(frozen=True)

    session: SessionState
    stats: UserStats
    generation: tuple[GenerationSample, ...]
    savings: tuple[SavingsSample, ...]
    recommendations: RecommendationLoadState
