"""
Pure transition functions for the dashboard state machine.

States
------
  LoggedOut                          session.is_authenticated == False
  LoggedIn{active_tab, load_state}   session.is_authenticated == True

Every intent function takes the current ``DashboardState`` and returns a
``Transition``: the next state plus, when a generation must start, the
request token it was allocated. Functions never raise for any defined
state; an intent that does not apply returns the state unchanged.

Request tokens
--------------
``state.request_seq`` is the token of the latest generation request. A new
request takes ``request_seq + 1``. Completion is accepted only when

    state.is_logged_in
    and state.active_tab == RECOMMENDATIONS
    and request_id == state.request_seq

so a result from a superseded request, from before a logout, or arriving
while the user is on another tab is dropped. ``logout`` advances the counter
so no token from the old session can ever match again.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from enerx.models.recommendation import RecommendationBatch
from enerx.models.session import DashboardState, RecommendationLoadState, SessionState
from enerx.taxonomy.dashboard_taxonomy import DashboardTab

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Transition:
    """Result of applying one intent.

    Attributes:
        state:         The next state (may be the same object when nothing changed).
        start_request: Token of a generation the driver must start, or ``None``.
    """

    state: DashboardState
    start_request: Optional[int] = None


def initial_state() -> DashboardState:
    """Return the ``LoggedOut`` start state."""
    return DashboardState()


# ── Intents ───────────────────────────────────────────────────────────────────

def login(state: DashboardState) -> Transition:
    """``LoggedOut → LoggedIn{overview, idle}``; no-op when already logged in."""
    if state.is_logged_in:
        return Transition(state)
    return Transition(
        state.model_copy(
            update={
                "session": SessionState(
                    is_authenticated=True, active_tab=DashboardTab.OVERVIEW
                ),
                "recommendations": RecommendationLoadState.idle(),
            }
        )
    )


def logout(state: DashboardState) -> Transition:
    """``LoggedIn → LoggedOut``; discards tab and recommendation state.

    ``request_seq`` is advanced so any in-flight generation is stale.
    No-op when already logged out.
    """
    if not state.is_logged_in:
        return Transition(state)
    return Transition(
        DashboardState(request_seq=state.request_seq + 1)
    )


def select_tab(state: DashboardState, tab: DashboardTab) -> Transition:
    """Switch the active dashboard tab.

    - Logged out: no-op.
    - To ``recommendations`` when already there with a ``ready`` batch: no-op.
    - To ``recommendations`` otherwise: load state becomes ``loading`` and a
      new request token is allocated.
    - To ``overview``: only the tab changes; the load state is kept.
    """
    if not state.is_logged_in:
        return Transition(state)

    if tab == DashboardTab.RECOMMENDATIONS:
        if state.active_tab == DashboardTab.RECOMMENDATIONS and state.recommendations.is_settled:
            return Transition(state)
        request_id = state.request_seq + 1
        return Transition(
            state.model_copy(
                update={
                    "session": state.session.model_copy(update={"active_tab": tab}),
                    "recommendations": RecommendationLoadState.loading(),
                    "request_seq": request_id,
                }
            ),
            start_request=request_id,
        )

    if state.active_tab == tab:
        return Transition(state)
    return Transition(
        state.model_copy(
            update={"session": state.session.model_copy(update={"active_tab": tab})}
        )
    )


# ── Generator completion ──────────────────────────────────────────────────────

def accepts_result(state: DashboardState, request_id: int) -> bool:
    """Return ``True`` if a completion for ``request_id`` may mutate ``state``."""
    return (
        state.is_logged_in
        and state.active_tab == DashboardTab.RECOMMENDATIONS
        and request_id == state.request_seq
    )


def complete_generation(
    state: DashboardState,
    request_id: int,
    batch: RecommendationBatch,
) -> Transition:
    """Deliver ``ready(batch)`` if the completion guard holds; else unchanged."""
    if not accepts_result(state, request_id):
        logger.debug(
            "Dropping stale recommendation batch | request_id=%d current=%d tab=%s logged_in=%s",
            request_id, state.request_seq, state.active_tab.value, state.is_logged_in,
        )
        return Transition(state)
    return Transition(
        state.model_copy(update={"recommendations": RecommendationLoadState.ready(batch)})
    )


def fail_generation(
    state: DashboardState,
    request_id: int,
    reason: str,
) -> Transition:
    """Deliver ``failed(reason)`` if the completion guard holds; else unchanged.

    A blank ``reason`` is recorded as ``"unknown error"``.
    """
    if not accepts_result(state, request_id):
        logger.debug(
            "Dropping stale generation failure | request_id=%d current=%d",
            request_id, state.request_seq,
        )
        return Transition(state)
    reason = (reason or "").strip() or "unknown error"
    return Transition(
        state.model_copy(update={"recommendations": RecommendationLoadState.failed(reason)})
    )
