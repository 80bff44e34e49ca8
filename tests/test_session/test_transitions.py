"""
Tests for enerx/session/transitions.py — the pure state machine.

What we test
------------
login / logout:
  - LoggedOut -> login -> LoggedIn{overview, idle}.
  - logout from every LoggedIn shape -> LoggedOut, request_seq advanced.
  - login after logout leaves no recommendation data behind.
  - Both are no-ops when they do not apply.

select_tab:
  - overview -> recommendations: loading + one new request token.
  - recommendations + ready -> recommendations: no-op.
  - recommendations + loading/failed -> recommendations: new request.
  - recommendations -> overview: load state unchanged.
  - Logged out: no-op.

complete_generation / fail_generation:
  - Applied only for the latest token while on the recommendations tab.
  - Dropped after logout, after leaving the tab, or for superseded tokens.
"""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from enerx.models.recommendation import RecommendationBatch
from enerx.models.session import DashboardState, RecommendationLoadState, SessionState
from enerx.recommendations.candidates import candidate_pool
from enerx.session import transitions
from enerx.taxonomy.dashboard_taxonomy import DashboardTab, LoadStatus

OVERVIEW = DashboardTab.OVERVIEW
RECS = DashboardTab.RECOMMENDATIONS


def _batch(request_id: int) -> RecommendationBatch:
    return RecommendationBatch(
        request_id=request_id,
        recommendations=tuple(candidate_pool()),
        generated_at=datetime(2026, 6, 15, tzinfo=timezone.utc),
    )


def _logged_in() -> DashboardState:
    return transitions.login(transitions.initial_state()).state


def _loading() -> tuple[DashboardState, int]:
    t = transitions.select_tab(_logged_in(), RECS)
    return t.state, t.start_request


def _ready() -> DashboardState:
    state, request_id = _loading()
    return transitions.complete_generation(state, request_id, _batch(request_id)).state


# ── login / logout ────────────────────────────────────────────────────────────

class TestLoginLogout:
    def test_initial_state_is_logged_out(self):
        state = transitions.initial_state()
        assert not state.is_logged_in
        assert state.recommendations.status == LoadStatus.IDLE

    def test_login_yields_overview_idle(self):
        t = transitions.login(transitions.initial_state())
        assert t.state.is_logged_in
        assert t.state.active_tab == OVERVIEW
        assert t.state.recommendations.status == LoadStatus.IDLE
        assert t.start_request is None

    def test_login_when_logged_in_is_noop(self):
        state = _ready()
        assert transitions.login(state).state is state

    @pytest.mark.parametrize("make_state", [
        _logged_in,
        lambda: _loading()[0],
        _ready,
        lambda: transitions.select_tab(_ready(), OVERVIEW).state,
        lambda: transitions.fail_generation(_loading()[0], 1, "down").state,
    ])
    def test_logout_from_any_logged_in_state(self, make_state):
        state = make_state()
        t = transitions.logout(state)
        assert not t.state.is_logged_in
        assert t.state.active_tab == OVERVIEW
        assert t.state.recommendations.status == LoadStatus.IDLE
        assert t.state.request_seq == state.request_seq + 1
        assert t.start_request is None

    def test_logout_when_logged_out_is_noop(self):
        state = transitions.initial_state()
        assert transitions.logout(state).state is state

    def test_login_after_logout_has_no_residual_data(self):
        state = transitions.logout(_ready()).state
        state = transitions.login(state).state
        assert state.session == SessionState(is_authenticated=True, active_tab=OVERVIEW)
        assert state.recommendations == RecommendationLoadState.idle()


# ── select_tab ────────────────────────────────────────────────────────────────

class TestSelectTab:
    def test_enter_recommendations_starts_loading(self):
        state = _logged_in()
        t = transitions.select_tab(state, RECS)
        assert t.state.active_tab == RECS
        assert t.state.recommendations.status == LoadStatus.LOADING
        assert t.start_request == state.request_seq + 1
        assert t.state.request_seq == t.start_request

    def test_reenter_when_ready_is_noop(self):
        state = _ready()
        t = transitions.select_tab(state, RECS)
        assert t.state is state
        assert t.start_request is None

    def test_reenter_while_loading_starts_new_request(self):
        state, first = _loading()
        t = transitions.select_tab(state, RECS)
        assert t.start_request == first + 1
        assert t.state.recommendations.status == LoadStatus.LOADING

    def test_reenter_after_failure_retries(self):
        state, request_id = _loading()
        failed = transitions.fail_generation(state, request_id, "timeout").state
        t = transitions.select_tab(failed, RECS)
        assert t.start_request == request_id + 1
        assert t.state.recommendations.status == LoadStatus.LOADING

    def test_leave_recommendations_keeps_load_state(self):
        state = _ready()
        t = transitions.select_tab(state, OVERVIEW)
        assert t.state.active_tab == OVERVIEW
        assert t.state.recommendations == state.recommendations
        assert t.start_request is None

    def test_return_from_overview_always_regenerates(self):
        state = transitions.select_tab(_ready(), OVERVIEW).state
        t = transitions.select_tab(state, RECS)
        assert t.start_request is not None
        assert t.state.recommendations.status == LoadStatus.LOADING

    def test_select_overview_when_on_overview_is_noop(self):
        state = _logged_in()
        assert transitions.select_tab(state, OVERVIEW).state is state

    @pytest.mark.parametrize("tab", [OVERVIEW, RECS])
    def test_logged_out_is_noop(self, tab):
        state = transitions.initial_state()
        t = transitions.select_tab(state, tab)
        assert t.state is state
        assert t.start_request is None


# ── Generator completion guard ────────────────────────────────────────────────

class TestCompletionGuard:
    def test_latest_request_is_applied(self):
        state, request_id = _loading()
        batch = _batch(request_id)
        t = transitions.complete_generation(state, request_id, batch)
        assert t.state.recommendations.status == LoadStatus.READY
        assert t.state.recommendations.batch is batch

    def test_superseded_request_is_dropped(self):
        state, first = _loading()
        state = transitions.select_tab(state, OVERVIEW).state
        t = transitions.select_tab(state, RECS)
        second = t.start_request

        after_first = transitions.complete_generation(t.state, first, _batch(first)).state
        assert after_first is t.state
        assert after_first.recommendations.status == LoadStatus.LOADING

        after_second = transitions.complete_generation(after_first, second, _batch(second)).state
        assert after_second.recommendations.batch.request_id == second

    def test_result_after_logout_is_dropped(self):
        state, request_id = _loading()
        logged_out = transitions.logout(state).state
        t = transitions.complete_generation(logged_out, request_id, _batch(request_id))
        assert t.state is logged_out

    def test_result_after_relogin_is_dropped(self):
        state, request_id = _loading()
        state = transitions.login(transitions.logout(state).state).state
        state = transitions.select_tab(state, RECS).state
        t = transitions.complete_generation(state, request_id, _batch(request_id))
        assert t.state is state
        assert t.state.recommendations.status == LoadStatus.LOADING

    def test_result_while_on_overview_is_dropped(self):
        state, request_id = _loading()
        on_overview = transitions.select_tab(state, OVERVIEW).state
        t = transitions.complete_generation(on_overview, request_id, _batch(request_id))
        assert t.state is on_overview

    def test_failure_applies_for_latest_request(self):
        state, request_id = _loading()
        t = transitions.fail_generation(state, request_id, "inverter feed offline")
        assert t.state.recommendations.status == LoadStatus.FAILED
        assert t.state.recommendations.reason == "inverter feed offline"

    @pytest.mark.parametrize("reason", ["", "   ", "\t\n"])
    def test_blank_reason_is_replaced(self, reason):
        state, request_id = _loading()
        t = transitions.fail_generation(state, request_id, reason)
        assert t.state.recommendations.status == LoadStatus.FAILED
        assert t.state.recommendations.reason == "unknown error"

    def test_reason_is_stripped(self):
        state, request_id = _loading()
        t = transitions.fail_generation(state, request_id, "  timeout \n")
        assert t.state.recommendations.reason == "timeout"

    def test_stale_failure_is_dropped(self):
        state, request_id = _loading()
        logged_out = transitions.logout(state).state
        assert transitions.fail_generation(logged_out, request_id, "x").state is logged_out

    def test_accepts_result(self):
        state, request_id = _loading()
        assert transitions.accepts_result(state, request_id)
        assert not transitions.accepts_result(state, request_id - 1)
        assert not transitions.accepts_result(transitions.initial_state(), 0)
