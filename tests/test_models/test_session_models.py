"""Tests for SessionState, RecommendationLoadState, and DashboardState."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from enerx.models.session import DashboardState, RecommendationLoadState, SessionState
from enerx.taxonomy.dashboard_taxonomy import DashboardTab, LoadStatus


class TestRecommendationLoadState:
    def test_default_is_idle(self):
        state = RecommendationLoadState()
        assert state.status == LoadStatus.IDLE
        assert state.batch is None
        assert state.reason is None

    def test_ready_carries_batch(self, sample_batch):
        state = RecommendationLoadState.ready(sample_batch)
        assert state.status == LoadStatus.READY
        assert state.batch is sample_batch
        assert state.is_settled

    def test_ready_without_batch_raises(self):
        with pytest.raises(ValidationError, match="requires a batch"):
            RecommendationLoadState(status=LoadStatus.READY)

    def test_loading_with_batch_raises(self, sample_batch):
        with pytest.raises(ValidationError, match="must not carry a batch"):
            RecommendationLoadState(status=LoadStatus.LOADING, batch=sample_batch)

    def test_failed_requires_reason(self):
        with pytest.raises(ValidationError, match="non-empty reason"):
            RecommendationLoadState(status=LoadStatus.FAILED, reason=" ")

    def test_idle_with_reason_raises(self):
        with pytest.raises(ValidationError, match="must not carry a reason"):
            RecommendationLoadState(status=LoadStatus.IDLE, reason="oops")

    @pytest.mark.parametrize(
        "state",
        [
            RecommendationLoadState.idle(),
            RecommendationLoadState.loading(),
            RecommendationLoadState.failed("timeout"),
        ],
    )
    def test_only_ready_is_settled(self, state):
        assert not state.is_settled


class TestDashboardState:
    def test_default_is_logged_out(self):
        state = DashboardState()
        assert not state.is_logged_in
        assert state.active_tab == DashboardTab.OVERVIEW
        assert state.recommendations.status == LoadStatus.IDLE
        assert state.request_seq == 0

    def test_logged_out_with_loading_raises(self):
        with pytest.raises(ValidationError, match="idle recommendation state"):
            DashboardState(recommendations=RecommendationLoadState.loading())

    def test_logged_out_on_recommendations_tab_raises(self):
        with pytest.raises(ValidationError, match="overview tab"):
            DashboardState(
                session=SessionState(
                    is_authenticated=False, active_tab=DashboardTab.RECOMMENDATIONS
                )
            )

    def test_negative_request_seq_raises(self):
        with pytest.raises(ValidationError, match="request_seq"):
            DashboardState(request_seq=-1)

    def test_logged_in_may_be_loading(self):
        state = DashboardState(
            session=SessionState(is_authenticated=True, active_tab=DashboardTab.RECOMMENDATIONS),
            recommendations=RecommendationLoadState.loading(),
            request_seq=1,
        )
        assert state.is_logged_in
        assert state.recommendations.status == LoadStatus.LOADING
