"""Tests for enerx/taxonomy/dashboard_taxonomy.py."""

from __future__ import annotations

from enerx.taxonomy.dashboard_taxonomy import (
    DAILY_TIME_SLOTS,
    MONTH_LABELS,
    PRIORITY_ORDER,
    DashboardTab,
    LoadStatus,
    Priority,
)


def test_tab_values():
    assert {t.value for t in DashboardTab} == {"overview", "recommendations"}


def test_load_status_values():
    assert [s.value for s in LoadStatus] == ["idle", "loading", "ready", "failed"]


def test_priority_order_covers_every_priority():
    assert set(PRIORITY_ORDER) == set(Priority)
    assert PRIORITY_ORDER[Priority.HIGH] < PRIORITY_ORDER[Priority.MEDIUM] < PRIORITY_ORDER[Priority.LOW]


def test_daily_slots_are_three_hourly_and_sorted():
    assert len(DAILY_TIME_SLOTS) == 8
    assert list(DAILY_TIME_SLOTS) == sorted(DAILY_TIME_SLOTS)
    assert DAILY_TIME_SLOTS[0] == "00:00"
    assert DAILY_TIME_SLOTS[-1] == "21:00"


def test_month_labels():
    assert len(MONTH_LABELS) == 12
    assert MONTH_LABELS[0] == "Jan"
    assert MONTH_LABELS[-1] == "Dec"


def test_str_enum_compares_to_plain_string():
    assert DashboardTab.RECOMMENDATIONS == "recommendations"
    assert Priority("low") is Priority.LOW
