"""
Dashboard taxonomy for the EnerX core.

Four small vocabularies describe everything the presentation layer switches on:
  - ``DashboardTab``  — which dashboard view is active.
  - ``Priority``      — urgency band of a recommendation.
  - ``CategoryIcon``  — symbolic icon tag the renderer maps to an image.
  - ``LoadStatus``    — lifecycle of the recommendation fetch.

Fixed label sequences for the sample series are also defined here:
  - ``DAILY_TIME_SLOTS`` — the eight three-hourly labels of a generation day.
  - ``MONTH_LABELS``     — three-letter month abbreviations for savings.

Usage example::

    from enerx.taxonomy.dashboard_taxonomy import DashboardTab, Priority

    tab = DashboardTab.RECOMMENDATIONS
    band = Priority.HIGH

This module has NO imports from any other ``enerx`` package.
"""

from enum import StrEnum


class DashboardTab(StrEnum):
    """Dashboard view selectable by the user once logged in."""

    OVERVIEW = "overview"
    """Stat cards, generation chart, and carbon savings chart."""

    RECOMMENDATIONS = "recommendations"
    """AI-style recommendation list; entering it triggers generation."""


class Priority(StrEnum):
    """Urgency band of a recommendation, highest first."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class CategoryIcon(StrEnum):
    """Symbolic icon tag attached to each recommendation."""

    SUN = "sun"
    BATTERY = "battery"
    CLOUD_RAIN = "cloud_rain"
    ZAP = "zap"
    TARGET = "target"


class LoadStatus(StrEnum):
    """Lifecycle of one recommendation fetch."""

    IDLE = "idle"
    """Nothing requested since login (or since the last logout)."""

    LOADING = "loading"
    """A generation request is in flight."""

    READY = "ready"
    """A batch was delivered for the current request."""

    FAILED = "failed"
    """The generator could not complete; a retry re-enters the tab."""


# Sort rank for Priority: lower sorts first.
PRIORITY_ORDER: dict[Priority, int] = {
    Priority.HIGH:   0,
    Priority.MEDIUM: 1,
    Priority.LOW:    2,
}

DAILY_TIME_SLOTS: tuple[str, ...] = (
    "00:00", "03:00", "06:00", "09:00", "12:00", "15:00", "18:00", "21:00",
)

MONTH_LABELS: tuple[str, ...] = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)
