"""
ASCII terminal formatters for CLI commands.

All formatters accept models from ``enerx.models`` and return plain
multi-line strings suitable for ``typer.echo()``.

No third-party dependencies (no ``rich``, no ``colorama``).

Generation bars
---------------
``format_generation_chart()`` draws one horizontal bar per time slot scaled
to the peak slot, so the midday peak is visible at a glance::

  12:00  ##############################   4.5 kWh
  15:00  ##########################       3.9 kWh
"""

from __future__ import annotations

from enerx.models.recommendation import Recommendation
from enerx.models.session import DashboardSnapshot, RecommendationLoadState
from enerx.models.telemetry import GenerationSample, SavingsSample, UserStats
from enerx.taxonomy.dashboard_taxonomy import LoadStatus

_BAR_WIDTH = 30


def format_stat_cards(stats: UserStats) -> str:
    """Format the four overview stat cards and the rank badge."""
    rows = [
        ("Today's Generation", f"{stats.today_generation_kwh:g} kWh"),
        ("This Month",         f"{stats.month_generation_kwh:g} kWh"),
        ("Carbon Saved",       f"{stats.carbon_saved_kg:g} kg CO2"),
        ("Trees Equivalent",   f"{stats.trees_equivalent} ({stats.streak_days} day streak)"),
    ]
    lines = [f"  Rank: {stats.rank_label} in your region", ""]
    for label, value in rows:
        lines.append(f"  {label:<20}  {value}")
    return "\n".join(lines)


def format_generation_chart(samples: tuple[GenerationSample, ...] | list[GenerationSample]) -> str:
    """Format the intra-day generation series as horizontal bars."""
    if not samples:
        return "  (no generation data)"
    peak = max(s.kilowatt_hours for s in samples)
    lines: list[str] = []
    for s in samples:
        width = round(_BAR_WIDTH * s.kilowatt_hours / peak) if peak > 0 else 0
        lines.append(f"  {s.time_of_day}  {'#' * width:<{_BAR_WIDTH}}  {s.kilowatt_hours:>5.1f} kWh")
    return "\n".join(lines)


def format_savings_table(samples: tuple[SavingsSample, ...] | list[SavingsSample]) -> str:
    """Format the monthly carbon savings series with month-on-month change."""
    if not samples:
        return "  (no savings data)"
    lines = [f"  {'Month':<5}  {'Saved (kg)':>10}  {'Change':>8}", "  " + "-" * 27]
    prev: float | None = None
    for s in samples:
        if prev is None or prev == 0:
            change = ""
        else:
            change = f"{(s.carbon_saved_kg - prev) / prev:+.1%}"
        lines.append(f"  {s.period:<5}  {s.carbon_saved_kg:>10.1f}  {change:>8}")
        prev = s.carbon_saved_kg
    return "\n".join(lines)


def format_recommendation(rec: Recommendation) -> str:
    """Format one recommendation card."""
    return "\n".join([
        f"  [{rec.priority.value.upper():<6}] {rec.title}  ({rec.category_icon.value})",
        f"           {rec.description}",
        f"           Impact: {rec.impact_label}",
    ])


def format_recommendation_state(state: RecommendationLoadState) -> str:
    """Format the recommendations tab body for any load status."""
    if state.status == LoadStatus.IDLE:
        return "  (recommendations not requested yet)"
    if state.status == LoadStatus.LOADING:
        return "  Analyzing your energy data..."
    if state.status == LoadStatus.FAILED:
        return f"  [FAILED] {state.reason}\n  Re-open the recommendations tab to retry."

    recs = state.batch.recommendations if state.batch is not None else ()
    if not recs:
        return "  (no recommendations for this period)"
    return "\n\n".join(format_recommendation(r) for r in recs)


def format_dashboard(snapshot: DashboardSnapshot) -> str:
    """Format a full dashboard snapshot: header, overview, and the active tab."""
    session = snapshot.session
    lines: list[str] = [""]
    if not session.is_authenticated:
        lines.append("=== EnerX ===")
        lines.append("  Logged out.")
        return "\n".join(lines)

    lines.append(f"=== EnerX Dashboard [{session.active_tab.value}] ===")
    lines.append("")
    lines.append(format_stat_cards(snapshot.stats))
    lines.append("")
    lines.append("--- Solar Generation (today) ---")
    lines.append(format_generation_chart(snapshot.generation))
    lines.append("")
    lines.append("--- Carbon Savings ---")
    lines.append(format_savings_table(snapshot.savings))
    lines.append("")
    lines.append(f"--- AI Recommendations [{snapshot.recommendations.status.value}] ---")
    lines.append(format_recommendation_state(snapshot.recommendations))
    return "\n".join(lines)


def format_transition_line(step: int, snapshot: DashboardSnapshot) -> str:
    """One-line summary of a snapshot, used by the ``simulate`` command."""
    session = snapshot.session
    if not session.is_authenticated:
        return f"  {step:>3}. LoggedOut"
    recs = snapshot.recommendations
    detail = recs.status.value
    if recs.status == LoadStatus.READY and recs.batch is not None:
        detail = f"ready(batch of {len(recs.batch.recommendations)}, request {recs.batch.request_id})"
    elif recs.status == LoadStatus.FAILED:
        detail = f"failed({recs.reason})"
    return f"  {step:>3}. LoggedIn{{{session.active_tab.value}, {detail}}}"
