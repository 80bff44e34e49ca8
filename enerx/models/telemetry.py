"""
Telemetry value models — the data that drives the overview tab.

``GenerationSample`` is one point of the intra-day solar generation series.
``SavingsSample`` is one point of the monthly carbon savings series.
``UserStats`` is the aggregate snapshot shown on the stat cards.

All three are frozen. They are produced by an external telemetry source and
only consumed by the dashboard core; the non-negativity checks below are the
only validation the core performs on them.
"""

from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict, field_validator

from enerx.taxonomy.dashboard_taxonomy import DAILY_TIME_SLOTS, MONTH_LABELS

_VALID_TIME_SLOTS: frozenset[str] = frozenset(DAILY_TIME_SLOTS)
_VALID_MONTHS: frozenset[str] = frozenset(MONTH_LABELS)


class GenerationSample(BaseModel):
    """Energy generated in one three-hour slot of the day.

    Attributes:
        time_of_day: Slot label, one of ``DAILY_TIME_SLOTS`` (e.g. ``"12:00"``).
        kilowatt_hours: Energy generated in the slot; non-negative.
    """

    model_config = ConfigDict(frozen=True)

    time_of_day: str
    kilowatt_hours: float

    @field_validator("time_of_day")
    @classmethod
    def validate_time_of_day(cls, v: str) -> str:
        if v not in _VALID_TIME_SLOTS:
            raise ValueError(
                f"Unknown time_of_day '{v}'. Must be one of {list(DAILY_TIME_SLOTS)}."
            )
        return v

    @field_validator("kilowatt_hours")
    @classmethod
    def validate_kwh_non_negative(cls, v: float) -> float:
        if not math.isfinite(v) or v < 0:
            raise ValueError(f"kilowatt_hours must be a finite non-negative number, got {v}.")
        return v


class SavingsSample(BaseModel):
    """Carbon saved in one calendar month.

    Attributes:
        period: Three-letter month label, e.g. ``"Mar"``.
        carbon_saved_kg: Kilograms of CO2 avoided in the month; non-negative.
    """

    model_config = ConfigDict(frozen=True)

    period: str
    carbon_saved_kg: float

    @field_validator("period")
    @classmethod
    def validate_period(cls, v: str) -> str:
        if v not in _VALID_MONTHS:
            raise ValueError(
                f"Unknown period '{v}'. Must be one of {list(MONTH_LABELS)}."
            )
        return v

    @field_validator("carbon_saved_kg")
    @classmethod
    def validate_carbon_non_negative(cls, v: float) -> float:
        if not math.isfinite(v) or v < 0:
            raise ValueError(f"carbon_saved_kg must be a finite non-negative number, got {v}.")
        return v


class UserStats(BaseModel):
    """Aggregate snapshot for the stat cards and the rank badge.

    Recomputed by the telemetry source; the dashboard never mutates it.

    Attributes:
        today_generation_kwh: Energy generated so far today.
        month_generation_kwh: Energy generated month-to-date.
        carbon_saved_kg: Month-to-date CO2 avoided.
        trees_equivalent: Carbon savings expressed as trees planted.
        rank_label: Free-form percentile band, e.g. ``"Top 15%"``.
        streak_days: Consecutive days with recorded generation.
    """

    model_config = ConfigDict(frozen=True)

    today_generation_kwh: float
    month_generation_kwh: float
    carbon_saved_kg: float
    trees_equivalent: int
    rank_label: str
    streak_days: int

    @field_validator(
        "today_generation_kwh",
        "month_generation_kwh",
        "carbon_saved_kg",
        "trees_equivalent",
        "streak_days",
    )
    @classmethod
    def validate_non_negative(cls, v: float) -> float:
        if not math.isfinite(v) or v < 0:
            raise ValueError("UserStats values must be finite and non-negative.")
        return v


class TelemetryBundle(BaseModel):
    """Everything the telemetry source hands the dashboard in one read.

    Attributes:
        generation: Intra-day generation series, chronological.
        savings: Monthly carbon savings series, chronological.
        stats: Aggregate snapshot for the stat cards.
    """

    model_config = ConfigDict(frozen=True)

    generation: tuple[GenerationSample, ...]
    savings: tuple[SavingsSample, ...]
    stats: UserStats

    @property
    def peak_generation(self) -> GenerationSample | None:
        """Highest-output slot of the day, or ``None`` for an empty series.

        Ties resolve to the earliest slot.
        """
        if not self.generation:
            return None
        return max(self.generation, key=lambda s: s.kilowatt_hours)

    @property
    def total_generation_kwh(self) -> float:
        return sum(s.kilowatt_hours for s in self.generation)
