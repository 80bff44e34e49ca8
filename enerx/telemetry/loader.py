"""
Telemetry ingestion boundary: JSON / built-in demo data → ``TelemetryBundle``.

Responsibilities
----------------
1. Provide the built-in EnerX demo bundle (``demo_telemetry()``).
2. Load a telemetry seed file (``load_telemetry(path)``) of the form::

       {
         "generation": [{"time_of_day": "09:00", "kilowatt_hours": 2.8}, ...],
         "savings":    [{"period": "Jan", "carbon_saved_kg": 120}, ...],
         "stats":      {"today_generation_kwh": 18.5, ...}
       }

Validation rules
----------------
- A generation or savings record that fails validation (negative or
  non-finite value, unknown label, missing key) is an ``InvalidSample``:
  it is dropped and logged as a warning. The remaining samples keep their
  input order.
- Duplicate labels within one series are rejected as ``InvalidSample``
  (the later record is dropped).
- A missing or unreadable file, non-UTF-8 bytes, invalid JSON, a non-object
  top level, or an invalid ``stats`` block raises ``TelemetryLoadError``.

Usage
-----
    from enerx.telemetry.loader import load_telemetry

    bundle = load_telemetry(Path("config/telemetry/demo_dashboard.json"))
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from enerx.errors import InvalidSample, TelemetryLoadError
from enerx.models.telemetry import (
    GenerationSample,
    SavingsSample,
    TelemetryBundle,
    UserStats,
)

log = logging.getLogger(__name__)


# ── Built-in demo data ────────────────────────────────────────────────────────

_DEMO_GENERATION: tuple[tuple[str, float], ...] = (
    ("00:00", 0.0),
    ("03:00", 0.0),
    ("06:00", 0.5),
    ("09:00", 2.8),
    ("12:00", 4.5),
    ("15:00", 3.9),
    ("18:00", 1.2),
    ("21:00", 0.0),
)

_DEMO_SAVINGS: tuple[tuple[str, float], ...] = (
    ("Jan", 120.0),
    ("Feb", 145.0),
    ("Mar", 168.0),
    ("Apr", 192.0),
    ("May", 215.0),
    ("Jun", 234.0),
)

_DEMO_STATS: dict[str, Any] = {
    "today_generation_kwh": 18.5,
    "month_generation_kwh": 487.0,
    "carbon_saved_kg":      234.0,
    "trees_equivalent":     11,
    "rank_label":           "Top 15%",
    "streak_days":          47,
}


def demo_telemetry() -> TelemetryBundle:
    """Return the built-in demo bundle used when no seed file is configured."""
    return TelemetryBundle(
        generation=tuple(
            GenerationSample(time_of_day=t, kilowatt_hours=kwh)
            for t, kwh in _DEMO_GENERATION
        ),
        savings=tuple(
            SavingsSample(period=p, carbon_saved_kg=kg) for p, kg in _DEMO_SAVINGS
        ),
        stats=UserStats(**_DEMO_STATS),
    )


# ── Series parsing ────────────────────────────────────────────────────────────

def _parse_series(
    series: str,
    records: list[Any],
    model: type[GenerationSample] | type[SavingsSample],
    label_key: str,
) -> tuple[list[Any], list[InvalidSample]]:
    accepted: list[Any] = []
    rejected: list[InvalidSample] = []
    seen_labels: set[str] = set()

    for i, rec in enumerate(records):
        try:
            if not isinstance(rec, dict):
                raise InvalidSample(series, i, rec, "record is not an object")
            try:
                sample = model(**rec)
            except ValidationError as exc:
                raise InvalidSample(series, i, rec, _first_error(exc)) from exc
            label = getattr(sample, label_key)
            if label in seen_labels:
                raise InvalidSample(series, i, rec, f"duplicate {label_key} '{label}'")
        except InvalidSample as exc:
            log.warning("%s -- skipping.", exc)
            rejected.append(exc)
            continue
        seen_labels.add(label)
        accepted.append(sample)

    return accepted, rejected


def parse_generation_samples(
    records: list[Any],
) -> tuple[list[GenerationSample], list[InvalidSample]]:
    """Validate generation records, keeping input order.

    Args:
        records: Raw dicts with ``time_of_day`` and ``kilowatt_hours``.

    Returns:
        Tuple of (accepted samples, rejected ``InvalidSample`` errors).
    """
    return _parse_series("generation", records, GenerationSample, "time_of_day")


def parse_savings_samples(
    records: list[Any],
) -> tuple[list[SavingsSample], list[InvalidSample]]:
    """Validate savings records, keeping input order.

    Args:
        records: Raw dicts with ``period`` and ``carbon_saved_kg``.

    Returns:
        Tuple of (accepted samples, rejected ``InvalidSample`` errors).
    """
    return _parse_series("savings", records, SavingsSample, "period")


def _first_error(exc: ValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return str(exc)
    err = errors[0]
    loc = ".".join(str(p) for p in err.get("loc", ()))
    return f"{loc}: {err.get('msg', 'invalid')}" if loc else err.get("msg", "invalid")


# ── Top-level entry point ─────────────────────────────────────────────────────

def build_bundle(raw: dict[str, Any]) -> TelemetryBundle:
    """Build a ``TelemetryBundle`` from an already-parsed telemetry dict.

    Raises:
        TelemetryLoadError: If a series is not a list or ``stats`` is invalid.
    """
    generation_raw = raw.get("generation", [])
    savings_raw = raw.get("savings", [])
    if not isinstance(generation_raw, list):
        raise TelemetryLoadError("'generation' must be an array of samples.")
    if not isinstance(savings_raw, list):
        raise TelemetryLoadError("'savings' must be an array of samples.")

    stats_raw = raw.get("stats")
    if not isinstance(stats_raw, dict):
        raise TelemetryLoadError("'stats' must be an object.")
    try:
        stats = UserStats(**stats_raw)
    except ValidationError as exc:
        raise TelemetryLoadError(f"Invalid stats block: {_first_error(exc)}") from exc

    generation, gen_rejected = parse_generation_samples(generation_raw)
    savings, sav_rejected = parse_savings_samples(savings_raw)
    if gen_rejected or sav_rejected:
        log.warning(
            "Dropped %d generation and %d savings sample(s) at ingestion.",
            len(gen_rejected), len(sav_rejected),
        )

    return TelemetryBundle(
        generation=tuple(generation),
        savings=tuple(savings),
        stats=stats,
    )


def load_telemetry(path: Path) -> TelemetryBundle:
    """Load and validate a telemetry seed file.

    Args:
        path: JSON file with ``generation``, ``savings`` and ``stats`` keys.

    Returns:
        Validated ``TelemetryBundle``; invalid samples are already dropped.

    Raises:
        TelemetryLoadError: If the file is missing, unreadable, not UTF-8 JSON,
            or malformed.
    """
    path = Path(path)
    if not path.exists():
        raise TelemetryLoadError(f"Telemetry file not found: {path}")

    log.info("Loading telemetry from %s", path)
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise TelemetryLoadError(f"Telemetry file {path} is not valid UTF-8: {exc}") from exc
    except OSError as exc:
        raise TelemetryLoadError(f"Telemetry file {path} could not be read: {exc}") from exc

    try:
        raw = json.loads(text)
    except json.JSONDecodeError as exc:
        raise TelemetryLoadError(f"Telemetry file {path} is not valid JSON: {exc}") from exc

    if not isinstance(raw, dict):
        raise TelemetryLoadError(f"Telemetry file {path} must contain a JSON object.")

    bundle = build_bundle(raw)
    log.info(
        "Loaded telemetry: %d generation sample(s), %d savings sample(s).",
        len(bundle.generation), len(bundle.savings),
    )
    return bundle


def resolve_telemetry(seed_file: str | None) -> TelemetryBundle:
    """Return the bundle for ``seed_file``, or the demo bundle when it is empty."""
    if not seed_file:
        return demo_telemetry()
    return load_telemetry(Path(seed_file))
