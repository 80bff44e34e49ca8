"""
Snapshot export helpers (the dashboard's "Download Report" action).

All functions write to disk and return the written ``Path``.

``snapshot_to_report()`` is the main adapter: it flattens a
``DashboardSnapshot`` into a plain JSON-ready dict with totals next to the
raw series, so the file can be read without knowing the model classes.
"""

from __future__ import annotations

import json
from datetime import date
from pathlib import Path
from typing import Any

from enerx.models.session import DashboardSnapshot
from enerx.recommendations.candidates import summarize_priorities
from enerx.taxonomy.dashboard_taxonomy import LoadStatus
from enerx.utils.time_utils import isoformat_z, utcnow


def snapshot_to_report(
    snapshot: DashboardSnapshot,
    include_recommendations: bool = True,
) -> dict[str, Any]:
    """Convert a snapshot into a JSON-serialisable report dict.

    Args:
        snapshot:                Snapshot to export.
        include_recommendations: Include the delivered batch, if any.

    Returns:
        Dict with ``generated_at``, ``stats``, ``generation``, ``savings``,
        ``totals`` and (optionally) ``recommendations``.
    """
    generation = [s.model_dump(mode="json") for s in snapshot.generation]
    savings = [s.model_dump(mode="json") for s in snapshot.savings]

    report: dict[str, Any] = {
        "generated_at": isoformat_z(utcnow()),
        "stats":        snapshot.stats.model_dump(mode="json"),
        "generation":   generation,
        "savings":      savings,
        "totals": {
            "generation_kwh":  round(sum(s.kilowatt_hours for s in snapshot.generation), 3),
            "carbon_saved_kg": round(sum(s.carbon_saved_kg for s in snapshot.savings), 3),
        },
    }

    if include_recommendations:
        recs_state = snapshot.recommendations
        section: dict[str, Any] = {"status": recs_state.status.value}
        if recs_state.status == LoadStatus.READY and recs_state.batch is not None:
            batch = recs_state.batch
            section["request_id"] = batch.request_id
            section["generated_at"] = isoformat_z(batch.generated_at)
            section["by_priority"] = {
                p.value: n for p, n in summarize_priorities(batch.recommendations).items()
            }
            section["items"] = [r.model_dump(mode="json") for r in batch.recommendations]
        elif recs_state.status == LoadStatus.FAILED:
            section["reason"] = recs_state.reason
        report["recommendations"] = section

    return report


def export_to_json(data: dict | list, path: Path) -> Path:
    """Write ``data`` to a pretty-printed UTF-8 JSON file.

    Args:
        data: Dict or list to serialise.
        path: Destination file path (parent dirs created if missing).

    Returns:
        ``path`` as written.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2, default=str, ensure_ascii=False), encoding="utf-8")
    return path


def default_report_path(output_dir: Path, run_date: date | None = None) -> Path:
    """Return ``<output_dir>/dashboard_report_<date>.json``."""
    if run_date is None:
        run_date = date.today()
    return output_dir / f"dashboard_report_{run_date.isoformat()}.json"
