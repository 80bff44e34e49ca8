"""
Error taxonomy for the dashboard core.

``GenerationFailure``  — the recommendation source could not produce a batch.
                         The controller turns it into ``failed(reason)``.
``InvalidSample``      — a telemetry sample broke a value invariant. Raised
                         and caught inside the ingestion boundary; logged,
                         never shown to the view.
``TelemetryLoadError`` — a telemetry seed file is missing or structurally
                         unusable.

A stale generation result is not an error: the controller drops it and logs
at DEBUG.
"""

from __future__ import annotations

from typing import Any


class GenerationFailure(RuntimeError):
    """Raised by a recommendation generator that cannot complete.

    Attributes:
        reason: Human-readable reason, shown in the ``failed`` state.
    """

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Recommendation generation failed: {reason}")


class InvalidSample(ValueError):
    """Raised when a telemetry record violates a sample invariant.

    Attributes:
        series: ``"generation"`` or ``"savings"``.
        index:  Position of the record in its input series.
        record: The raw record as received.
    """

    def __init__(self, series: str, index: int, record: Any, detail: str) -> None:
        self.series = series
        self.index = index
        self.record = record
        super().__init__(f"Invalid {series} sample at index {index}: {detail}")


class TelemetryLoadError(RuntimeError):
    """Raised when a telemetry file cannot be read or has the wrong shape."""
