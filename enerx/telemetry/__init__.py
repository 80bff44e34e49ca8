"""
Telemetry ingestion boundary.

Submodules:
  loader — demo bundle, JSON seed loading, per-sample validation.

Samples that violate an invariant are dropped here and logged; the session
layer only ever sees validated, frozen ``TelemetryBundle`` instances.
"""
