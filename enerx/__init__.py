"""
EnerX dashboard core — renewable-energy dashboard state and recommendations.

Subpackages:
  taxonomy        — Enumerations shared by every layer (tabs, priorities, icons).
  models          — Frozen pydantic value types for telemetry, recommendations,
                    and session state.
  telemetry       — Ingestion boundary for generation/savings series and stats.
  recommendations — Candidate pool and async recommendation generators.
  session         — Pure transition functions and the asyncio controller.
  reporting       — Terminal formatters and JSON export for the CLI.
"""

__version__ = "0.1.0"
