"""
enerx.reporting — terminal formatting and JSON export of dashboard snapshots.

This package only reads snapshots; it never issues intents.

Modules:
  formatters — ASCII terminal formatters for the Typer CLI.
  export     — JSON report export ("Download Report").
"""
