"""
EnerX dashboard core — CLI entry point.

All commands follow this pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Configure logging.
  3. Build a ``DashboardController`` (telemetry + generator).
  4. Issue intents and, where needed, await the pending generation.
  5. Report the resulting snapshot to stdout.

Install and run::

    pip install -e .
    enerx --help
    enerx validate-config
    enerx show-dashboard
    enerx recommend --latency 0.5
    enerx simulate
    enerx export-snapshot --with-recommendations
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Optional

import typer

from enerx.taxonomy.dashboard_taxonomy import DashboardTab, LoadStatus

app = typer.Typer(
    name="enerx",
    help="EnerX renewable-energy dashboard core — terminal front end.",
    add_completion=False,
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None):
    """Load AppConfig, printing a friendly error and exiting on failure."""
    from enerx.config import load_config

    try:
        cfg_path = Path(config_path) if config_path else None
        return load_config(cfg_path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except Exception as exc:
        typer.echo(f"[ERROR] Config validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _configure_logging(config):
    """Set up logging from config."""
    from enerx.utils.logging import configure_logging
    configure_logging(config.logging, debug=config.debug)


def _build_controller_or_exit(
    config,
    telemetry_file: Optional[str] = None,
    latency: Optional[float] = None,
):
    """Build a DashboardController, applying CLI overrides to the config."""
    from enerx.errors import TelemetryLoadError
    from enerx.recommendations.generator import ScriptedRecommendationGenerator
    from enerx.session.controller import DashboardController
    from enerx.telemetry.loader import resolve_telemetry

    seed_file = telemetry_file if telemetry_file is not None else config.telemetry.seed_file
    latency_seconds = latency if latency is not None else config.generator.latency_seconds

    try:
        telemetry = resolve_telemetry(seed_file)
        generator = ScriptedRecommendationGenerator(latency_seconds=latency_seconds)
    except TelemetryLoadError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except ValueError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)

    return DashboardController(generator=generator, telemetry=telemetry)


async def _open_recommendations(controller):
    """Log in, enter the recommendations tab, and wait for the batch."""
    controller.login()
    controller.select_tab(DashboardTab.RECOMMENDATIONS)
    return await controller.wait_for_pending()


# ── Commands ──────────────────────────────────────────────────────────────────

@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file (default: config/default.toml).",
    ),
    show_full: bool = typer.Option(
        False,
        "--full",
        help="Print full config including all fields.",
    ),
) -> None:
    """Validate the configuration file and print parsed values.

    Exits with code 1 if the config fails validation.
    """
    config = _load_config_or_exit(config_path)

    typer.echo("Configuration validated successfully.")
    typer.echo("")
    typer.echo(f"  Generator latency: {config.generator.latency_seconds:g}s")
    typer.echo(f"  Telemetry file:    {config.telemetry.seed_file or '(built-in demo data)'}")
    typer.echo(f"  Export directory:  {config.export.output_dir}")
    typer.echo(f"  Log level:         {config.logging.level}")
    typer.echo(f"  Debug mode:        {config.debug}")

    if show_full:
        typer.echo("")
        typer.echo("Full config (JSON):")
        typer.echo(json.dumps(config.model_dump(), indent=2, default=str))

    typer.echo("")
    typer.echo("[OK] Config valid.")


@app.command("show-dashboard")
def show_dashboard(
    telemetry_file: Optional[str] = typer.Option(
        None,
        "--telemetry",
        help="Telemetry JSON file. Defaults to config telemetry.seed_file.",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print the snapshot as JSON instead of text.",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Log in and print the overview tab (stat cards, generation, savings)."""
    from enerx.reporting.formatters import format_dashboard

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    controller = _build_controller_or_exit(config, telemetry_file=telemetry_file)

    controller.login()
    snapshot = controller.snapshot()

    if as_json:
        typer.echo(json.dumps(snapshot.model_dump(mode="json"), indent=2, ensure_ascii=False))
    else:
        typer.echo(format_dashboard(snapshot))


@app.command("recommend")
def recommend(
    latency: Optional[float] = typer.Option(
        None,
        "--latency",
        help="Override simulated generation latency in seconds.",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print the recommendation batch as JSON.",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Open the recommendations tab and print the delivered batch.

    Exits with code 1 if generation ends in the failed state.
    """
    from enerx.reporting.formatters import format_recommendation_state

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    controller = _build_controller_or_exit(config, latency=latency)

    if not as_json:
        typer.echo("Analyzing your energy data...")
    snapshot = asyncio.run(_open_recommendations(controller))
    recs_state = snapshot.recommendations

    if recs_state.status == LoadStatus.FAILED:
        typer.echo(f"[ERROR] {recs_state.reason}", err=True)
        raise typer.Exit(code=1)

    if as_json:
        typer.echo(json.dumps(recs_state.model_dump(mode="json"), indent=2, ensure_ascii=False))
        return

    typer.echo("")
    typer.echo(format_recommendation_state(recs_state))
    typer.echo("")
    typer.echo("[OK] Recommendations ready.")


@app.command("simulate")
def simulate(
    latency: Optional[float] = typer.Option(
        None,
        "--latency",
        help="Override simulated generation latency in seconds.",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Run the login / tab-switch / logout scenarios and print every transition.

    \b
      A — login
      B — open recommendations and wait for the batch
      C — leave and re-enter recommendations while loading
      D — log out while loading
    """
    from enerx.reporting.formatters import format_transition_line

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    controller = _build_controller_or_exit(config, latency=latency)

    step = 0

    def _print(snapshot) -> None:
        nonlocal step
        step += 1
        typer.echo(format_transition_line(step, snapshot))

    async def _run() -> None:
        controller.subscribe(_print)

        typer.echo("Scenario A: login")
        controller.login()

        typer.echo("Scenario B: open recommendations")
        controller.select_tab(DashboardTab.RECOMMENDATIONS)
        await controller.wait_for_pending()

        typer.echo("Scenario C: re-enter recommendations while loading")
        controller.logout()
        controller.login()
        controller.select_tab(DashboardTab.RECOMMENDATIONS)
        controller.select_tab(DashboardTab.OVERVIEW)
        controller.select_tab(DashboardTab.RECOMMENDATIONS)
        await controller.wait_for_pending()

        typer.echo("Scenario D: logout while loading")
        controller.select_tab(DashboardTab.OVERVIEW)
        controller.select_tab(DashboardTab.RECOMMENDATIONS)
        controller.logout()
        await controller.wait_for_pending()

    asyncio.run(_run())
    typer.echo("")
    typer.echo(f"[OK] {step} transition(s) observed.")


@app.command("export-snapshot")
def export_snapshot(
    output: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output JSON path. Defaults to <export.output_dir>/dashboard_report_<date>.json.",
    ),
    with_recommendations: bool = typer.Option(
        False,
        "--with-recommendations",
        help="Generate recommendations first and include them in the report.",
    ),
    latency: Optional[float] = typer.Option(
        None,
        "--latency",
        help="Override simulated generation latency in seconds.",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Write the dashboard snapshot to a JSON report file."""
    from enerx.reporting.export import default_report_path, export_to_json, snapshot_to_report

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    controller = _build_controller_or_exit(config, latency=latency)

    if with_recommendations:
        snapshot = asyncio.run(_open_recommendations(controller))
    else:
        controller.login()
        snapshot = controller.snapshot()

    out_path = Path(output) if output else default_report_path(Path(config.export.output_dir))
    report = snapshot_to_report(snapshot, include_recommendations=with_recommendations)
    written = export_to_json(report, out_path)

    typer.echo(f"  Report written: {written}")
    typer.echo("[OK] Snapshot exported.")


if __name__ == "__main__":
    app()
