"""CLI for Rivalry Pairing."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from pathlib import Path
from typing import Annotated

import structlog
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from rivalry_pairing import __version__
from rivalry_pairing.core.config import RivalryConfig, load_config
from rivalry_pairing.core.errors import ConfigurationError
from rivalry_pairing.services.pairing import Matchup, PairingResult
from rivalry_pairing.services.pairing.service import PairingService
from rivalry_pairing.services.standings import (
    aggregate_metric,
    decide_winner,
    find_current_period,
    format_metric_value,
    kill_marks,
)
from rivalry_pairing.services.storage import SnapshotStore

# Configure structlog
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.dev.ConsoleRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

app = typer.Typer(
    name="rivalry-pairing",
    help="Rivalry Pairing - bi-weekly 1v1 matchups for ranked competitors",
    add_completion=False,
)
console = Console()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"rivalry-pairing v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option("--version", "-v", callback=version_callback, is_eager=True),
    ] = None,
) -> None:
    """Rivalry Pairing CLI."""


def _configure_logging(verbose: bool) -> None:
    log_level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def _load_optional_config(config_path: Path | None) -> RivalryConfig:
    if config_path is None:
        return RivalryConfig()
    console.print(f"[bold]Loading config:[/bold] {config_path}")
    return load_config(config_path)


def _print_pairings(result: PairingResult, scores: dict[str, float], period: int) -> None:
    table = Table(title=f"Rivalry Pairings - Period {period}")
    table.add_column("#", justify="right")
    table.add_column("Competitor A")
    table.add_column("Points", justify="right")
    table.add_column("Competitor B")
    table.add_column("Points", justify="right")

    for i, m in enumerate(result.matchups, 1):
        table.add_row(
            str(i),
            m.competitor_a,
            f"{scores.get(m.competitor_a, 0.0):.1f}",
            m.competitor_b,
            f"{scores.get(m.competitor_b, 0.0):.1f}",
        )

    console.print(table)
    if result.bye is not None:
        console.print(f"[yellow]Bye:[/yellow] {result.bye}")


@app.command()
def pair(
    snapshot_path: Annotated[Path, typer.Argument(help="Path to snapshot YAML/JSON file")],
    config_path: Annotated[
        Path | None, typer.Option("--config", "-c", help="Path to config YAML file")
    ] = None,
    output_dir: Annotated[
        Path | None, typer.Option("--output-dir", "-o", help="Override output directory")
    ] = None,
    save: Annotated[
        bool, typer.Option("--save/--no-save", help="Write pairing artifacts to disk")
    ] = True,
    verbose: Annotated[bool, typer.Option("--verbose", "-V", help="Verbose output")] = False,
) -> None:
    """Generate rivalry pairings for the period in a snapshot.

    Args:
        snapshot_path: Snapshot with period number, players, and history.
        config_path: Optional YAML config with pairing parameters.
        output_dir: Override the configured output directory.
        save: Whether to write JSON and markdown artifacts.
        verbose: Enable verbose logging.
    """
    _configure_logging(verbose)

    try:
        config = _load_optional_config(config_path)
        store = SnapshotStore(config, output_dir=output_dir)
        service = PairingService(config, store=store)

        snapshot = store.load(snapshot_path)
        result = service.generate(snapshot)
        _print_pairings(
            result,
            {p.id: p.total_points for p in snapshot.players},
            snapshot.period_number,
        )

        if save:
            saved_to = store.save_result(snapshot, result)
            console.print(f"Results saved to: {saved_to}")

    except FileNotFoundError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e
    except ConfigurationError as e:
        console.print(f"[red]{e}")
        raise typer.Exit(1) from e
    except Exception as e:
        console.print(f"[red]Unexpected error:[/red] {e}")
        if verbose:
            console.print_exception()
        raise typer.Exit(1) from e


@app.command()
def standings(
    snapshot_path: Annotated[Path, typer.Argument(help="Path to snapshot YAML/JSON file")],
    config_path: Annotated[
        Path, typer.Option("--config", "-c", help="Config YAML with the period schedule")
    ],
    today: Annotated[
        datetime | None,
        typer.Option("--today", formats=["%Y-%m-%d"], help="Date to evaluate (default: today)"),
    ] = None,
) -> None:
    """Show live metric totals for the current period's matchups.

    Args:
        snapshot_path: Snapshot holding matchup history and activities.
        config_path: Config whose period schedule defines the current period.
        today: Evaluation date, defaults to the current UTC date.
    """
    try:
        config = load_config(config_path)
        snapshot = SnapshotStore(config).load(snapshot_path)
        day = today.date() if today else datetime.now(UTC).date()

        period = find_current_period(config.periods, day)
        if period is None:
            console.print("[yellow]No active rivalry period[/yellow]")
            return

        matchups = [
            Matchup(competitor_a=r.player1_id, competitor_b=r.player2_id)
            for r in snapshot.history
            if r.period_number == period.period_number
        ]
        involved = [cid for m in matchups for cid in (m.competitor_a, m.competitor_b)]
        totals = aggregate_metric(snapshot.activities, period, involved)
        marks = kill_marks(snapshot.history)

        label = period.metric_label or period.metric
        table = Table(title=f"Period {period.period_number} - {label}")
        table.add_column("Competitor A")
        table.add_column(label, justify="right")
        table.add_column("Competitor B")
        table.add_column(label, justify="right")
        table.add_column("Leader")

        for m in matchups:
            leader = decide_winner(m, totals)
            table.add_row(
                f"{m.competitor_a} ({marks.get(m.competitor_a, 0)})",
                format_metric_value(totals[m.competitor_a], period.metric, period.metric_unit),
                f"{m.competitor_b} ({marks.get(m.competitor_b, 0)})",
                format_metric_value(totals[m.competitor_b], period.metric, period.metric_unit),
                leader or "tied",
            )
        console.print(table)

    except FileNotFoundError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e
    except ConfigurationError as e:
        console.print(f"[red]{e}")
        raise typer.Exit(1) from e
    except Exception as e:
        console.print(f"[red]Unexpected error:[/red] {e}")
        raise typer.Exit(1) from e


@app.command()
def validate(
    config_path: Annotated[Path, typer.Argument(help="Path to config YAML file")],
) -> None:
    """Validate a configuration file without running.

    Args:
        config_path: Path to YAML configuration file.
    """
    try:
        config = load_config(config_path)
        console.print("[green]Configuration is valid![/green]")
        console.print(f"  Initial window: {config.pairing.initial_window}")
        console.print(f"  Window step: {config.pairing.window_step}")
        console.print(f"  Max window: {config.pairing.max_window}")
        console.print(f"  Recent avoidance periods: {config.pairing.recent_avoidance_periods}")
        console.print(f"  Scheduled periods: {len(config.periods)}")

    except FileNotFoundError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e
    except ConfigurationError as e:
        console.print(f"[red]{e}")
        raise typer.Exit(1) from e
    except Exception as e:
        console.print(f"[red]Validation error:[/red] {e}")
        raise typer.Exit(1) from e


@app.command()
def info() -> None:
    """Show tool information and example commands."""
    console.print("[bold]Rivalry Pairing[/bold]")
    console.print(f"Version: {__version__}\n")

    console.print("[bold]Example Commands:[/bold]")
    console.print("  # Pair a period with default parameters")
    console.print("  uv run rivalry-pairing pair snapshot.yaml\n")

    console.print("  # Pair with tuned windows, print only")
    console.print("  uv run rivalry-pairing pair snapshot.yaml --config config.yaml --no-save\n")

    console.print("  # Live standings for the active period")
    console.print("  uv run rivalry-pairing standings snapshot.yaml --config config.yaml\n")

    console.print("  # Validate config")
    console.print("  uv run rivalry-pairing validate config.yaml")


if __name__ == "__main__":
    app()
