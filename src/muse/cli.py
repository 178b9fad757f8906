"""CLI interface using Typer."""

from __future__ import annotations

import json
from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from muse.config import Settings, default_config_path
from muse.errors import MuseError
from muse.logconfig import configure_logging, get_logger
from muse.persistence import read_weight_log, write_weight_log
from muse.shell import ShellExpander
from muse.tracking import WeightLog, WeightRecord, generate_status
from muse.tracking.diagnostics import DEFAULT_PERIOD, format_status
from muse.tracking.models import Weight, format_timestamp, parse_timestamp

app = typer.Typer(
    help="Personal weight log with a moving-average trend",
    no_args_is_help=True,
)
console = Console()
logger = get_logger(__name__)

weight_app = typer.Typer(help="Manipulate your personal weight log", no_args_is_help=True)
config_app = typer.Typer(help="Inspect and create settings", no_args_is_help=True)

app.add_typer(weight_app, name="weight")
app.add_typer(config_app, name="config")


# ============================================================================
# Helpers
# ============================================================================


def output_json(response: dict) -> None:
    """Output JSON response to stdout."""
    print(json.dumps(response, indent=2))


def exit_with_error(command: str, message: str, json_output: bool) -> NoReturn:
    """Report an error in the requested format and exit with status 1."""
    if json_output:
        output_json({"success": False, "command": command, "errors": [message]})
    else:
        console.print(f"[red]{escape(message)}[/red]")
    raise typer.Exit(1)


def get_config_path(ctx: typer.Context) -> Path:
    """Return the settings file path with a leading `~` expanded."""
    config_path = ctx.obj.get("config_path") or default_config_path()
    expansion = ShellExpander().tilde(config_path)
    return Path(expansion.path)


def load_settings(ctx: typer.Context) -> Settings:
    """Load settings for this invocation and expand their paths."""
    return Settings.from_file(get_config_path(ctx)).expand_paths(ShellExpander())


def resolve_source(ctx: typer.Context, source: Optional[Path]) -> Path:
    """Return --source if given, otherwise the configured weight log."""
    if source is not None:
        return source
    return load_settings(ctx).weight_log_path


@app.callback()
def main(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Settings file (default: ~/.config/muse/config.yaml)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Personal weight log with a moving-average trend."""
    configure_logging("DEBUG" if verbose else "WARNING")
    ctx.obj = {"config_path": config}


# ============================================================================
# Weight Commands
# ============================================================================


@weight_app.command("status")
def weight_status(
    ctx: typer.Context,
    source: Optional[Path] = typer.Option(
        None, "--source", "-s", help="Read weight data from this CSV file"
    ),
    period: int = typer.Option(
        DEFAULT_PERIOD, "--period", "-p", min=1, help="Moving average window (readings)"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show latest recorded weight and trend."""
    try:
        path = resolve_source(ctx, source)
        log = read_weight_log(path)
    except FileNotFoundError as e:
        exit_with_error("weight status", f"Weight log not found: {e.filename}", json_output)
    except OSError as e:
        exit_with_error("weight status", f"Cannot read weight log: {e}", json_output)
    except MuseError as e:
        exit_with_error("weight status", str(e), json_output)

    status = generate_status(log, period)
    if status is None:
        exit_with_error("weight status", "No weight entries found", json_output)

    if json_output:
        smoothed = status.smoothed
        output_json({
            "success": True,
            "command": "weight status",
            "data": {
                "latest_weight_kg": status.latest.weight.kg,
                "latest_timestamp": format_timestamp(status.latest.timestamp),
                "period": status.period,
                "trend_weight_kg": smoothed.weight.kg if smoothed else None,
                "trend": status.trend.value if status.trend else None,
            },
            "human_summary": format_status(status),
        })
    else:
        console.print(format_status(status), highlight=False)


@weight_app.command("list")
def weight_list(
    ctx: typer.Context,
    source: Optional[Path] = typer.Option(
        None, "--source", "-s", help="Read weight data from this CSV file"
    ),
    period: int = typer.Option(
        DEFAULT_PERIOD, "--period", "-p", min=1, help="Moving average window (readings)"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """List recorded weights with their moving average."""
    try:
        log = read_weight_log(resolve_source(ctx, source))
    except FileNotFoundError as e:
        exit_with_error("weight list", f"Weight log not found: {e.filename}", json_output)
    except OSError as e:
        exit_with_error("weight list", f"Cannot read weight log: {e}", json_output)
    except MuseError as e:
        exit_with_error("weight list", str(e), json_output)

    records = log.as_slice()
    # Each average belongs to the last record of its window
    averages: list[Optional[WeightRecord]] = [None] * min(period - 1, len(records))
    averages.extend(log.moving_average(period))

    if json_output:
        output_json({
            "success": True,
            "command": "weight list",
            "data": {
                "entries": [
                    {
                        "timestamp": format_timestamp(record.timestamp),
                        "weight_kg": record.weight.kg,
                        "average_kg": average.weight.kg if average else None,
                    }
                    for record, average in zip(records, averages)
                ]
            },
            "human_summary": f"{len(records)} entries",
        })
        return

    if not records:
        console.print("No weight entries found")
        return

    table = Table(title="Weight Log")
    table.add_column("Timestamp", style="cyan")
    table.add_column("Weight (kg)", justify="right")
    table.add_column(f"Average ({period})", justify="right", style="blue")

    for record, average in zip(records, averages):
        table.add_row(
            format_timestamp(record.timestamp),
            str(record.weight),
            str(average.weight) if average else "",
        )

    console.print(table)


@weight_app.command("add")
def weight_add(
    ctx: typer.Context,
    weight: str = typer.Argument(..., help="Weight in kg, e.g. 76.4"),
    at: Optional[str] = typer.Option(
        None, "--at", help="RFC 3339 timestamp (default: now)"
    ),
    source: Optional[Path] = typer.Option(
        None, "--source", "-s", help="Weight log CSV file to update"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Record a weight reading."""
    try:
        record = WeightRecord.of(Weight.parse(weight))
        if at is not None:
            record = record.at(parse_timestamp(at))

        path = resolve_source(ctx, source)
        log = read_weight_log(path) if path.exists() else WeightLog()
        log.insert(record)
        write_weight_log(log, path)
    except (MuseError, OSError) as e:
        exit_with_error("weight add", str(e), json_output)

    logger.info("recorded weight", path=str(path), weight=str(record.weight))

    if json_output:
        output_json({
            "success": True,
            "command": "weight add",
            "data": {
                "weight_kg": record.weight.kg,
                "timestamp": format_timestamp(record.timestamp),
                "entries": len(log),
            },
            "human_summary": f"Logged {record.weight} kg",
        })
    else:
        console.print(
            f"[green]Logged:[/green] {record.weight}kg at {format_timestamp(record.timestamp)}",
            highlight=False,
        )


# ============================================================================
# Config Commands
# ============================================================================


@config_app.command("show")
def config_show(
    ctx: typer.Context,
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show the effective settings with paths expanded."""
    try:
        settings = load_settings(ctx)
    except MuseError as e:
        exit_with_error("config show", str(e), json_output)

    data = settings.to_dict()
    data["weight_log_path"] = str(settings.weight_log_path)

    if json_output:
        output_json({"success": True, "command": "config show", "data": data})
        return

    table = Table(title="Settings")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    for key, value in data.items():
        table.add_row(key, value)
    console.print(table)


@config_app.command("init")
def config_init(
    ctx: typer.Context,
    force: bool = typer.Option(False, "--force", help="Overwrite an existing file"),
) -> None:
    """Write a settings file with the default values."""
    try:
        config_path = get_config_path(ctx)
    except MuseError as e:
        exit_with_error("config init", str(e), False)

    if config_path.exists() and not force:
        console.print(f"[yellow]Settings file already exists:[/yellow] {config_path}")
        console.print("Use --force to overwrite")
        raise typer.Exit(1)

    try:
        Settings().save(config_path)
    except (MuseError, OSError) as e:
        exit_with_error("config init", str(e), False)

    console.print(f"[green]Wrote settings:[/green] {config_path}", highlight=False)


if __name__ == "__main__":
    app()
