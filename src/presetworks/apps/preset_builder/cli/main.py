"""Command line interface for the Preset Builder."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from presetworks.logging_utils import configure_logging

from ..core.config import load_config
from ..core.display import format_settings_for_display
from ..core.loading import (
    SettingsLoadError,
    load_settings_file,
    preset_filename,
    sanitize_preset_name,
)
from ..core.models import LightroomSettings
from ..core.normalizer import (
    NormalizationIssue,
    is_structurally_invalid,
    normalize_settings,
)
from ..core.serializer import save_preset_to_file

logger = logging.getLogger(__name__)
console = Console()

app = typer.Typer(help="Build Lightroom XMP presets from JSON adjustment settings.")


@app.callback()
def _root_callback(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Log debug details (clamping, ignored keys)."
    ),
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Log level name (default: $PRESETWORKS_LOG_LEVEL or info).",
    ),
    log_dir: Optional[Path] = typer.Option(
        None, "--log-dir", help="Directory for preset_builder.log (default: ./logs)."
    ),
) -> None:
    try:
        log_path = configure_logging(
            "preset_builder",
            level=logging.DEBUG if verbose else log_level,
            log_dir=log_dir,
            include_console=verbose,
        )
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--log-level") from exc
    logger.debug("Preset builder logging initialised → %s", log_path)


def _load_or_exit(settings_json: Path) -> object:
    try:
        return load_settings_file(settings_json)
    except SettingsLoadError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(code=1) from exc


def _print_issues(issues: List[NormalizationIssue]) -> None:
    if not issues:
        return
    table = Table(title=f"Adjusted settings ({len(issues)})")
    table.add_column("Field", style="cyan")
    table.add_column("Problem")
    table.add_column("Value", style="magenta")
    for issue in issues:
        table.add_row(issue.field, issue.reason, repr(issue.value))
    console.print(table)


@app.command()
def convert(
    settings_json: Path = typer.Argument(
        ..., exists=True, dir_okay=False, readable=True, help="JSON settings file."
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output .xmp path (defaults to <output dir>/<preset name>.xmp).",
    ),
    name: Optional[str] = typer.Option(
        None, "--name", "-n", help="Preset name shown in Lightroom."
    ),
    raw: bool = typer.Option(
        False,
        "--raw",
        help="Skip clamping/defaults and write the file's values as given.",
    ),
) -> None:
    """Normalize SETTINGS_JSON and write it as an XMP preset."""

    settings_cfg = load_config()
    candidate = _load_or_exit(settings_json)

    issues: List[NormalizationIssue] = []
    if raw:
        if not isinstance(candidate, dict):
            console.print("[red]--raw requires a JSON object at the top level[/red]")
            raise typer.Exit(code=1)
        try:
            settings = LightroomSettings.from_values(candidate)
        except (TypeError, ValueError) as exc:
            console.print(f"[red]Cannot use settings as given: {escape(str(exc))}[/red]")
            raise typer.Exit(code=1) from exc
    else:
        settings = normalize_settings(candidate, issues=issues)

    preset_name = sanitize_preset_name(
        name or settings_cfg.default_preset_name,
        max_length=settings_cfg.max_preset_name_length,
        fallback=settings_cfg.default_preset_name,
    )
    target = output or (
        settings_cfg.default_output_dir
        / preset_filename(preset_name, settings_cfg.output_suffix)
    )

    written = save_preset_to_file(settings, target, preset_name)
    _print_issues(issues)
    typer.echo(f"Saved XMP preset '{preset_name}' to {written}")


@app.command()
def show(
    settings_json: Path = typer.Argument(
        ..., exists=True, dir_okay=False, readable=True, help="JSON settings file."
    ),
) -> None:
    """Print normalized settings as a list for manual entry."""

    settings = normalize_settings(_load_or_exit(settings_json))
    typer.echo(format_settings_for_display(settings), nl=False)


@app.command()
def validate(
    settings_json: Path = typer.Argument(
        ..., exists=True, dir_okay=False, readable=True, help="JSON settings file."
    ),
    as_json: bool = typer.Option(
        False, "--json", help="Emit the normalized settings as JSON."
    ),
) -> None:
    """Report what normalization changes; exit 1 if nothing usable was found."""

    issues: List[NormalizationIssue] = []
    settings = normalize_settings(_load_or_exit(settings_json), issues=issues)

    if as_json:
        payload = {
            "settings": settings.to_dict(),
            "issues": [issue.to_json() for issue in issues],
        }
        typer.echo(json.dumps(payload, indent=2))
    else:
        _print_issues(issues)
        if not issues:
            console.print("[green]All settings valid.[/green]")

    if is_structurally_invalid(issues):
        raise typer.Exit(code=1)


if __name__ == "__main__":  # pragma: no cover
    app()
