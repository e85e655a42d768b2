"""Configuration commands for PulseWatch CLI."""

from pathlib import Path
from typing import Optional

import click
from rich.panel import Panel

from pulsewatch.cli.common import console
from pulsewatch.config import DEFAULT_CONFIG_PATH, create_template_config


@click.command("init")
@click.option("--force", is_flag=True, help="Overwrite an existing config file.")
@click.pass_context
def init(ctx: click.Context, force: bool) -> None:
    """Create a template configuration file.
    
    \b
    Examples:
      pulsewatch init
      pulsewatch --config ./pulsewatch.toml init --force
    """
    obj = ctx.find_object(dict) or {}
    config_path: Optional[Path] = obj.get("config_path") or DEFAULT_CONFIG_PATH

    if config_path.exists() and not force:
        console.print(
            f"[yellow]Config already exists at {config_path}. Use --force to overwrite.[/yellow]"
        )
        raise SystemExit(1)

    path = create_template_config(config_path)
    console.print(Panel(
        f"[bold green]Config Created[/bold green]\n\n"
        f"Path: {path}\n\n"
        "Add your OpenWeather and NewsAPI keys to enable live weather and headlines.",
        title="[bold]PulseWatch[/bold]",
        border_style="green",
    ))
