"""
Init Command - Project bootstrap.

This module handles the `depmesh init` command, which writes a
.depmesh/config.yaml holding the engine defaults so they can be tuned per
project, and optionally scaffolds the demo graphs next to it.
"""

import copy
from pathlib import Path

import click
import yaml
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm

from ...config import CONFIG_PATH, DEFAULT_CONFIG
from ...core.demo import DemoManager

console = Console()


def _write_config(root_dir: Path) -> Path:
    config_file = root_dir / CONFIG_PATH
    config_file.parent.mkdir(parents=True, exist_ok=True)

    config = copy.deepcopy(DEFAULT_CONFIG)
    with open(config_file, "w") as f:
        yaml.dump(config, f, sort_keys=False, default_flow_style=False)
    return config_file


@click.command()
@click.argument("directory", default=".", type=click.Path(file_okay=False))
@click.option("--force", is_flag=True, help="Overwrite existing configuration")
@click.option("--demo", is_flag=True, help="Also write the example graphs to ./depmesh-demo")
def init(directory: str, force: bool, demo: bool):
    """
    Initialize depmesh in DIRECTORY (default: current directory).
    """
    console.print(Panel.fit("🚀 [bold blue]depmesh Initialization[/bold blue]", border_style="blue"))

    root_dir = Path(directory)
    root_dir.mkdir(parents=True, exist_ok=True)
    config_file = root_dir / CONFIG_PATH

    if config_file.exists() and not force:
        console.print(f"[yellow]Configuration already exists at {config_file}[/yellow]")
        if not Confirm.ask("Do you want to overwrite it?"):
            console.print("Aborted.")
            return

    config_file = _write_config(root_dir)
    console.print("\n✨ [bold green]Initialized successfully![/bold green]")
    console.print(f"   Config created at: [dim]{config_file}[/dim]")

    if demo:
        demo_dir = DemoManager(root_dir).provision()
        console.print(f"📂 Created demo graphs in: [bold]{demo_dir}[/bold]")
        console.print("\n[bold green]Ready to go! Try these commands:[/bold green]")
        console.print(f"1. [bold cyan]depmesh groups {demo_dir / 'graph.json'}[/bold cyan]")
        console.print(f"2. [bold cyan]depmesh render {demo_dir / 'graph.json'} -o graph.png[/bold cyan]")
        console.print(
            f"3. [bold cyan]depmesh render {demo_dir / 'process.json'} "
            f"--mode layered -o process.png[/bold cyan]"
        )
