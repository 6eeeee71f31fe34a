"""
depmesh CLI - Main entry point.

This module registers all CLI commands. Each command is implemented
in its own module under cli/commands/.
"""

import click

from .commands import demo, groups, init, layout, render
from .utils import configure_logging


@click.group()
@click.version_option(package_name="depmesh")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def main(verbose: bool):
    """depmesh: Interactive layout engine for dependency graphs.

    Lays out typed dependency graphs (objects, flows, triggers, fields)
    either as a force-directed network or as a left-to-right process
    diagram.

    \b
    Quick Start:
      depmesh demo -o graph.json
      depmesh groups graph.json
      depmesh render graph.json -o graph.png
      depmesh layout graph.json --mode layered --auto-levels
    """
    configure_logging(verbose)


# Register commands
main.add_command(init)
main.add_command(demo.demo)
main.add_command(groups.groups)
main.add_command(layout.layout)
main.add_command(render.render)

if __name__ == "__main__":
    main()
