"""Main CLI application wiring for paralevel.

  paralevel new level.txt
  paralevel check level.txt
  paralevel tree level.txt
  paralevel edit wall level.txt 2 3 --block 0.1
  paralevel apply level.txt edits.yml
"""

import sys

import typer

from paralevel.config import ConfigError, configure_logging, load_config

app = typer.Typer(add_completion=False, help="paralevel — nested block level files")


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """paralevel CLI."""
    try:
        cfg = load_config()
    except ConfigError as e:
        print(str(e))
        sys.exit(1)
    configure_logging(cfg, verbose=verbose)
    ctx.obj = cfg


# =============================================================================
# Subcommand groups
# =============================================================================

edit_app = typer.Typer(help="Edit one cell of a block")
app.add_typer(edit_app, name="edit")


# =============================================================================
# Register commands
# =============================================================================

from paralevel.cli import apply as apply_cmd
from paralevel.cli import check as check_cmd
from paralevel.cli import edit as edit_cmd
from paralevel.cli import new as new_cmd
from paralevel.cli import show as show_cmd

new_cmd.register(app)
check_cmd.register(app)
show_cmd.register(app)
apply_cmd.register(app)
edit_cmd.register(edit_app)
