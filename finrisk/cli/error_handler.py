"""Shared CLI error handling decorator.

Catches dataset and configuration errors in a single place so every command
reports them the same way. Commands can still handle command-specific
exceptions internally before the decorator catches the rest.

Usage:
    @click.command()
    @click.pass_context
    @handle_cli_errors
    def my_command(ctx, ...):
        ...
"""

import functools
import logging

import click
from rich.console import Console
from rich.markup import escape

from finrisk.core.data.exceptions import ConfigError, DatasetError, MissingYearError

logger = logging.getLogger(__name__)


def handle_cli_errors(f):
    """Decorator that catches common CLI exceptions with Rich-formatted output.

    Handles missing years, dataset and configuration errors, and unexpected
    exceptions with consistent formatting and exit code 1.

    Must be applied AFTER @click.pass_context so the Click context (which
    provides the console via ctx.obj["console"]) is available.
    """

    @functools.wraps(f)
    def wrapper(*args, **kwargs):
        ctx = click.get_current_context(silent=True)
        console = ctx.obj["console"] if ctx and ctx.obj and "console" in ctx.obj else Console()

        try:
            return f(*args, **kwargs)
        except SystemExit:
            raise  # Don't intercept explicit exits
        except MissingYearError as e:
            console.print(f"[red]Missing Year:[/red] {escape(str(e))}")
            console.print("[yellow]Pick a year with --year / --compare, or run 'finrisk years'.[/yellow]")
            raise SystemExit(1)
        except DatasetError as e:
            console.print(f"[red]Dataset Error:[/red] {escape(str(e))}")
            console.print("[yellow]Check FINRISK_DATASET_PATH or the --dataset file.[/yellow]")
            raise SystemExit(1)
        except ConfigError as e:
            console.print(f"[red]Configuration Error:[/red] {escape(str(e))}")
            raise SystemExit(1)
        except click.exceptions.Exit:
            raise  # Don't intercept Click exits
        except click.ClickException:
            raise  # Click renders its own usage errors
        except Exception as e:
            logger.exception("Unexpected error in %s command", f.__name__)
            console.print(f"[red]Unexpected error:[/red] {escape(str(e))}")
            raise SystemExit(1)

    return wrapper
