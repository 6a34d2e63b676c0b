"""
FinRisk CLI - Financial Ratio and Risk Workstation.

Entry point for the command-line interface. Provides commands for:
- Financial ratios (solvency, liquidity, profitability, margins, debt capacity)
- Year-over-year ratio trends
- Risk scenario evaluation and the risk matrix
- DuPont decomposition of ROE
- Statement comparison between two fiscal years

Usage:
    finrisk --help
    finrisk ratios
    finrisk ratios --year 2016 --compare 2017
    finrisk trend equity_strength
    finrisk risks --detail
    finrisk matrix
    finrisk dupont
    finrisk compare
    finrisk years
    finrisk --dataset case.json ratios
"""

import logging
from collections import OrderedDict
from pathlib import Path
from typing import Optional

import click
from rich.console import Console

from finrisk import __version__
from finrisk.cli.commands import analysis, ratios, risks
from finrisk.config import Config

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class OrderedGroup(click.Group):
    """Custom group that displays commands in organized categories."""

    COMMAND_GROUPS: OrderedDict[str, list[str]] = OrderedDict([
        ("Ratios", ["ratios", "trend", "dupont"]),
        ("Risk", ["risks", "matrix"]),
        ("Data", ["compare", "years"]),
    ])

    def format_commands(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        """Write commands in organized groups."""
        for group_name, cmd_names in self.COMMAND_GROUPS.items():
            commands = []
            for cmd_name in cmd_names:
                cmd = self.get_command(ctx, cmd_name)
                if cmd:
                    help_text = cmd.get_short_help_str(limit=formatter.width)
                    commands.append((cmd_name, help_text))

            if commands:
                with formatter.section(group_name):
                    formatter.write_dl(commands)


# Global console for rich output
console = Console()


def configure_logging(level: int) -> None:
    """Configure the root logger once for CLI runs."""
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger().setLevel(level)


@click.group(cls=OrderedGroup)
@click.version_option(version=__version__, prog_name="finrisk")
@click.option(
    "--dataset",
    "dataset_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="JSON dataset keyed by fiscal year (default: built-in case)",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, dataset_path: Optional[Path], verbose: bool) -> None:
    """
    FinRisk - financial ratio and risk workstation.

    Computes solvency, liquidity and profitability ratios for two fiscal
    years, tracks their trends, and classifies risk scenarios by severity.

    \b
    Examples:
        finrisk ratios                  # All ratios, 2017 vs 2016
        finrisk trend equity_strength   # One ratio's trend
        finrisk risks --detail          # Risk catalogue with mitigation
        finrisk matrix                  # Impact x probability grid
        finrisk dupont                  # ROE decomposition
    """
    cfg = Config()
    configure_logging(logging.DEBUG if verbose else cfg.log_level_value)

    ctx.ensure_object(dict)
    ctx.obj["console"] = console
    ctx.obj["config"] = cfg
    ctx.obj["dataset_path"] = dataset_path


# Register commands
cli.add_command(ratios.ratios)
cli.add_command(ratios.trend)
cli.add_command(analysis.dupont)
cli.add_command(risks.risks)
cli.add_command(risks.matrix)
cli.add_command(analysis.compare)
cli.add_command(analysis.years)


def main() -> None:
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
