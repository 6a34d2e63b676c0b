"""Ratio commands: the full ratio table and single-ratio trends."""

import json

import click
from rich.console import Console
from rich.table import Table

from finrisk.cli.context import get_config, get_engine, resolve_years
from finrisk.cli.error_handler import handle_cli_errors
from finrisk.cli.formatting import (
    BORDER_PRIMARY,
    TABLE_PADDING,
    format_ratio,
    format_trend,
    get_trend_color,
)
from finrisk.core.ratios import RatioName, get_definition, ratios_by_category


@click.command()
@click.option("--year", "-y", type=int, default=None, help="Fiscal year to analyse")
@click.option("--compare", "-c", type=int, default=None, help="Comparison year")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
@handle_cli_errors
def ratios(ctx: click.Context, year: int, compare: int, as_json: bool) -> None:
    """
    Show all fifteen financial ratios with year-over-year trends.

    \b
    Examples:
        finrisk ratios                   # Default years (2017 vs 2016)
        finrisk ratios --year 2016 -c 2017
        finrisk ratios --json
    """
    console: Console = ctx.obj["console"]
    engine = get_engine(ctx)
    year, compare = resolve_years(ctx, year, compare)

    current = engine.ratios(year)
    previous = engine.ratios(compare)
    trends = engine.trends(year, compare)

    if as_json:
        data = {
            "year": year,
            "compare": compare,
            "ratios": {
                name.value: {
                    "value": current.to_dict()[name.value],
                    "previous": previous.to_dict()[name.value],
                    "trend": trends[name],
                }
                for name in RatioName
            },
        }
        click.echo(json.dumps(data, indent=2))
        return

    decimals = get_config(ctx).decimals
    table = Table(
        title=f"Financial Ratios - {year} vs {compare}",
        border_style=BORDER_PRIMARY,
        padding=TABLE_PADDING,
    )
    table.add_column("Ratio", style="bold")
    table.add_column("Formula", style="dim")
    table.add_column(str(compare), justify="right")
    table.add_column(str(year), justify="right")
    table.add_column("Trend", justify="right")

    for category, definitions in ratios_by_category().items():
        table.add_row(f"[cyan]{category.value}[/cyan]", "", "", "", "")
        for definition in definitions:
            name = definition.name
            color = get_trend_color(trends[name], definition.higher_is_better)
            table.add_row(
                f"  {definition.label}",
                definition.formula,
                format_ratio(name, previous[name], decimals),
                format_ratio(name, current[name], decimals),
                f"[{color}]{format_trend(trends[name])}[/{color}]",
            )

    console.print()
    console.print(table)

    if current.undefined:
        labels = ", ".join(get_definition(n).label for n in current.undefined)
        console.print(f"[yellow]Undefined in {year} (zero denominator):[/yellow] {labels}")


@click.command()
@click.argument("ratio")
@click.option("--year", "-y", type=int, default=None, help="Fiscal year to analyse")
@click.option("--compare", "-c", type=int, default=None, help="Comparison year")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
@handle_cli_errors
def trend(ctx: click.Context, ratio: str, year: int, compare: int, as_json: bool) -> None:
    """
    Show the year-over-year trend of a single ratio.

    RATIO is a ratio name such as equity_strength or current-liquidity.

    \b
    Examples:
        finrisk trend equity_strength
        finrisk trend return-on-equity --year 2017 --compare 2016
    """
    console: Console = ctx.obj["console"]

    try:
        name = RatioName.parse(ratio)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="RATIO")

    engine = get_engine(ctx)
    year, compare = resolve_years(ctx, year, compare)
    definition = get_definition(name)
    current_value = engine.ratios(year)[name]
    previous_value = engine.ratios(compare)[name]
    change = engine.trend(name, year, compare)

    if as_json:
        data = {
            "ratio": name.value,
            "year": year,
            "compare": compare,
            "value": engine.ratios(year).to_dict()[name.value],
            "previous": engine.ratios(compare).to_dict()[name.value],
            "trend": change,
        }
        click.echo(json.dumps(data, indent=2))
        return

    decimals = get_config(ctx).decimals
    color = get_trend_color(change, definition.higher_is_better)
    console.print()
    console.print(f"[bold]{definition.label}[/bold]  [dim]{definition.formula}[/dim]")
    console.print(f"  {compare}:  {format_ratio(name, previous_value, decimals)}")
    console.print(f"  {year}:  {format_ratio(name, current_value, decimals)}")
    console.print(f"  Trend: [{color}]{format_trend(change)}[/{color}]")
    if change is None:
        console.print("[dim]No trend available (previous value is zero or undefined).[/dim]")
