"""Analysis commands: DuPont decomposition, statement comparison, dataset years."""

import json

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from finrisk.cli.context import get_engine, resolve_year, resolve_years
from finrisk.cli.error_handler import handle_cli_errors
from finrisk.cli.formatting import (
    BORDER_PRIMARY,
    BORDER_WARNING,
    PANEL_PADDING,
    TABLE_PADDING,
    format_number,
    format_trend,
    get_trend_color,
    make_progress_bar,
)
from finrisk.core.data.comparison import balance_composition, compare_statements
from finrisk.core.ratios.dupont import dupont as dupont_decomposition


@click.command()
@click.option("--year", "-y", type=int, default=None, help="Fiscal year to analyse")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
@handle_cli_errors
def dupont(ctx: click.Context, year: int, as_json: bool) -> None:
    """
    Decompose ROE into EBT margin x asset turnover x leverage.

    \b
    Examples:
        finrisk dupont
        finrisk dupont --year 2016
    """
    console: Console = ctx.obj["console"]
    engine = get_engine(ctx)
    year = resolve_year(ctx, year)

    result = dupont_decomposition(engine.ratios(year))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    lines = [
        f"EBT Margin          {format_number(result.ebt_margin, 2, '%')}",
        f"  x Asset Turnover  {format_number(result.asset_turnover, 2)}",
        f"  x Leverage        {format_number(result.financial_leverage, 2)}",
        f"  = ROE             [bold]{format_number(result.reconstructed_roe, 2, '%')}[/bold]",
        "",
        f"[dim]Reported ROE (EBT / Equity): {format_number(result.return_on_equity, 2, '%')}[/dim]",
        f"[dim]ROA before leverage: {format_number(result.return_on_assets, 2, '%')}[/dim]",
    ]
    if result.leverage_driven:
        lines.append("")
        lines.append(
            "[yellow]ROE is driven mainly by leverage rather than operating efficiency.[/yellow]"
        )

    console.print()
    console.print(Panel(
        "\n".join(lines),
        title=f"DuPont Analysis - {year}",
        border_style=BORDER_PRIMARY,
        padding=PANEL_PADDING,
    ))


@click.command()
@click.option("--year", "-y", type=int, default=None, help="Fiscal year to analyse")
@click.option("--compare", "-c", type=int, default=None, help="Comparison year")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
@handle_cli_errors
def compare(ctx: click.Context, year: int, compare: int, as_json: bool) -> None:
    """
    Compare balance-sheet masses and income lines between two years.

    \b
    Examples:
        finrisk compare
        finrisk compare --year 2017 --compare 2016 --json
    """
    console: Console = ctx.obj["console"]
    engine = get_engine(ctx)
    year, compare = resolve_years(ctx, year, compare)

    rows = compare_statements(engine.dataset, year, compare)
    composition = balance_composition(engine.dataset[year])

    if as_json:
        data = {
            "year": year,
            "compare": compare,
            "rows": [
                {
                    "section": r.section,
                    "label": r.label,
                    "previous": r.previous,
                    "current": r.current,
                    "change_pct": r.change_pct,
                }
                for r in rows
            ],
            "composition": composition,
        }
        click.echo(json.dumps(data, indent=2))
        return

    table = Table(
        title=f"Statements - {year} vs {compare} (thousand EUR)",
        border_style=BORDER_PRIMARY,
        padding=TABLE_PADDING,
    )
    table.add_column("Line", style="bold")
    table.add_column(str(compare), justify="right")
    table.add_column(str(year), justify="right")
    table.add_column("Change", justify="right")

    section = None
    for row in rows:
        if row.section != section:
            section = row.section
            table.add_row(f"[cyan]{section}[/cyan]", "", "", "")
        color = get_trend_color(row.change_pct)
        table.add_row(
            f"  {row.label}",
            format_number(row.previous, 0),
            format_number(row.current, 0),
            f"[{color}]{format_trend(row.change_pct)}[/{color}]",
        )

    console.print()
    console.print(table)

    console.print()
    console.print(f"[bold]Balance composition ({year})[/bold]")
    for label, share in composition.items():
        bar = make_progress_bar(share, 0.5, width=20)
        console.print(f"  {label:<22} {bar}  {format_number(share, 1, '%')}")


@click.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
@handle_cli_errors
def years(ctx: click.Context, as_json: bool) -> None:
    """List available fiscal years and check statement totals."""
    console: Console = ctx.obj["console"]
    dataset = get_engine(ctx).dataset
    issues = dataset.check_integrity()

    if as_json:
        data = {
            "years": dataset.years,
            "integrity_issues": [
                {
                    "year": i.year,
                    "field": i.field,
                    "reported": i.reported,
                    "expected": i.expected,
                }
                for i in issues
            ],
        }
        click.echo(json.dumps(data, indent=2))
        return

    console.print()
    console.print(f"[bold]Available years:[/bold] {', '.join(str(y) for y in dataset.years)}")

    if not issues:
        console.print("[green]All statement totals match their components.[/green]")
        return

    console.print(Panel(
        "\n".join(str(i) for i in issues),
        title="Integrity warnings",
        border_style=BORDER_WARNING,
        padding=PANEL_PADDING,
    ))
