"""Risk commands: scenario assessments and the risk matrix."""

import json

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from finrisk.cli.context import (
    get_config,
    get_engine,
    optional_compare_year,
    resolve_year,
    resolve_years,
)
from finrisk.cli.error_handler import handle_cli_errors
from finrisk.cli.formatting import (
    BORDER_METADATA,
    BORDER_PRIMARY,
    PANEL_PADDING,
    TABLE_PADDING,
    Signals,
    format_ratio,
    format_tier,
    format_trend,
    get_tier_color,
    print_next_steps,
)
from finrisk.core.ratios import get_definition
from finrisk.core.risk import (
    RiskAssessment,
    SeverityTier,
    evaluate_risks,
    place_risks,
    remaining_risks,
    risk_matrix,
    top_risks,
)
from finrisk.core.risk.constants import SCORE_MAX, SCORE_MIN


@click.command()
@click.option("--year", "-y", type=int, default=None, help="Fiscal year to analyse")
@click.option("--compare", "-c", type=int, default=None, help="Comparison year")
@click.option("--detail", is_flag=True, help="Show factors, mitigation and ratio values")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
@handle_cli_errors
def risks(ctx: click.Context, year: int, compare: int, detail: bool, as_json: bool) -> None:
    """
    Evaluate the risk scenario catalogue.

    Each scenario is classified by impact, probability and severity
    (impact x probability / 10) into Low, Medium, High or Critical.

    \b
    Examples:
        finrisk risks
        finrisk risks --detail
        finrisk risks --json
    """
    console: Console = ctx.obj["console"]
    engine = get_engine(ctx)
    year, compare = resolve_years(ctx, year, compare)

    assessments = evaluate_risks(engine.ratios(year), engine.ratios(compare))

    if as_json:
        data = {
            "year": year,
            "compare": compare,
            "risks": [a.to_dict() for a in assessments],
        }
        click.echo(json.dumps(data, indent=2))
        return

    console.print()
    console.print(_summary_table(assessments, year, compare))

    if detail:
        decimals = get_config(ctx).decimals
        console.print()
        console.print("[bold]Headline risks[/bold]")
        for assessment in top_risks(assessments):
            console.print(_risk_panel(assessment, decimals))
        console.print("[bold]Other risks[/bold]")
        for assessment in remaining_risks(assessments):
            console.print(_risk_panel(assessment, decimals))
    else:
        print_next_steps(console, [
            ("Full breakdown", "finrisk risks --detail"),
            ("Risk matrix", "finrisk matrix"),
        ])


def _summary_table(assessments: list[RiskAssessment], year: int, compare: int) -> Table:
    table = Table(
        title=f"Risk Evaluation - {year} vs {compare}",
        border_style=BORDER_PRIMARY,
        padding=TABLE_PADDING,
    )
    table.add_column("#", justify="right", style="dim")
    table.add_column("Risk", style="bold")
    table.add_column("Impact", justify="center")
    table.add_column("Probability", justify="center")
    table.add_column("Score", justify="right")
    table.add_column("Severity", justify="center")

    for a in assessments:
        table.add_row(
            str(a.id),
            a.title,
            f"{format_tier(a.impact_level)} ({a.impact}/10)",
            f"{format_tier(a.probability_level)} ({a.probability}/10)",
            f"{a.score:.1f}",
            format_tier(a.severity),
        )
    return table


def _risk_panel(assessment: RiskAssessment, decimals: int) -> Panel:
    lines = [assessment.description, ""]

    lines.append("[bold]Key factors[/bold]")
    lines.extend(f"  {Signals.BULLET} {factor}" for factor in assessment.factors)
    lines.append("")

    lines.append("[bold]Mitigation[/bold]")
    lines.extend(f"  {Signals.BULLET} {step}" for step in assessment.mitigation)

    if assessment.ratio_values:
        lines.append("")
        lines.append("[bold]Related ratios[/bold]")
        for binding in assessment.ratio_values:
            label = get_definition(binding.name).label
            current = format_ratio(binding.name, binding.current, decimals)
            previous = format_ratio(binding.name, binding.previous, decimals)
            lines.append(
                f"  {label}: {current} (prev {previous}, {format_trend(binding.trend)})"
            )

    color = get_tier_color(assessment.severity)
    return Panel(
        "\n".join(lines),
        title=f"{assessment.id}. {assessment.title} - {assessment.severity.value}",
        border_style=color,
        padding=PANEL_PADDING,
    )


@click.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
@handle_cli_errors
def matrix(ctx: click.Context, as_json: bool) -> None:
    """
    Show the 10x10 risk matrix with scenario positions.

    Cells are shaded by impact x probability (>=64 Critical, >=36 High,
    >=16 Medium). Scenario ids mark their (probability, impact) cell.
    """
    console: Console = ctx.obj["console"]
    engine = get_engine(ctx)
    year = resolve_year(ctx, None)
    compare = optional_compare_year(ctx, year)
    previous = engine.ratios(compare) if compare is not None else None
    assessments = evaluate_risks(engine.ratios(year), previous)
    cells = risk_matrix()

    if as_json:
        data = {
            "cells": [c.to_dict() for c in cells],
            "risks": [
                {"id": a.id, "title": a.title, "coordinates": a.coordinates}
                for a in assessments
            ],
        }
        click.echo(json.dumps(data, indent=2))
        return

    placed = place_risks(assessments)
    tiers = {(c.x, c.y): c.tier for c in cells}

    table = Table(
        title="Risk Matrix (impact vs probability)",
        border_style=BORDER_METADATA,
        show_lines=False,
        padding=(0, 0),
    )
    table.add_column("Impact", justify="right", style="bold")
    for probability in range(SCORE_MIN, SCORE_MAX + 1):
        table.add_column(str(probability), justify="center", min_width=4)

    for impact in range(SCORE_MAX, SCORE_MIN - 1, -1):
        row = [str(impact)]
        for probability in range(SCORE_MIN, SCORE_MAX + 1):
            color = get_tier_color(tiers[(probability, impact)])
            ids = placed.get((probability, impact))
            if ids:
                marker = ",".join(str(i) for i in ids)
                row.append(f"[bold white on {color}]{marker}[/bold white on {color}]")
            else:
                row.append(f"[{color}]{Signals.MARKER * 2}[/{color}]")
        table.add_row(*row)

    console.print()
    console.print(table)
    console.print("[dim]Columns: probability 1-10.[/dim]  Legend: " + "  ".join(
        format_tier(t) for t in sorted(SeverityTier, reverse=True)
    ))
    for a in assessments:
        console.print(f"  [bold]{a.id}[/bold] {a.title} (p={a.probability}, i={a.impact})")
