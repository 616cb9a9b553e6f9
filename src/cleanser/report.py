"""Console and JSON rendering of scan and clean results."""

from __future__ import annotations

from typing import Any, Callable

import click

from cleanser.models.clean_result import CleanResult
from cleanser.models.item import CleanableItem, CleanCategory, RiskLevel
from cleanser.models.scan_result import ScanResults
from cleanser.utils import bytes_to_human

Echo = Callable[[str], None]

_RISK_COLORS = {
    RiskLevel.SAFE: "green",
    RiskLevel.MODERATE: "yellow",
    RiskLevel.RISKY: "red",
}

_RISK_MARKS = {
    RiskLevel.SAFE: "✓",
    RiskLevel.MODERATE: "⚠",
    RiskLevel.RISKY: "⚠",
}

# Items listed per category before collapsing into "... and N more".
TOP_ITEMS = 3


def results_to_dict(results: ScanResults) -> dict[str, Any]:
    """Machine-readable form of *results*."""
    return results.to_dict()


def clean_result_to_dict(result: CleanResult) -> dict[str, Any]:
    return {
        "status": "dry_run" if result.dry_run else "cleaned",
        "freed_bytes": result.freed_bytes,
        "items_removed": result.items_removed,
        "failed": result.failed,
        "errors": result.errors,
    }


def _group(items: list[CleanableItem]) -> dict[RiskLevel, dict[CleanCategory, list[CleanableItem]]]:
    grouped: dict[RiskLevel, dict[CleanCategory, list[CleanableItem]]] = {}
    for item in items:
        grouped.setdefault(item.risk_level, {}).setdefault(item.category, []).append(item)
    return grouped


def render_results(results: ScanResults, echo: Echo = click.echo) -> None:
    """Print results grouped by risk level, then category."""
    echo(f"\n{click.style('=== Scan Results ===', fg='green', bold=True)}")
    echo(f"Total cleanable space: {click.style(bytes_to_human(results.total_size), bold=True)}\n")

    if not results.items:
        echo("Nothing to clean.\n")
        return

    grouped = _group(list(results.items))
    for risk in RiskLevel:
        by_category = grouped.get(risk)
        if not by_category:
            continue
        items = [i for cat_items in by_category.values() for i in cat_items]
        total = sum(i.size for i in items)
        heading = click.style(f"{risk.label} Risk", fg=_RISK_COLORS[risk], bold=True)
        echo(f"{heading} ({click.style(bytes_to_human(total), bold=True)}, {len(items)} items)")

        for category, cat_items in sorted(by_category.items(), key=lambda kv: kv[0].label):
            cat_total = sum(i.size for i in cat_items)
            echo(f"  {category.label} - {bytes_to_human(cat_total)} ({len(cat_items)} items)")
            for item in sorted(cat_items, key=lambda i: i.size, reverse=True)[:TOP_ITEMS]:
                echo(f"    {bytes_to_human(item.size)} - {click.style(str(item.path), dim=True)}")
            if len(cat_items) > TOP_ITEMS:
                echo(f"    ... and {len(cat_items) - TOP_ITEMS} more")
        echo("")

    echo(click.style("Run 'cleanser clean --risk <level>' to clean files", fg="cyan"))


def render_clean_preview(items: list[CleanableItem], echo: Echo = click.echo) -> None:
    """Print the items about to be deleted."""
    total = sum(i.size for i in items)
    echo(f"\n{click.style('=== Items to Clean ===', fg='green', bold=True)}")
    echo(f"Total space to free: {click.style(bytes_to_human(total), bold=True)}\n")
    for item in items:
        mark = click.style(_RISK_MARKS[item.risk_level], fg=_RISK_COLORS[item.risk_level])
        echo(
            f"{mark} {item.category.label} - {bytes_to_human(item.size)} - "
            f"{click.style(str(item.path), dim=True)}"
        )
    echo("")


def render_clean_summary(result: CleanResult, echo: Echo = click.echo) -> None:
    """Print totals after a clean run."""
    if result.dry_run:
        echo(click.style("DRY RUN: No files were deleted.", fg="yellow", bold=True))
        echo(f"Would free: {click.style(bytes_to_human(result.freed_bytes), fg='green', bold=True)}")
        return
    echo(f"\n{click.style('=== Cleanup Summary ===', fg='green', bold=True)}")
    echo(f"Cleaned: {click.style(str(result.items_removed), fg='green', bold=True)} items")
    echo(f"Failed: {click.style(str(result.failed), fg='red', bold=True)} items")
    echo(f"Space freed: {click.style(bytes_to_human(result.freed_bytes), fg='green', bold=True)}")
