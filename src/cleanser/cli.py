"""CLI interface for Cleanser."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click

from cleanser import storage
from cleanser.core.cleaner import clean_items, filter_by_risk
from cleanser.core.engine import ScanEngine
from cleanser.exceptions import ScanConfigError
from cleanser.models.item import RiskLevel
from cleanser.models.scan_result import ScanConfig, ScanResults, ScanSpeed
from cleanser.report import (
    clean_result_to_dict,
    render_clean_preview,
    render_clean_summary,
    render_results,
    results_to_dict,
)
from cleanser.settings import Settings
from cleanser.utils import bytes_to_human, format_age

log = logging.getLogger(__name__)

_SPEEDS = [s.value for s in ScanSpeed]
_RISKS = [str(r) for r in RiskLevel]

# Depth used by the implicit scan behind `clean`.
_CLEAN_SCAN_DEPTH = 6


def _setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def _run_scan(config: ScanConfig, quiet: bool) -> ScanResults:
    """Run a scan, printing per-sweep progress unless *quiet*."""
    engine = ScanEngine()
    names = {s.id: s.name for s in engine.sweeps}

    def on_progress(sweep_id: str, status: str) -> None:
        if quiet:
            return
        name = names.get(sweep_id, sweep_id)
        if status == "scanning":
            click.echo(f"  {click.style('…', fg='cyan')} {name}", err=True)
        elif status == "error":
            click.echo(f"  {click.style('✗', fg='red')} {name:30s} — error during scan", err=True)

    try:
        return engine.scan(config, on_progress=on_progress)
    except ScanConfigError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)


@click.group()
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug)")
@click.version_option(package_name="cleanser")
def main(verbose: int) -> None:
    """Cleanser — find and clear reclaimable disk space."""
    _setup_logging(verbose)


# ── scan ─────────────────────────────────────────────────────────────────

def _configured_paths(settings: Settings) -> list[Path]:
    """Roots from the 'scan.paths' setting; a single string counts as one path."""
    value = settings.get("scan.paths") or []
    if isinstance(value, str):
        value = [value]
    return [Path(p) for p in value]


@main.command()
@click.option("--speed", "-s", type=click.Choice(_SPEEDS), default=None, help="Scan depth tier")
@click.option("--path", "-p", "paths", multiple=True, type=click.Path(path_type=Path),
              help="Path to scan (repeatable, defaults to home directory)")
@click.option("--min-size", type=click.IntRange(min=0), default=None,
              help="Minimum file size in MB for large file detection (0 disables)")
@click.option("--max-depth", type=click.IntRange(min=0), default=None, help="Maximum traversal depth")
@click.option("--find-duplicates", is_flag=True, help="Find duplicate files")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.option("--no-cache", is_flag=True, help="Don't save scan results to cache")
def scan(
    speed: str | None,
    paths: tuple[Path, ...],
    min_size: int | None,
    max_depth: int | None,
    find_duplicates: bool,
    as_json: bool,
    no_cache: bool,
) -> None:
    """Scan for reclaimable space (preview only, never deletes)."""
    settings = Settings.instance()
    scan_config = ScanConfig(
        speed=ScanSpeed(speed or settings.get("scan.speed")),
        paths=list(paths) or _configured_paths(settings),
        min_file_size_mb=min_size if min_size is not None else int(settings.get("scan.min_size_mb")),
        max_depth=max_depth,
        find_duplicates=find_duplicates,
    )

    if not as_json:
        click.echo(click.style(f"Scanning with {scan_config.speed.value} speed...", fg="cyan"), err=True)

    results = _run_scan(scan_config, quiet=as_json)

    if not no_cache:
        storage.save_scan_results(results)

    if as_json:
        click.echo(json.dumps(results_to_dict(results), indent=2))
    else:
        render_results(results)


# ── clean ────────────────────────────────────────────────────────────────

def _fresh_clean_scan() -> ScanResults:
    config = ScanConfig(
        speed=ScanSpeed.NORMAL,
        min_file_size_mb=0,
        max_depth=_CLEAN_SCAN_DEPTH,
        find_duplicates=False,
    )
    results = _run_scan(config, quiet=True)
    storage.save_scan_results(results)
    return results


def _load_or_scan(force_scan: bool, quiet: bool) -> ScanResults:
    def say(message: str, **style) -> None:
        if not quiet:
            click.echo(click.style(message, **style), err=True)

    if force_scan:
        say("Running fresh scan (--force-scan)...", fg="cyan")
        return _fresh_clean_scan()

    max_age = int(Settings.instance().get("cache.max_age"))
    cached = storage.load_scan_results(max_age)
    if cached is None:
        say("No cached scan found, running fresh scan...", fg="cyan")
        return _fresh_clean_scan()

    age = storage.get_cache_age()
    if age is not None:
        say(f"Using cached scan results from {format_age(age)} ago", fg="cyan")
        say("Tip: Use --force-scan to run a fresh scan", dim=True)
    return cached


@main.command()
@click.option("--risk", "-r", type=click.Choice(_RISKS), default="safe", show_default=True,
              help="Maximum risk level to clean")
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
@click.option("--dry-run", is_flag=True, help="Show what would be deleted without deleting")
@click.option("--force-scan", is_flag=True, help="Run a fresh scan instead of using cached results")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def clean(risk: str, yes: bool, dry_run: bool, force_scan: bool, as_json: bool) -> None:
    """Delete scanned items up to the given risk level."""
    max_risk = RiskLevel.parse(risk)
    results = _load_or_scan(force_scan, quiet=as_json)
    items = filter_by_risk(results.items, max_risk)

    if not items:
        if as_json:
            click.echo(json.dumps({"status": "nothing_to_clean", "freed_bytes": 0}))
        else:
            click.echo(click.style("No items found to clean.", fg="yellow"))
        return

    if not as_json:
        click.echo(click.style(f"Cleaning with maximum risk level: {str(max_risk)}", fg="cyan"))
        render_clean_preview(items)

    # JSON mode still asks, on stderr, so stdout stays machine-readable.
    if not yes and not dry_run:
        prompt = click.style("This will delete files. Continue?", fg="yellow")
        if not click.confirm(prompt, default=False, err=as_json):
            if as_json:
                click.echo(json.dumps({"status": "cancelled", "freed_bytes": 0}))
            else:
                click.echo("Cancelled.")
            return

    def on_item(item, freed: int, error: str | None) -> None:
        if as_json or dry_run:
            return
        if error:
            click.echo(f"{click.style('✗', fg='red')} Failed to clean {item.path}: {error}")
        else:
            click.echo(f"{click.style('✓', fg='green')} Cleaned: {click.style(str(item.path), dim=True)}")

    result = clean_items(items, dry_run=dry_run, on_item=on_item)

    # Deleted paths are stale in the cache now.
    if not dry_run and result.items_removed:
        storage.clear_cache()

    if as_json:
        click.echo(json.dumps(clean_result_to_dict(result), indent=2))
    else:
        render_clean_summary(result)


# ── cache ────────────────────────────────────────────────────────────────

@main.group()
def cache() -> None:
    """Manage the saved scan results."""


@cache.command("info")
def cache_info() -> None:
    """Show the age and contents of the cached scan."""
    age = storage.get_cache_age()
    if age is None:
        click.echo("No cached scan.")
        return
    max_age = int(Settings.instance().get("cache.max_age"))
    results = storage.load_scan_results(max_age)
    click.echo(f"  {click.style('File:', bold=True)}  {storage.SCAN_CACHE_FILE}")
    click.echo(f"  {click.style('Age:', bold=True)}   {format_age(age)}")
    if results is None:
        click.echo(f"  {click.style('State:', bold=True)} {click.style('stale', fg='yellow')}")
        return
    click.echo(f"  {click.style('State:', bold=True)} {click.style('fresh', fg='green')}")
    click.echo(f"  {click.style('Items:', bold=True)} {len(results.items)}")
    click.echo(f"  {click.style('Total:', bold=True)} {bytes_to_human(results.total_size)}")


@cache.command("clear")
def cache_clear() -> None:
    """Delete the cached scan."""
    if storage.clear_cache():
        click.echo("Scan cache cleared.")
    else:
        click.echo("No cached scan.")


# ── config ───────────────────────────────────────────────────────────────

@main.group()
def config() -> None:
    """Read and change persistent settings."""


@config.command("get")
@click.argument("key")
def config_get(key: str) -> None:
    """Print a setting, e.g. 'scan.speed'."""
    value = Settings.instance().get(key)
    if value is None:
        click.echo(f"Unknown setting '{key}'.", err=True)
        sys.exit(1)
    click.echo(json.dumps(value))


@config.command("set")
@click.argument("key")
@click.argument("value")
def config_set(key: str, value: str) -> None:
    """Store a setting. VALUE is parsed as JSON when possible."""
    try:
        parsed = json.loads(value)
    except json.JSONDecodeError:
        parsed = value
    Settings.instance().set(key, parsed)
    click.echo(f"{key} = {json.dumps(parsed)}")
