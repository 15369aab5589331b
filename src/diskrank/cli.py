"""CLI interface for diskrank."""

from __future__ import annotations

import json
import logging
import time
from pathlib import Path

import click

from diskrank.core.engine import ScanEngine
from diskrank.core.registry import ResultRegistry
from diskrank.models.scan_config import ScanConfig
from diskrank.render import LiveRenderer
from diskrank.settings import Settings
from diskrank.utils import format_elapsed

_CONFIG_KEYS = ("root", "max_depth", "exclusions", "budget", "top_n", "fps", "max_workers")


def _setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def _build_config(**overrides) -> ScanConfig:
    try:
        return ScanConfig.from_settings(Settings.instance(), **overrides)
    except (TypeError, ValueError) as e:
        raise click.UsageError(f"Invalid scan configuration: {e}") from e


@click.group()
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug)")
def main(verbose: int) -> None:
    """Find the largest files and folders, ranked live."""
    _setup_logging(verbose)


# ── scan ─────────────────────────────────────────────────────────────────

@main.command()
@click.argument("root", required=False, type=click.Path(exists=True, path_type=Path))
@click.option("--depth", "-d", "max_depth", type=int, default=None, help="Depth of the sizing units below ROOT")
@click.option("--top", "-n", "top_n", type=int, default=None, help="Number of entries to show")
@click.option("--exclude", "-x", multiple=True, type=click.Path(path_type=Path), help="Skip this path (repeatable)")
@click.option("--no-default-excludes", is_flag=True, help="Drop the configured exclusion list")
@click.option("--budget", type=float, default=None, help="Seconds before a straggler may stop early")
@click.option("--fps", type=int, default=None, help="Live view redraws per second")
@click.option("--workers", "max_workers", type=int, default=None, help="Bound the worker pool (default: one per target)")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.option("--no-live", is_flag=True, help="Only print the final ranking")
def scan(
    root: Path | None,
    max_depth: int | None,
    top_n: int | None,
    exclude: tuple[Path, ...],
    no_default_excludes: bool,
    budget: float | None,
    fps: int | None,
    max_workers: int | None,
    as_json: bool,
    no_live: bool,
) -> None:
    """Rank the largest files and folders under ROOT."""
    config = _build_config(
        root=root,
        max_depth=max_depth,
        top_n=top_n,
        budget=budget,
        fps=fps,
        max_workers=max_workers,
    )
    if no_default_excludes:
        config.exclusions = []
    config.exclusions.extend(str(p) for p in exclude)

    engine = ScanEngine(config)

    if not as_json:
        click.echo("Collecting target paths...")
    registry = engine.collect()
    dispatcher = engine.dispatch(registry)

    renderer = LiveRenderer(config.top_n, live=not (as_json or no_live))
    live = renderer.live

    last_draw = 0.0
    while not registry.is_complete():
        now = time.monotonic()
        if live and now - last_draw >= config.refresh_interval:
            renderer.draw(registry)
            last_draw = now
        time.sleep(0.01)

    if as_json:
        dispatcher.join()
        click.echo(json.dumps(_as_json(config, registry), indent=2))
        return

    renderer.draw(registry)
    click.echo("\nAnalysis complete!")
    dispatcher.join()


def _as_json(config: ScanConfig, registry: ResultRegistry) -> dict:
    return {
        "root": str(config.root),
        "total_targets": registry.total_targets(),
        "completed_targets": registry.completed_targets(),
        "results": [
            {
                "path": str(e.path),
                "size_bytes": e.size_bytes,
                "calculated": e.calculated,
                "is_partial": e.is_partial,
                "elapsed": round(e.elapsed, 3),
            }
            for e in registry.top_n(config.top_n)
        ],
    }


# ── config ───────────────────────────────────────────────────────────────

@main.group("config")
def config_group() -> None:
    """Persistent scan settings."""


@config_group.command("show")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def config_show(as_json: bool) -> None:
    """Show the effective scan settings."""
    data = _build_config().as_dict()
    if as_json:
        click.echo(json.dumps(data, indent=2))
        return

    click.echo(f"\n  {click.style('Settings file:', bold=True)} {Settings.instance().path}\n")
    for key in _CONFIG_KEYS:
        value = data[key]
        if key == "exclusions":
            click.echo(f"  {key}")
            for prefix in value:
                click.echo(f"    {prefix}")
        elif key == "budget":
            click.echo(f"  {key:12s} {format_elapsed(value)}")
        else:
            click.echo(f"  {key:12s} {value}")
    click.echo()


@config_group.command("set")
@click.argument("key", type=click.Choice(_CONFIG_KEYS))
@click.argument("value")
def config_set(key: str, value: str) -> None:
    """Store a scan setting. VALUE is parsed as JSON when possible."""
    try:
        parsed = json.loads(value)
    except json.JSONDecodeError:
        parsed = value

    try:
        ScanConfig(**{key: parsed})
    except (TypeError, ValueError) as e:
        raise click.BadParameter(str(e), param_hint="VALUE") from e

    Settings.instance().set(f"scan.{key}", parsed)
    click.echo(f"{key} = {json.dumps(parsed)}")
