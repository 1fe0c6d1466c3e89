"""RaceGuard CLI — Typer application with scan, rules, init, and serve commands."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from raceguard import __version__

app = typer.Typer(
    name="raceguard",
    help="Find race-condition hazards in Java, SQL/YAML and JS/TS sources.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(stderr=True)


def _configure_logging(verbose: bool, debug: bool) -> None:
    level = logging.DEBUG if debug else logging.INFO if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=debug)],
        force=True,
    )


def _load(config: Optional[str]):
    """Load config from the working directory, exit 2 on failure."""
    from raceguard.config.loader import ConfigError, load_config

    try:
        return load_config(Path.cwd(), config)
    except ConfigError as exc:
        console.print(f"[bold red]Config error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc


def _registry(cfg):
    from raceguard.rules.models import RuleError
    from raceguard.rules.registry import build_registry

    try:
        return build_registry(cfg, Path.cwd())
    except RuleError as exc:
        console.print(f"[bold red]Rule error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc


# ── scan ──────────────────────────────────────────────────────────────────────


@app.command()
def scan(
    paths: Optional[List[Path]] = typer.Argument(None, help="Files, directories or .zip archives to scan"),
    repo: Optional[str] = typer.Option(None, "--repo", "-r", help="Public github.com repository URL"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .raceguard.toml"),
    format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format: terminal | json | sarif | document"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Write report to file"),
    fail_on: Optional[str] = typer.Option(None, "--fail-on", help="Severity threshold: low | medium | high"),
    workers: Optional[int] = typer.Option(None, "--workers", "-w", min=1, help="Scan files on N threads"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    debug: bool = typer.Option(False, "--debug", help="Debug output with timing"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Show what would be scanned without scanning"),
) -> None:
    """Scan local sources and/or a GitHub repository for race-condition hazards."""
    from raceguard.config.schema import OUTPUT_FORMATS, SEVERITIES
    from raceguard.output import document, json_report, sarif, terminal
    from raceguard.scanner.engine import analyze
    from raceguard.sources.github import fetch_repo_files
    from raceguard.sources.local import collect_paths
    from raceguard.sources.models import SourceError

    _configure_logging(verbose, debug)
    cfg = _load(config)

    # --- CLI overrides ---
    if format:
        if format not in OUTPUT_FORMATS:
            console.print(f"[bold red]Invalid format:[/bold red] {format}")
            raise typer.Exit(code=2)
        cfg.output.format = format  # type: ignore[assignment]
    if fail_on:
        if fail_on not in SEVERITIES:
            console.print(f"[bold red]Invalid fail-on level:[/bold red] {fail_on}")
            raise typer.Exit(code=2)
        cfg.scan.fail_on = fail_on  # type: ignore[assignment]
    if workers:
        cfg.scan.workers = workers

    if not paths and not repo:
        console.print("[bold red]Error:[/bold red] give at least one path or --repo URL")
        raise typer.Exit(code=2)

    registry = _registry(cfg)
    if verbose or debug:
        console.print(f"[dim]Rules loaded: {len(registry.enabled_rules())}[/dim]")

    # --- Collect inputs ---
    try:
        files = collect_paths(
            paths or [],
            ignore_globs=cfg.ignore.paths,
            max_file_size_kb=cfg.scan.max_file_size_kb,
        )
    except SourceError as exc:
        console.print(f"[bold red]Source error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    if repo:
        files.extend(asyncio.run(fetch_repo_files(repo, settings=cfg.github)))

    if dry_run:
        console.print(f"[bold]Dry run — {len(files)} files would be scanned:[/bold]")
        for f in files:
            console.print(f"  {f.filename}")
        raise typer.Exit(code=0)

    # --- Run analysis ---
    report = analyze(files, registry, workers=cfg.scan.workers)

    # --- Output ---
    report_text: Optional[str] = None

    if cfg.output.format == "terminal":
        terminal.render(
            report, fail_on=cfg.scan.fail_on, show_summary=cfg.output.show_summary,
            console=console,
        )
    elif cfg.output.format == "json":
        report_text = json_report.render(report)
        print(report_text)
    elif cfg.output.format == "sarif":
        report_text = sarif.render(report)
        print(report_text)
    elif cfg.output.format == "document":
        report_text = document.render(report)
        print(report_text, end="")

    # --- Write to file ---
    if output:
        if report_text is None:
            # Terminal output is not a file format; persist the JSON record.
            report_text = json_report.render(report)
        Path(output).write_text(report_text, encoding="utf-8")
        if verbose:
            console.print(f"[dim]Report written to {output}[/dim]")

    # --- Exit code ---
    if report.is_blocked(cfg.scan.fail_on):
        raise typer.Exit(code=1)
    raise typer.Exit(code=0)


# ── rules ─────────────────────────────────────────────────────────────────────


@app.command()
def rules(
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .raceguard.toml"),
) -> None:
    """List the enabled rules, family by family, in evaluation order."""
    from raceguard.config.schema import CATEGORIES

    cfg = _load(config)
    registry = _registry(cfg)

    table = Table(title="RaceGuard Rules", border_style="dim", title_style="bold")
    table.add_column("Family", style="magenta")
    table.add_column("Rule", style="cyan")
    table.add_column("Type")
    table.add_column("Severity", justify="center")

    for category in CATEGORIES:
        for rule in registry.family(category):
            table.add_row(category, rule.id, rule.kind, rule.severity)

    Console().print(table)


# ── init ──────────────────────────────────────────────────────────────────────


@app.command()
def init(
    force: bool = typer.Option(False, "--force", help="Overwrite an existing .raceguard.toml"),
) -> None:
    """Generate a starter .raceguard.toml in the working directory."""
    from raceguard.config.defaults import DEFAULT_TOML
    from raceguard.config.loader import CONFIG_FILENAME

    config_path = Path.cwd() / CONFIG_FILENAME

    if config_path.exists() and not force:
        console.print(f"[yellow]⚠[/yellow]  {CONFIG_FILENAME} already exists at {config_path}")
        raise typer.Exit(code=1)

    config_path.write_text(DEFAULT_TOML, encoding="utf-8")
    console.print(f"[green]✓[/green] Created {config_path}")


# ── serve ─────────────────────────────────────────────────────────────────────


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", "--host", help="Bind address"),
    port: int = typer.Option(8000, "--port", "-p", help="Bind port"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .raceguard.toml"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
) -> None:
    """Run the HTTP analysis service."""
    import uvicorn

    from raceguard.rules.models import RuleError
    from raceguard.service.app import create_app

    _configure_logging(verbose, False)
    cfg = _load(config)
    try:
        service = create_app(cfg, Path.cwd())
    except RuleError as exc:
        console.print(f"[bold red]Rule error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc
    uvicorn.run(service, host=host, port=port, log_level="info" if verbose else "warning")


# ── version ───────────────────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        print(f"raceguard {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
) -> None:
    """RaceGuard — find race-condition hazards before they ship."""
