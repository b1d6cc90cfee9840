"""vulntally CLI — Typer application with summary and init commands."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from vulntally import __version__

app = typer.Typer(
    name="vulntally",
    help="Summarise Amazon Inspector findings for a container image tag.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(stderr=True)

EXIT_PARTIAL = 3
EXIT_INTERRUPTED = 130


# ── summary ───────────────────────────────────────────────────────────────────


@app.command()
def summary(
    profile: Optional[str] = typer.Option(None, "--profile", "-p", help="Name of AWS profile"),
    tag: str = typer.Option("", "--tag", "-t", help="Image tag used for filtering"),
    ignore: Optional[str] = typer.Option(
        None, "--ignore", "-i", help="Comma-separated repositories to ignore"
    ),
    region: Optional[str] = typer.Option(None, "--region", help="AWS region override"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .vulntally.toml"),
    format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format: terminal | json"),
    page_size: Optional[int] = typer.Option(
        None, "--page-size", help="Findings per request (1-100)"
    ),
    allow_partial: bool = typer.Option(
        False, "--allow-partial", help="Report findings fetched before a failed page"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
) -> None:
    """Fetch findings for images tagged TAG and print counts per repository."""
    from vulntally.aws.fetcher import FetchError, fetch_findings
    from vulntally.aws.identity import check_caller_identity
    from vulntally.aws.session import AuthenticationError, Boto3ClientFactory
    from vulntally.config.loader import ConfigError, load_config
    from vulntally.config.schema import OUTPUT_FORMATS, valid_page_size
    from vulntally.findings.aggregator import aggregate
    from vulntally.findings.filters import ValidationError, build_filter
    from vulntally.log import setup_logging
    from vulntally.output import json_report, terminal

    setup_logging(verbose, console)

    # --- Load config ---
    try:
        cfg = load_config(Path.cwd(), config)
    except ConfigError as exc:
        console.print(f"[bold red]Config error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    # --- CLI overrides ---
    if profile is not None:
        cfg.aws.profile = profile
    if region:
        cfg.aws.region = region
    if format:
        if format not in OUTPUT_FORMATS:
            console.print(f"[bold red]Invalid format:[/bold red] {format}")
            raise typer.Exit(code=2)
        cfg.output.format = format  # type: ignore[assignment]
    if page_size is not None:
        if not valid_page_size(page_size):
            console.print(f"[bold red]Invalid page size:[/bold red] {page_size}")
            raise typer.Exit(code=2)
        cfg.aws.page_size = page_size
    if allow_partial:
        cfg.report.allow_partial = True
    ignore_list = ignore if ignore is not None else ",".join(cfg.filter.ignore)

    # --- Validate before any network call ---
    if not cfg.aws.profile:
        console.print("[bold red]Error:[/bold red] Please provide an AWS profile name (-p)")
        raise typer.Exit(code=2)
    try:
        query = build_filter(tag, ignore_list)
    except ValidationError:
        console.print("[bold red]Error:[/bold red] Please provide an image tag (-t)")
        raise typer.Exit(code=2)

    if verbose:
        console.print(f"[dim]Profile: {cfg.aws.profile}[/dim]")
        console.print(f"[dim]Excluded repositories: {sorted(query.excluded_repositories)}[/dim]")

    factory = Boto3ClientFactory(cfg.aws.profile, cfg.aws.region)

    try:
        # --- Identity ---
        try:
            identity = check_caller_identity(factory)
        except AuthenticationError as exc:
            console.print(f"[bold red]Authentication error:[/bold red] {exc}")
            raise typer.Exit(code=1) from exc
        console.print(f"Account: {identity.account}, Arn: {identity.arn}")

        # --- Fetch ---
        partial = False
        try:
            findings = fetch_findings(factory, query, page_size=cfg.aws.page_size)
        except AuthenticationError as exc:
            console.print(f"[bold red]Authentication error:[/bold red] {exc}")
            raise typer.Exit(code=1) from exc
        except FetchError as exc:
            console.print(f"[bold red]Fetch error:[/bold red] {exc}")
            if not cfg.report.allow_partial:
                raise typer.Exit(code=1) from exc
            console.print(
                f"[yellow]Reporting {len(exc.findings)} finding(s) "
                f"from {exc.pages} page(s) fetched before the failure.[/yellow]"
            )
            findings = exc.findings
            partial = True
    except KeyboardInterrupt:
        console.print("[bold red]Interrupted.[/bold red]")
        raise typer.Exit(code=EXIT_INTERRUPTED)

    # --- Aggregate and render ---
    result = aggregate(findings, partial=partial)

    if cfg.output.format == "json":
        print(json_report.render(result, query.tag))
    else:
        terminal.render(result, query.tag, show_summary=cfg.output.show_summary)

    raise typer.Exit(code=EXIT_PARTIAL if partial else 0)


# ── init ──────────────────────────────────────────────────────────────────────


@app.command()
def init() -> None:
    """Generate a starter .vulntally.toml in the current directory."""
    from vulntally.config.defaults import CONFIG_FILENAME, DEFAULT_TOML

    config_path = Path.cwd() / CONFIG_FILENAME

    if config_path.exists():
        console.print(f"[yellow]⚠[/yellow]  {CONFIG_FILENAME} already exists at {config_path}")
        raise typer.Exit(code=1)

    config_path.write_text(DEFAULT_TOML, encoding="utf-8")
    console.print(f"[green]✓[/green] Created {config_path}")


# ── version ───────────────────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        print(f"vulntally {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
) -> None:
    """vulntally — Amazon Inspector findings, tallied per repository."""
