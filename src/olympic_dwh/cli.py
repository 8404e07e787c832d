"""CLI entry point for olympic-dwh.

Commands:
- run: Rebuild the Gold warehouse from the raw CSV extracts
- export: Write the analytical views as CSV files
- check: Run Gold quality checks
"""

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from olympic_dwh import __version__
from olympic_dwh.config import Config, load_config
from olympic_dwh.logging import setup_logging

console = Console()


def _print_error(ctx: click.Context, e: BaseException) -> None:
    console.print(f"\n[bold red]Error:[/bold red] {e}")
    if ctx.obj.get("verbose"):
        import traceback

        console.print("\n[dim]Traceback:[/dim]")
        console.print(traceback.format_exc())


@click.group()
@click.version_option(version=__version__, prog_name="olympic-dwh")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable verbose output")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """Olympic Data Warehouse.

    Builds a star-schema warehouse (Bronze -> Silver -> Gold) from raw
    Olympedia CSV extracts and exports analytical views.

    \b
    Quick Start:
        1. Rebuild the warehouse: olympic-dwh run --config config.yaml
        2. Export views: olympic-dwh export --config config.yaml
        3. Validate Gold tables: olympic-dwh check --config config.yaml
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    setup_logging(verbose=verbose)


@main.command()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    required=True,
    help="Path to config.yaml file",
)
@click.option(
    "--export",
    "do_export",
    is_flag=True,
    default=False,
    help="Export analytical views after the rebuild",
)
@click.pass_context
def run(ctx: click.Context, config: Path, do_export: bool) -> None:
    """Rebuild the Gold warehouse from the raw CSV extracts.

    All Gold tables are dropped and rebuilt from scratch:
    1. Loads the raw extracts and normalizes them (Silver)
    2. Builds dim_athletes, dim_nocs, dim_games, dim_sport_events
    3. Resolves fact_olympic_results against the dimensions
    """
    from olympic_dwh.pipeline.orchestrator import PipelineOrchestrator, PipelineStageError

    cfg = load_config(config)

    console.print(f"[bold]Rebuilding warehouse under {cfg.storage.root}[/bold]")
    console.print()

    try:
        report = PipelineOrchestrator(cfg).run()
    except PipelineStageError as e:
        console.print(f"\n[bold red]Stage failed:[/bold red] {e.stage.value}")
        _print_error(ctx, e.cause)
        raise click.Abort() from e

    table = Table(title="Pipeline stages")
    table.add_column("Stage", style="cyan")
    table.add_column("Table")
    table.add_column("Rows", justify="right")
    table.add_column("Duration", justify="right")

    for stage in report.stages:
        first = True
        for name, count in stage.row_counts.items():
            table.add_row(
                stage.name if first else "",
                name,
                f"{count:,}",
                f"{stage.duration_seconds:.2f}s" if first else "",
            )
            first = False

    console.print(table)

    unresolved = {k: v for k, v in report.unresolved.items() if v}
    if unresolved:
        console.print("[yellow]Unresolved keys:[/yellow]")
        for key, count in unresolved.items():
            console.print(f"  {key}: {count:,}")

    if report.quality is not None and not report.quality.passed:
        console.print(f"[yellow]{len(report.quality.failures)} quality checks failed:[/yellow]")
        for failure in report.quality.failures:
            console.print(f"  {failure}")

    console.print()
    console.print(f"[bold green]Rebuild complete[/bold green] in {report.duration_seconds:.2f}s")

    if do_export:
        _export(ctx, cfg)


@main.command()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    required=True,
    help="Path to config.yaml file",
)
@click.pass_context
def export(ctx: click.Context, config: Path) -> None:
    """Export the analytical views as CSV files.

    Views are computed from existing Gold tables; run the pipeline first.
    """
    _export(ctx, load_config(config))


def _export(ctx: click.Context, cfg: Config) -> None:
    from olympic_dwh.analytics.export import export_views

    console.print("[cyan]Exporting analytical views...[/cyan]")
    try:
        written = export_views(cfg)
    except Exception as e:
        _print_error(ctx, e)
        raise click.Abort() from e

    for path in written.values():
        console.print(f"  ✓ {path}")
    console.print(f"[bold green]Exported {len(written)} views[/bold green]")


@main.command()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    required=True,
    help="Path to config.yaml file",
)
@click.pass_context
def check(ctx: click.Context, config: Path) -> None:
    """Run quality checks against the Gold tables."""
    from olympic_dwh.analytics.quality import run_quality_checks
    from olympic_dwh.storage.warehouse import WarehouseStore

    cfg = load_config(config)

    try:
        report = run_quality_checks(WarehouseStore(cfg).read_all())
    except Exception as e:
        _print_error(ctx, e)
        raise click.Abort() from e

    table = Table(title="Gold quality checks")
    table.add_column("Check", style="cyan")
    table.add_column("Status")
    table.add_column("Details")

    for result in report.results:
        if result.informational:
            status = "[blue]INFO[/blue]"
        elif result.passed:
            status = "[green]PASS[/green]"
        else:
            status = "[red]FAIL[/red]"
        table.add_row(result.name, status, result.message)

    console.print(table)

    if not report.passed:
        console.print(f"[bold red]{len(report.failures)} checks failed[/bold red]")
        raise click.Abort()

    console.print("[bold green]All checks passed[/bold green]")


if __name__ == "__main__":
    main()
