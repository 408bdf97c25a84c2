"""CLI entry point for exportgraph."""

import json
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.progress import BarColumn, Progress, SpinnerColumn, TaskProgressColumn, TextColumn
from rich.table import Table

from exportgraph.core.analyzer import Analyzer
from exportgraph.core.config import find_config, load_settings
from exportgraph.core.exceptions import ConfigError
from exportgraph.core.graph.analysis import find_reexport_cycles, find_unused_exports
from exportgraph.core.graph.pathfinding import origin_chain
from exportgraph.core.logging import configure_logging
from exportgraph.core.models import AnalysisStats, ExportBinding

app = typer.Typer(
    name="exportgraph",
    help="Cross-file export analysis for JavaScript and TypeScript syntax trees.",
    no_args_is_help=True,
)
console = Console()

PathArg = Annotated[Path, typer.Argument(help="Directory of syntax tree JSON dumps")]
EntryOpt = Annotated[
    list[str] | None, typer.Option("--entry", "-E", help="Entry file patterns")
]
ExcludeOpt = Annotated[
    list[str] | None, typer.Option("--exclude", "-e", help="Patterns to exclude")
]
ConfigOpt = Annotated[
    Path | None, typer.Option("--config", "-c", help="exportgraph.toml or pyproject.toml")
]
JsonOpt = Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")]
LogLevelOpt = Annotated[str | None, typer.Option("--log-level", help="Log level")]


def run_analysis(
    path: Path,
    entry: list[str] | None = None,
    exclude: list[str] | None = None,
    config: Path | None = None,
    log_level: str | None = None,
    show_progress: bool = False,
) -> tuple[Analyzer, AnalysisStats]:
    """Load settings, then analyze every dump below ``path``."""
    path = path.resolve()
    try:
        settings = load_settings(
            config or find_config(path),
            entry_files=entry or None,
            log_level=log_level,
        )
    except ConfigError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=1) from e

    configure_logging(level=settings.log_level)
    analyzer = Analyzer(settings)

    if not show_progress:
        return analyzer, analyzer.analyze_directory(path, exclude_patterns=exclude or [])

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task(f"Loading [cyan]{path.name}[/]", total=None)

        def on_progress(file: Path, current: int, total: int) -> None:
            progress.update(task, total=total, completed=current)
            progress.update(task, description=f"[cyan]{file.relative_to(path)}[/]")

        stats = analyzer.analyze_directory(
            path, exclude_patterns=exclude or [], on_progress=on_progress
        )
    return analyzer, stats


def binding_to_dict(binding: ExportBinding) -> dict[str, object]:
    return {
        "file": binding.file,
        "name": binding.name,
        "kind": binding.kind.value,
        "reachable": binding.is_reachable_from_entry,
        "referenced_by": sorted(binding.referencing_files()),
    }


def print_stats(stats: AnalysisStats) -> None:
    console.print(f"  Files analyzed: {stats.files}")
    console.print(f"  Exports bound: {stats.exports}")
    console.print(f"  Aliases resolved: {stats.aliases}")
    if stats.skipped:
        console.print(f"  [dim]Skipped: {stats.skipped}[/]")
    if stats.errors:
        console.print(f"  [red]Errors: {len(stats.errors)}[/red]")
        for error in stats.errors:
            console.print(f"    {error}")


@app.command()
def unused(
    path: PathArg = Path("."),
    entry: EntryOpt = None,
    exclude: ExcludeOpt = None,
    config: ConfigOpt = None,
    output_json: JsonOpt = False,
    log_level: LogLevelOpt = None,
) -> None:
    """List exported symbols that no other file uses."""
    analyzer, stats = run_analysis(
        path, entry, exclude, config, log_level, show_progress=not output_json
    )
    results = find_unused_exports(analyzer.graph)

    if output_json:
        print(json.dumps([{"file": u.file, "name": u.name} for u in results]))
        return

    print_stats(stats)
    if not results:
        console.print("[green]No unused exports[/green]")
        return

    console.print(f"\n[bold]Unused exports ({len(results)}):[/]")
    current_file = None
    for item in results:
        if item.file != current_file:
            console.print(f"[cyan]{item.file}[/cyan]")
            current_file = item.file
        console.print(f"  {item.name}")


@app.command()
def exports(
    path: PathArg,
    file: Annotated[str, typer.Argument(help="File address, e.g. src/index.js")],
    config: ConfigOpt = None,
    output_json: JsonOpt = False,
    log_level: LogLevelOpt = None,
) -> None:
    """Show a file's export table."""
    analyzer, _ = run_analysis(path, config=config, log_level=log_level)
    graph = analyzer.graph

    if not graph.has_file(file):
        console.print(f"No file '[cyan]{file}[/cyan]'")
        raise typer.Exit(code=1)

    table_entries = graph.export_table(file)
    if output_json:
        print(json.dumps({name: binding_to_dict(b) for name, b in table_entries.items()}))
        return

    if not table_entries:
        console.print(f"[cyan]{file}[/cyan] exports nothing")
        return

    table = Table(title=file)
    table.add_column("Name", style="cyan")
    table.add_column("Declared in")
    table.add_column("Reachable")
    table.add_column("Referenced by")
    for name, binding in table_entries.items():
        owner = "" if binding.file == file else f"{binding.file}:{binding.name}"
        table.add_row(
            name,
            owner or "[dim]here[/]",
            "yes" if binding.is_reachable_from_entry else "no",
            ", ".join(sorted(binding.referencing_files())) or "[dim]-[/]",
        )
    console.print(table)


@app.command()
def origin(
    path: PathArg,
    file: Annotated[str, typer.Argument(help="File address that exports the name")],
    name: Annotated[str, typer.Argument(help="Exported name")],
    config: ConfigOpt = None,
    output_json: JsonOpt = False,
    log_level: LogLevelOpt = None,
) -> None:
    """Trace an exported name back to the file that declares it."""
    analyzer, _ = run_analysis(path, config=config, log_level=log_level)
    chain = origin_chain(analyzer.graph, file, name)

    if chain is None:
        console.print(f"'[cyan]{file}[/cyan]' does not export '[cyan]{name}[/cyan]'")
        raise typer.Exit(code=1)

    if output_json:
        print(
            json.dumps(
                {
                    "steps": [{"file": f, "name": n} for f, n in chain],
                    "binding": binding_to_dict(chain.binding),
                }
            )
        )
        return

    for i, (step_file, step_name) in enumerate(chain):
        branch = "▶" if i == 0 else "└─"
        console.print(f"{'   ' * max(i - 1, 0)}{branch} [cyan]{step_name}[/] [dim]{step_file}[/]")


@app.command()
def diagnostics(
    path: PathArg = Path("."),
    config: ConfigOpt = None,
    output_json: JsonOpt = False,
    log_level: LogLevelOpt = None,
) -> None:
    """List skipped symbols, load errors and re-export cycles."""
    analyzer, stats = run_analysis(path, config=config, log_level=log_level)
    cycles = find_reexport_cycles(analyzer.graph)

    if output_json:
        print(
            json.dumps(
                {
                    "diagnostics": [
                        {
                            "file": d.file,
                            "name": d.name,
                            "reason": d.reason.value,
                            "detail": d.detail,
                        }
                        for d in stats.diagnostics
                    ],
                    "errors": stats.errors,
                    "cycles": cycles,
                }
            )
        )
        return

    if not stats.diagnostics and not stats.errors and not cycles:
        console.print("[green]No diagnostics[/green]")
        return

    for diagnostic in stats.diagnostics:
        console.print(
            f"[cyan]{diagnostic.file}[/cyan] {diagnostic.name} "
            f"[yellow]\\[{diagnostic.reason.value}][/] [dim]{diagnostic.detail}[/]"
        )
    for error in stats.errors:
        console.print(f"[red]{error}[/red]")
    for cycle in cycles:
        console.print(f"[yellow]cycle:[/] {' -> '.join(cycle + cycle[:1])}")


if __name__ == "__main__":
    app()
