"""selector-namespace CLI - Scope stylesheets under a namespace selector."""

from __future__ import annotations

import logging
import time
from pathlib import Path

import click

from selector_namespace.config import ConfigurationError, NamespaceConfig, ProcessResult
from selector_namespace.output import build_summary, write_output
from selector_namespace.pipeline import Processor, process_files
from selector_namespace.plugin import selector_namespace


@click.group()
def cli() -> None:
    """selector-namespace - Confine global stylesheets to a component root."""
    pass


def _template_namespace(template: str):
    """Build a per-file namespace callable from a str.format template."""

    def namespace(file: str | None) -> str:
        path = Path(file or "")
        return template.format(stem=path.stem, name=path.name, parent=path.parent.name)

    return namespace


def _configure_logging(verbose: bool, quiet: bool) -> None:
    from rich.console import Console
    from rich.logging import RichHandler

    level = logging.DEBUG if verbose else logging.ERROR if quiet else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _run_with_progress(paths: list[str], processor: Processor, verbose: bool) -> list[ProcessResult]:
    """Run the processor with Rich progress display and a summary table."""
    from rich.console import Console
    from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
    from rich.table import Table

    console = Console(stderr=True)
    total_start = time.monotonic()

    with Progress(
        SpinnerColumn(),
        TextColumn("[bold blue]{task.description}"),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task("Initialising...", total=None)

        def on_file(path):
            progress.update(task, description=f"Namespacing {path}")

        results = process_files(paths, processor, progress_callback=on_file)

    duration = (time.monotonic() - total_start) * 1000
    summary = build_summary(results)

    table = Table(title="Selector Namespace", show_edge=False)
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")

    table.add_row("Files", str(summary["files"]))
    table.add_row("Rules", str(summary["rules"]))
    table.add_row("Selectors rewritten", str(summary["rewritten"]))
    table.add_row("Unchanged files", str(summary["unchanged_files"]))
    table.add_row("Duration", f"{duration:.1f}ms")

    console.print(table)

    if verbose:
        timing_table = Table(title="Phase Timings", show_edge=False)
        timing_table.add_column("File", style="bold")
        timing_table.add_column("Phase")
        timing_table.add_column("Time (ms)", justify="right")
        for result in results:
            for phase, seconds in result.timings.items():
                timing_table.add_row(result.file or "<input>", phase, f"{seconds * 1000:.1f}")
        console.print(timing_table)

    return results


def _output_path(source: str, output_path: str | None, in_place: bool, multiple: bool) -> Path | None:
    if in_place:
        return Path(source)
    if output_path is None:
        return None
    if multiple:
        return Path(output_path) / Path(source).name
    return Path(output_path)


@cli.command("apply")
@click.argument("paths", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.option("-n", "--namespace", default=None, help="Namespace selector, e.g. '.my-component'")
@click.option(
    "--namespace-template",
    default=None,
    help="Per-file namespace, formatted with {stem}, {name} and {parent}",
)
@click.option("--self-selector", default=None, help="Regex for the token replaced by the namespace")
@click.option("--root-selector", default=None, help="Regex for the root scope token")
@click.option(
    "--ignore-root/--prefix-root",
    default=True,
    help="Leave selectors starting with the root token out of the namespace",
)
@click.option("--drop-root/--keep-root", default=True, help="Strip the root token when it is ignored")
@click.option("--html-tag", is_flag=True, help="Append the namespace to 'html' type selectors")
@click.option("-o", "--output", "output_path", default=None, help="Output file (or directory for several inputs)")
@click.option("--in-place", is_flag=True, help="Overwrite the input files")
@click.option("--verbose", is_flag=True, help="Show per-phase timings and debug logging")
@click.option("--quiet", is_flag=True, help="Suppress all output except errors")
def apply_cmd(
    paths: tuple[str, ...],
    namespace: str | None,
    namespace_template: str | None,
    self_selector: str | None,
    root_selector: str | None,
    ignore_root: bool,
    drop_root: bool,
    html_tag: bool,
    output_path: str | None,
    in_place: bool,
    verbose: bool,
    quiet: bool,
) -> None:
    """Namespace every eligible rule of the given stylesheets."""
    if namespace and namespace_template:
        raise click.UsageError("--namespace and --namespace-template are mutually exclusive")
    if in_place and output_path:
        raise click.UsageError("--in-place and --output are mutually exclusive")
    if output_path and len(paths) > 1:
        names = [Path(p).name for p in paths]
        clashes = sorted({n for n in names if names.count(n) > 1})
        if clashes:
            raise click.UsageError(
                f"Inputs share a file name and would overwrite each other in {output_path}: "
                f"{', '.join(clashes)}"
            )

    options: dict = {
        "ignore_root": ignore_root,
        "drop_root": drop_root,
        "process_html_tag_specifically": html_tag,
    }
    if namespace_template is not None:
        options["namespace"] = _template_namespace(namespace_template)
    elif namespace is not None:
        options["namespace"] = namespace
    if self_selector is not None:
        options["self_selector"] = self_selector
    if root_selector is not None:
        options["root_selector"] = root_selector

    try:
        config = NamespaceConfig.from_options(**options)
    except ConfigurationError as e:
        raise click.BadParameter(str(e)) from e

    _configure_logging(verbose, quiet)
    processor = Processor([selector_namespace(config)])

    if quiet:
        results = process_files(paths, processor)
    else:
        results = _run_with_progress(list(paths), processor, verbose)

    multiple = len(results) > 1
    for result in results:
        target = _output_path(result.file, output_path, in_place, multiple)
        if target is None:
            click.echo(result.css, nl=False)
            continue
        write_output(result, target)
        if not quiet:
            from rich.console import Console
            Console(stderr=True).print(f"[green]Output written to:[/green] {target}")


if __name__ == "__main__":
    cli()
