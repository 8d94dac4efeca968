"""Sequential processor: parse, run plugins, render, with timing."""

from __future__ import annotations

import time
from pathlib import Path
from typing import Any, Callable, Iterable

from selector_namespace.config import ProcessResult
from selector_namespace.output import render
from selector_namespace.plugin import selector_namespace
from selector_namespace.tree.css import parse_stylesheet


class Processor:
    """Runs a list of plugins over one parsed stylesheet at a time.

    A plugin is any object with a ``name`` and a ``once(root)`` method that
    mutates the tree and returns how many selectors it rewrote.
    """

    def __init__(self, plugins: Iterable[Any] | None = None) -> None:
        self.plugins = list(plugins or [])

    def use(self, plugin: Any) -> Processor:
        self.plugins.append(plugin)
        return self

    def process(self, css: str | bytes, file: str | None = None) -> ProcessResult:
        timings: dict[str, float] = {}

        start = time.monotonic()
        root = parse_stylesheet(css, file=file)
        timings["parse"] = time.monotonic() - start

        rewritten = 0
        for plugin in self.plugins:
            start = time.monotonic()
            rewritten += plugin.once(root) or 0
            timings[plugin.name] = time.monotonic() - start

        start = time.monotonic()
        output = render(root)
        timings["render"] = time.monotonic() - start

        return ProcessResult(
            css=output,
            root=root,
            file=file,
            rules=sum(1 for _ in root.rules()),
            rewritten=rewritten,
            timings=timings,
        )


def transform(css: str | bytes, file: str | None = None, **options: Any) -> ProcessResult:
    """Namespace *css* in one call with the given plugin options."""
    return Processor([selector_namespace(**options)]).process(css, file=file)


def process_files(
    paths: Iterable[str | Path],
    processor: Processor,
    progress_callback: Callable[[str], None] | None = None,
) -> list[ProcessResult]:
    """Process each file with its own path as the source file.

    Args:
        paths: Stylesheets to read (UTF-8).
        processor: Processor to run on each file.
        progress_callback: Optional callable(path) invoked before each
            file. Used by the CLI for Rich progress.
    """
    results: list[ProcessResult] = []
    for path in paths:
        path = str(path)
        if progress_callback:
            progress_callback(path)
        source = Path(path).read_bytes()
        results.append(processor.process(source, file=path))
    return results
