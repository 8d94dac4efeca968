"""CSS serialisation and output writing."""

from __future__ import annotations

from pathlib import Path

from selector_namespace.config import ProcessResult
from selector_namespace.tree.nodes import Root


def render(root: Root) -> str:
    """Serialise the tree by splicing changed selector lists into the source.

    Everything outside a changed rule's selector range is emitted
    byte-for-byte as parsed.
    """
    edits = [
        (rule.selector_range, rule.selector.encode("utf-8"))
        for rule in root.rules()
        if rule.changed and rule.selector_range is not None
    ]
    edits.sort(key=lambda e: e[0][0])

    out = bytearray()
    pos = 0
    for (start, end), replacement in edits:
        out += root.source[pos:start]
        out += replacement
        pos = end
    out += root.source[pos:]
    return out.decode("utf-8")


def build_summary(results: list[ProcessResult]) -> dict[str, int]:
    """Aggregate per-file results into the counts shown by the CLI."""
    return {
        "files": len(results),
        "rules": sum(r.rules for r in results),
        "rewritten": sum(r.rewritten for r in results),
        "unchanged_files": sum(1 for r in results if r.rewritten == 0),
    }


def write_output(result: ProcessResult, output_path: str | Path) -> None:
    """Write the rendered CSS to a file."""
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(result.css, encoding="utf-8")
