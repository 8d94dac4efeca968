"""Qualify bare ``html`` type selectors with the namespace."""

from __future__ import annotations

import tree_sitter

from selector_namespace.namespacing.resolver import split_namespace
from selector_namespace.tree.css import get_parser

_HTML = b"html"


def _html_tag_ranges(node: tree_sitter.Node, limit: int) -> list[tuple[int, int]]:
    ranges: list[tuple[int, int]] = []
    stack = [node]
    while stack:
        current = stack.pop()
        # Ignore the trailing block appended for parsing
        if current.start_byte >= limit:
            continue
        if current.type == "tag_name" and current.text == _HTML:
            ranges.append((current.start_byte, current.end_byte))
            continue
        stack.extend(current.children)
    return sorted(ranges)


def find_html_tags(selector: str) -> list[tuple[int, int]]:
    """Return byte ranges of ``html`` type selectors within *selector*."""
    data = selector.encode("utf-8")
    tree = get_parser().parse(data + b" {}")
    return _html_tag_ranges(tree.root_node, len(data))


def qualify_html_tag(selector: str, namespace: str) -> str | None:
    """Append the namespace to each ``html`` type selector.

    ``html body`` under ``.app`` becomes ``html.app body``.  Returns None
    when the selector has no ``html`` type selector, so the caller can
    fall back to regular rewriting.
    """
    ranges = find_html_tags(selector)
    if not ranges or not split_namespace(namespace):
        return None

    data = selector.encode("utf-8")
    variants = []
    for ns in split_namespace(namespace):
        out = bytearray()
        pos = 0
        for start, end in ranges:
            out += data[pos:start] + _HTML + ns.encode("utf-8")
            pos = end
        out += data[pos:]
        variants.append(out.decode("utf-8"))
    return ",".join(variants)
