"""Tree-sitter CSS concrete syntax tree to rule tree conversion."""

from __future__ import annotations

import logging

import tree_sitter
import tree_sitter_css as ts_css

from selector_namespace.tree.nodes import AtRule, ParentNode, Root, Rule

logger = logging.getLogger(__name__)

_parser: tree_sitter.Parser | None = None

# Node types whose body is walked for nested rules
_BODY_TYPES = ("block", "keyframe_block_list")

_OPENERS = {"(": ")", "[": "]"}
_QUOTES = ("'", '"')


def get_language() -> tree_sitter.Language:
    return tree_sitter.Language(ts_css.language())


def get_parser() -> tree_sitter.Parser:
    """Get or create the shared CSS parser."""
    global _parser
    if _parser is None:
        _parser = tree_sitter.Parser(get_language())
    return _parser


def _scan_selector_list(text: str) -> tuple[list[str], list[int]]:
    """Split *text* on top-level commas, dropping ``/* */`` comments.

    Returns the stripped parts and the offsets of the top-level commas.
    """
    parts: list[str] = []
    commas: list[int] = []
    closers: list[str] = []
    quote: str | None = None
    escaped = False
    current = ""
    i = 0

    while i < len(text):
        char = text[i]
        if escaped:
            escaped = False
        elif char == "\\":
            escaped = True
        elif quote:
            if char == quote:
                quote = None
        elif text.startswith("/*", i):
            end = text.find("*/", i + 2)
            i = len(text) if end == -1 else end + 2
            continue
        elif char in _QUOTES:
            quote = char
        elif char in _OPENERS:
            closers.append(_OPENERS[char])
        elif closers and char == closers[-1]:
            closers.pop()
        elif char == "," and not closers:
            parts.append(current.strip())
            commas.append(i)
            current = ""
            i += 1
            continue
        current += char
        i += 1

    parts.append(current.strip())
    return [p for p in parts if p], commas


def split_selector_list(text: str) -> list[str]:
    """Split a selector group on top-level commas.

    Commas inside parentheses, attribute brackets or quoted strings belong
    to a single selector (``:is(.a, .b)``, ``[title="a,b"]``). Comments
    are not part of any selector.
    """
    return _scan_selector_list(text)[0]


def _separator(text: str) -> str:
    """Return the first top-level comma plus trailing whitespace in *text*."""
    commas = _scan_selector_list(text)[1]
    if not commas:
        return ", "
    start = commas[0]
    end = start + 1
    while end < len(text) and text[end].isspace():
        end += 1
    return text[start:end]


def _text(node: tree_sitter.Node, source: bytes) -> str:
    return source[node.start_byte:node.end_byte].decode("utf-8")


def _find_child(node: tree_sitter.Node, types: tuple[str, ...]) -> tree_sitter.Node | None:
    for child in node.children:
        if child.type in types:
            return child
    return None


def _is_at_rule(node: tree_sitter.Node) -> bool:
    return node.type == "at_rule" or node.type.endswith("_statement")


def _build_rule(node: tree_sitter.Node, source: bytes, selectors_node: tree_sitter.Node) -> Rule:
    raw = _text(selectors_node, source)
    return Rule(
        selectors=split_selector_list(raw),
        line=node.start_point[0] + 1,
        selector_range=(selectors_node.start_byte, selectors_node.end_byte),
        separator=_separator(raw),
    )


def _build_at_rule(node: tree_sitter.Node, source: bytes) -> AtRule:
    keyword = node.children[0]
    name = _text(keyword, source).lstrip("@")
    return AtRule(name=name, line=node.start_point[0] + 1)


def _walk_node(node: tree_sitter.Node, source: bytes, parent: ParentNode, file: str | None) -> None:
    for child in node.named_children:
        if child.type == "rule_set":
            selectors = _find_child(child, ("selectors",))
            block = _find_child(child, ("block",))
            if selectors is None:
                continue
            rule = parent.append(_build_rule(child, source, selectors))
            if block is not None:
                _walk_node(block, source, rule, file)

        elif child.type == "keyframe_block":
            # from / to / percentage selector followed by a declaration block
            selector = child.named_children[0] if child.named_children else None
            if selector is None or selector.type == "block":
                continue
            parent.append(_build_rule(child, source, selector))

        elif child.type == "ERROR":
            logger.warning(
                f"Skipping unparseable CSS in {file or '<input>'} at line {child.start_point[0] + 1}"
            )

        elif _is_at_rule(child):
            body = _find_child(child, _BODY_TYPES)
            if body is None:
                continue
            at_rule = parent.append(_build_at_rule(child, source))
            _walk_node(body, source, at_rule, file)


def parse_stylesheet(source: str | bytes, file: str | None = None) -> Root:
    """Parse CSS text into a rule tree rooted at a Root node."""
    if isinstance(source, str):
        source = source.encode("utf-8")
    tree = get_parser().parse(source)
    root = Root(source=source, file=file)
    _walk_node(tree.root_node, source, root, file)
    return root
