"""Decide which rules may have their selectors namespaced."""

from __future__ import annotations

import re

from selector_namespace.config import NodeType
from selector_namespace.tree.nodes import Rule

# At-rules whose direct child rules are namespaced as if top-level.
# Any other at-rule parent (keyframes, mixin, layer, ...) blocks namespacing.
ALLOWED_AT_RULE_RE = re.compile(r"(?:media|supports|for)$")


def has_rule_ancestor(rule: Rule) -> bool:
    """Return True if any ancestor of *rule* is itself a style rule."""
    node = rule.parent
    while node is not None:
        if node.type == NodeType.RULE:
            return True
        node = node.parent
    return False


def parent_is_disallowed_at_rule(rule: Rule) -> bool:
    parent = rule.parent
    return (
        parent is not None
        and parent.type == NodeType.AT_RULE
        and not ALLOWED_AT_RULE_RE.search(parent.name)
    )


def is_eligible(rule: Rule) -> bool:
    """Return True if *rule*'s selectors may be rewritten.

    Only the outermost rule of a nest is namespaced; nested rules are
    scoped through it.
    """
    return not (has_rule_ancestor(rule) or parent_is_disallowed_at_rule(rule))
