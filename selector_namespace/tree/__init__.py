"""Rule tree model and the tree-sitter CSS adapter that builds it."""

from selector_namespace.tree.css import parse_stylesheet, split_selector_list
from selector_namespace.tree.nodes import AtRule, Root, Rule

__all__ = ["parse_stylesheet", "split_selector_list", "AtRule", "Root", "Rule"]
