"""Selector namespacing: resolver, eligibility checks and rewriters."""

from selector_namespace.namespacing.eligibility import is_eligible
from selector_namespace.namespacing.html_tag import qualify_html_tag
from selector_namespace.namespacing.resolver import resolve_namespace, split_namespace
from selector_namespace.namespacing.rewriter import rewrite_selector

__all__ = [
    "is_eligible",
    "qualify_html_tag",
    "resolve_namespace",
    "split_namespace",
    "rewrite_selector",
]
