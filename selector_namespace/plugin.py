"""Plugin factory: namespaces every eligible rule of a stylesheet."""

from __future__ import annotations

import logging
from typing import Any

from selector_namespace.config import NamespaceConfig
from selector_namespace.namespacing import (
    is_eligible,
    qualify_html_tag,
    resolve_namespace,
    split_namespace,
    rewrite_selector,
)
from selector_namespace.tree.nodes import Root, Rule

logger = logging.getLogger(__name__)

PLUGIN_NAME = "selector-namespace"


class SelectorNamespacePlugin:
    name = PLUGIN_NAME

    def __init__(self, config: NamespaceConfig) -> None:
        self.config = config

    def namespace_selector(self, selector: str, namespace: str) -> str:
        if self.config.process_html_tag_specifically:
            qualified = qualify_html_tag(selector, namespace)
            if qualified is not None:
                return qualified
        return rewrite_selector(selector, namespace, self.config)

    def once(self, root: Root) -> int:
        """Namespace *root* in place and return the number of selectors changed.

        New selector lists are computed for every rule before any is
        assigned, so an error leaves the tree untouched.
        """
        namespace = resolve_namespace(self.config, root.file)
        if not namespace or not split_namespace(namespace):
            logger.debug(f"No namespace for {root.file or '<input>'}, leaving it unchanged")
            return 0

        pending: list[tuple[Rule, list[str]]] = []

        def collect(rule: Rule) -> None:
            if is_eligible(rule):
                pending.append((rule, [self.namespace_selector(s, namespace) for s in rule.selectors]))

        root.walk_rules(collect)

        rewritten = 0
        for rule, selectors in pending:
            rewritten += sum(1 for old, new in zip(rule.selectors, selectors) if old != new)
            rule.selectors = selectors
        return rewritten


def selector_namespace(config: NamespaceConfig | None = None, **options: Any) -> SelectorNamespacePlugin:
    """Create the namespacing plugin from a config or keyword options.

    Options: ``namespace``, ``self_selector``, ``root_selector``,
    ``ignore_root``, ``drop_root``, ``process_html_tag_specifically``.
    """
    if config is None:
        config = NamespaceConfig.from_options(**options)
    elif options:
        raise TypeError("Pass either a NamespaceConfig or keyword options, not both")
    return SelectorNamespacePlugin(config)
