"""Selector rewriting: self reference, root selector, default prefix."""

from __future__ import annotations

from selector_namespace.config import NamespaceConfig
from selector_namespace.namespacing.resolver import split_namespace


def has_self_selector(selector: str, config: NamespaceConfig) -> bool:
    return config.self_selector.search(selector) is not None


def has_root_selector(selector: str, config: NamespaceConfig) -> bool:
    """Root handling applies only when the selector starts with the root token."""
    return config.ignore_root and config.root_selector.match(selector) is not None


def drop_root_selector(selector: str, config: NamespaceConfig) -> str:
    if not config.drop_root:
        return selector
    # A selector that is only the root token is kept as-is
    return config.root_selector.sub("", selector, count=1).strip() or selector


def replace_self_selector(selector: str, namespace: str, config: NamespaceConfig) -> str:
    """Replace every self token, fanning out once per namespace alternative."""
    return ",".join(
        config.self_selector.sub(lambda _m, ns=ns: ns, selector)
        for ns in split_namespace(namespace)
    )


def prefix_selector(selector: str, namespace: str) -> str:
    return ",".join(f"{ns} {selector}" for ns in split_namespace(namespace))


def rewrite_selector(selector: str, namespace: str, config: NamespaceConfig) -> str:
    """Rewrite one selector under *namespace*.

    First match wins:
        1. self token present -> substitute the namespace for it
        2. selector starts with the root token and ``ignore_root`` -> keep
           it out of the namespace, dropping the token if ``drop_root``
        3. otherwise -> ``"{namespace} {selector}"``
    """
    # A namespace made only of commas has nothing to apply
    if not split_namespace(namespace):
        return selector

    if has_self_selector(selector, config):
        return replace_self_selector(selector, namespace, config)

    if has_root_selector(selector, config):
        return drop_root_selector(selector, config)

    return prefix_selector(selector, namespace)
