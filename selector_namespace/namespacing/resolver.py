"""Namespace resolution: static string or per-file callable."""

from __future__ import annotations

from typing import Any

from selector_namespace.config import NamespaceConfig


def resolve_namespace(config: NamespaceConfig, file: str | None) -> Any:
    """Return the namespace for the document read from *file*.

    A falsy return value means the document must be left untouched.
    Exceptions raised by a namespace callable propagate to the caller.
    """
    if isinstance(config.namespace, str):
        return config.namespace
    return config.namespace(file)


def split_namespace(namespace: str) -> list[str]:
    """Split comma-separated namespace alternatives (".a, .b" -> [".a", ".b"])."""
    return [ns.strip() for ns in namespace.split(",") if ns.strip()]
