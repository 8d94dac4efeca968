"""Core data types and configuration for selector namespacing."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Union

if TYPE_CHECKING:
    from selector_namespace.tree.nodes import Root

NamespaceFunction = Callable[[Union[str, None]], Any]
PatternLike = Union[str, "re.Pattern[str]"]

DEFAULT_NAMESPACE = ".self"
DEFAULT_SELF_SELECTOR = r":--namespace"
DEFAULT_ROOT_SELECTOR = r":root"


class ConfigurationError(ValueError):
    """Raised when plugin options cannot be turned into a NamespaceConfig."""


class NodeType(str, Enum):
    ROOT = "root"
    AT_RULE = "atrule"
    RULE = "rule"


def compile_pattern(pattern: PatternLike, option: str) -> re.Pattern[str]:
    """Compile a pattern option, accepting either a compiled regex or its source."""
    if isinstance(pattern, re.Pattern):
        return pattern
    if not isinstance(pattern, str):
        raise ConfigurationError(
            f"{option} must be a string or compiled pattern, got {type(pattern).__name__}"
        )
    try:
        return re.compile(pattern)
    except re.error as e:
        raise ConfigurationError(f"Invalid {option} pattern {pattern!r}: {e}") from e


@dataclass(frozen=True)
class NamespaceConfig:
    namespace: str | NamespaceFunction = DEFAULT_NAMESPACE
    self_selector: re.Pattern[str] = field(default_factory=lambda: re.compile(DEFAULT_SELF_SELECTOR))
    root_selector: re.Pattern[str] = field(default_factory=lambda: re.compile(DEFAULT_ROOT_SELECTOR))
    ignore_root: bool = True
    drop_root: bool = True
    process_html_tag_specifically: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.namespace, str) and not callable(self.namespace):
            raise ConfigurationError(
                f"namespace must be a string or a callable, got {type(self.namespace).__name__}"
            )
        # Frozen dataclass: normalise pattern sources through object.__setattr__
        object.__setattr__(self, "self_selector", compile_pattern(self.self_selector, "self_selector"))
        object.__setattr__(self, "root_selector", compile_pattern(self.root_selector, "root_selector"))

    @classmethod
    def from_options(cls, **options: Any) -> NamespaceConfig:
        """Merge caller options over the defaults.

        Unknown option names are rejected rather than silently ignored.
        """
        known = set(cls.__dataclass_fields__)
        unknown = sorted(set(options) - known)
        if unknown:
            raise ConfigurationError(f"Unknown option(s): {', '.join(unknown)}")
        return cls(**options)


@dataclass
class ProcessResult:
    css: str
    root: Root
    file: str | None = None
    rules: int = 0
    rewritten: int = 0
    timings: dict[str, float] = field(default_factory=dict)

    def __str__(self) -> str:
        return self.css
