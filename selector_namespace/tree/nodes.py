"""Rule tree: Root, AtRule and Rule nodes with parent back references."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, ClassVar, Iterator, Union

from selector_namespace.config import NodeType

ParentNode = Union["Root", "AtRule", "Rule"]
ChildNode = Union["AtRule", "Rule"]


class _Container:
    """Shared traversal for nodes that hold child nodes."""

    nodes: list[ChildNode]

    def append(self, node: ChildNode) -> ChildNode:
        node.parent = self  # type: ignore[assignment]
        self.nodes.append(node)
        return node

    def rules(self) -> Iterator[Rule]:
        """Yield every descendant rule in document order."""
        for node in self.nodes:
            if node.type == NodeType.RULE:
                yield node  # type: ignore[misc]
            yield from node.rules()

    def walk_rules(self, callback: Callable[[Rule], object]) -> None:
        for rule in list(self.rules()):
            callback(rule)


@dataclass(eq=False)
class Root(_Container):
    type: ClassVar[NodeType] = NodeType.ROOT

    source: bytes = b""
    file: str | None = None
    nodes: list[ChildNode] = field(default_factory=list)
    parent: None = field(default=None, repr=False)


@dataclass(eq=False)
class AtRule(_Container):
    type: ClassVar[NodeType] = NodeType.AT_RULE

    name: str
    nodes: list[ChildNode] = field(default_factory=list)
    parent: ParentNode | None = field(default=None, repr=False)
    line: int = 0


@dataclass(eq=False)
class Rule(_Container):
    """A style rule.

    ``selectors`` is replaced wholesale by the namespacing plugin;
    ``original_selectors`` keeps what was parsed so the renderer only
    touches rules that actually changed.
    """

    type: ClassVar[NodeType] = NodeType.RULE

    selectors: list[str]
    nodes: list[ChildNode] = field(default_factory=list)
    parent: ParentNode | None = field(default=None, repr=False)
    line: int = 0
    selector_range: tuple[int, int] | None = None
    separator: str = ", "
    original_selectors: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.original_selectors:
            self.original_selectors = tuple(self.selectors)

    @property
    def selector(self) -> str:
        return self.separator.join(self.selectors)

    @property
    def changed(self) -> bool:
        return tuple(self.selectors) != self.original_selectors
