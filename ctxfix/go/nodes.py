"""Small helpers over tree-sitter Go nodes."""

from collections.abc import Iterator
from typing import Any


def get_node_text(node: Any) -> str:
    """Extract text from a tree-sitter node."""
    if node is None:
        return ""
    return node.text.decode("utf-8", errors="ignore")


def find_child_by_type(node: Any, child_type: str) -> Any | None:
    """Find first child of given type."""
    if node is None:
        return None
    for child in node.children:
        if child.type == child_type:
            return child
    return None


def find_children_by_type(node: Any, child_type: str) -> list[Any]:
    """Find all children of given type."""
    if node is None:
        return []
    return [child for child in node.children if child.type == child_type]


def named_children(node: Any) -> list[Any]:
    """Named children without comments."""
    if node is None:
        return []
    return [child for child in node.named_children if child.type != "comment"]


def span(node: Any) -> tuple[int, int]:
    """Byte span of a node."""
    return (node.start_byte, node.end_byte)


def line_of(node: Any) -> int:
    """1-based line number of a node."""
    return node.start_point[0] + 1


def iter_nodes(node: Any) -> Iterator[Any]:
    """Pre-order walk over a subtree, in source order."""
    if node is None:
        return
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))
