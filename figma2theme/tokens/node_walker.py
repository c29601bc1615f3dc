"""
Node tree walker
Depth-first search of a Figma node tree for nodes of one type
"""

from typing import List, Type, TypeVar

from figma2theme.figma.nodes import (
    ComponentNode,
    FrameNode,
    InstanceNode,
    Node,
    RectangleNode,
    TextNode,
)

N = TypeVar("N")


def find_nodes_by_type(root: Node, node_type: Type[N]) -> List[N]:
    """
    Find every descendant of `root` that is a `node_type` node

    Nodes are returned in document order. Component instances are skipped
    along with their subtrees, since they may carry overridden values, and
    the search does not descend into a node that matches.

    Args:
        root: Node to search from (usually a page canvas)
        node_type: Node variant class to look for

    Returns:
        The matching nodes
    """
    found: List[N] = []
    for child in getattr(root, "children", ()):
        if isinstance(child, node_type):
            found.append(child)
        elif isinstance(child, InstanceNode):
            continue
        else:
            found.extend(find_nodes_by_type(child, node_type))
    return found


def find_rectangles(root: Node) -> List[RectangleNode]:
    return find_nodes_by_type(root, RectangleNode)


def find_texts(root: Node) -> List[TextNode]:
    return find_nodes_by_type(root, TextNode)


def find_components(root: Node) -> List[ComponentNode]:
    return find_nodes_by_type(root, ComponentNode)


def find_frames(root: Node) -> List[FrameNode]:
    return find_nodes_by_type(root, FrameNode)
