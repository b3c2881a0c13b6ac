"""Tree building for lenient markup parsing.

This module turns the parser's event stream into a navigable node tree, with
optional transform hooks applied to every node as it is built.
"""

from .builder import (
    CommentNode,
    Element,
    Fragment,
    Node,
    TextNode,
    TreeBuilder,
    build_tree,
)

__all__ = [
    "CommentNode",
    "Element",
    "Fragment",
    "Node",
    "TextNode",
    "TreeBuilder",
    "build_tree",
]
