"""Node tree construction from the parser's event stream.

``TreeBuilder`` is an event handler that assembles a lightweight node tree
under a root ``Fragment``. Each node can be passed through a transform hook
as it is created or completed; the hook may return a replacement node, which
is what ends up in the tree. This makes the builder usable for rewriting
documents, e.g. replacing styled ``span`` elements with ``strong``.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Union

from lenient_markup_parser.api.parser import MarkupParser
from lenient_markup_parser.shared import ParserConfig, get_logger
from lenient_markup_parser.tokenization import Attribute, escape_value

FRAGMENT_TAG = "#fragment"


@dataclass(eq=False)
class TextNode:
    """A run of character data."""

    text: str
    parent: Optional["Element"] = field(default=None, repr=False)

    @property
    def text_content(self) -> str:
        return self.text

    def to_html(self) -> str:
        return self.text

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "text", "text": self.text}


@dataclass(eq=False)
class CommentNode:
    """A comment; ``text`` excludes the ``<!--`` and ``-->`` markers."""

    text: str
    parent: Optional["Element"] = field(default=None, repr=False)

    @property
    def text_content(self) -> str:
        return ""

    def to_html(self) -> str:
        return f"<!--{self.text}-->"

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "comment", "text": self.text}


@dataclass(eq=False)
class Element:
    """An element with attributes and child nodes.

    Attribute names are unique; when a tag repeats an attribute the last
    occurrence wins.
    """

    tag: str
    attributes: Dict[str, str] = field(default_factory=dict)
    children: List["Node"] = field(default_factory=list)
    is_void: bool = False
    parent: Optional["Element"] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        """Validate element values and establish parent-child relationships."""
        if not self.tag:
            raise ValueError("Element tag cannot be empty")
        for child in self.children:
            child.parent = self

    @property
    def text_content(self) -> str:
        """Concatenated text of all descendant text nodes."""
        return "".join(child.text_content for child in self.children)

    def add_child(self, child: "Node") -> None:
        """Append a child node and establish parent relationship."""
        if not isinstance(child, (Element, TextNode, CommentNode)):
            raise TypeError("Child must be an Element, TextNode or CommentNode")
        child.parent = self
        self.children.append(child)

    def remove_child(self, child: "Node") -> bool:
        """Remove a child node and clear parent relationship."""
        for index, existing in enumerate(self.children):
            if existing is child:
                del self.children[index]
                child.parent = None
                return True
        return False

    @property
    def elements(self) -> List["Element"]:
        """Direct element children, skipping text and comments."""
        return [child for child in self.children if isinstance(child, Element)]

    def find(self, tag: str) -> Optional["Element"]:
        """Find the first descendant element with matching tag name, in document order."""
        for child in self.elements:
            if child.tag == tag:
                return child
            found = child.find(tag)
            if found is not None:
                return found
        return None

    def find_all(self, tag: str) -> List["Element"]:
        """Find all descendant elements with matching tag name, in document order."""
        results = []
        for child in self.elements:
            if child.tag == tag:
                results.append(child)
            results.extend(child.find_all(tag))
        return results

    def get_attribute(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Get attribute value with optional default."""
        return self.attributes.get(name, default)

    def set_attribute(self, name: str, value: str) -> None:
        """Set attribute value."""
        self.attributes[name] = value

    def has_attribute(self, name: str) -> bool:
        """Check if element has specific attribute."""
        return name in self.attributes

    def to_html(self) -> str:
        """Render the element and its descendants as well-formed markup."""
        attributes = "".join(
            f' {name}="{escape_value(value)}"' for name, value in self.attributes.items()
        )
        if self.is_void:
            return f"<{self.tag}{attributes}/>"
        inner = "".join(child.to_html() for child in self.children)
        return f"<{self.tag}{attributes}>{inner}</{self.tag}>"

    def to_dict(self) -> Dict[str, Any]:
        """Convert element to dictionary representation."""
        result: Dict[str, Any] = {"type": "element", "tag": self.tag}
        if self.attributes:
            result["attributes"] = dict(self.attributes)
        if self.children:
            result["children"] = [child.to_dict() for child in self.children]
        return result


@dataclass(eq=False)
class Fragment(Element):
    """Root container of a built tree; renders as its children only."""

    tag: str = FRAGMENT_TAG

    def to_html(self) -> str:
        return "".join(child.to_html() for child in self.children)


Node = Union[Element, TextNode, CommentNode]

# A transform receives a node and returns its replacement, or None to keep it
Transform = Callable[[Any], Optional[Any]]


class TreeBuilder:
    """Event handler building a node tree, with optional transform hooks.

    The builder keeps its own node stack, seeded with the root fragment:

    - start: create an ``Element``, run ``on_start``, push the result
    - end: pop the current node, run ``on_end``, append the result to the new top
    - text / comment: create a leaf, run ``on_text`` / ``on_comment``, append it

    Empty text runs are not added to the tree.
    """

    def __init__(
        self,
        on_start: Optional[Transform] = None,
        on_end: Optional[Transform] = None,
        on_text: Optional[Transform] = None,
        on_comment: Optional[Transform] = None,
        root: Optional[Element] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        """Initialize the tree builder.

        Args:
            on_start: Transform for elements as they open; must return an Element
            on_end: Transform for elements as they close
            on_text: Transform for text nodes
            on_comment: Transform for comment nodes
            root: Container to build into (a new Fragment if omitted)
            correlation_id: Optional correlation ID for request tracking
        """
        self.on_start = on_start
        self.on_end = on_end
        self.on_text = on_text
        self.on_comment = on_comment
        self.root = root if root is not None else Fragment()
        self.logger = get_logger(__name__, correlation_id, "tree_builder")
        self._stack: List[Element] = [self.root]

    @property
    def current(self) -> Element:
        """The element new nodes are appended to."""
        return self._stack[-1]

    def start(self, name: str, attributes: List[Attribute], is_void: bool) -> None:
        element = Element(
            tag=name,
            attributes={attribute.name: attribute.value for attribute in attributes},
            is_void=is_void,
        )
        result = self._apply(self.on_start, element)
        if not isinstance(result, Element):
            raise TypeError(
                f"on_start transform must return an Element, got {type(result).__name__}"
            )
        self._stack.append(result)

    def end(self, name: str) -> None:
        if len(self._stack) < 2:
            # Only reachable when events are fed by hand
            self.logger.warning("End event without open element", extra={"tag": name})
            return
        node = self._stack.pop()
        self.current.add_child(self._apply(self.on_end, node))

    def text(self, content: str) -> None:
        if not content:
            return
        self.current.add_child(self._apply(self.on_text, TextNode(content)))

    def comment(self, content: str) -> None:
        self.current.add_child(self._apply(self.on_comment, CommentNode(content)))

    @staticmethod
    def _apply(transform: Optional[Transform], node: Any) -> Any:
        if transform is None:
            return node
        replacement = transform(node)
        return node if replacement is None else replacement

    def build(self, markup: str, config: Optional[ParserConfig] = None) -> Element:
        """Parse ``markup`` into this builder and return the root container."""
        MarkupParser(config).parse(markup, self)
        return self.root


def build_tree(
    markup: str,
    config: Optional[ParserConfig] = None,
    on_start: Optional[Transform] = None,
    on_end: Optional[Transform] = None,
    on_text: Optional[Transform] = None,
    on_comment: Optional[Transform] = None
) -> Element:
    """Parse markup into a node tree rooted at a ``Fragment``.

    Examples:
        >>> root = build_tree('<ul><li>one<li>two</ul>')
        >>> [li.text_content for li in root.find_all('li')]
        ['one', 'two']
    """
    builder = TreeBuilder(
        on_start=on_start,
        on_end=on_end,
        on_text=on_text,
        on_comment=on_comment,
        correlation_id=config.correlation_id if config else None,
    )
    return builder.build(markup, config)
