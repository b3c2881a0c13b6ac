"""Lenient Markup Parser.

A forgiving, single-pass HTML/XML tokenizer that turns possibly malformed
markup into a well-defined stream of start, end, text and comment events.
Unclosed tags, misnested inline/block elements and stray closing tags are
repaired on the fly instead of failing the parse.

Progressive API Disclosure:
- Level 1: Simple functions - parse(), serialize(), build_tree()
- Level 2: Configured parser - MarkupParser with ParserConfig
- Level 3: Custom consumers - TreeBuilder transforms, LxmlTreeBuilder, own handlers
"""

__version__ = "0.1.0"
__author__ = "Lenient Markup Parser Team"

# Level 1: Simple functions
# Level 2: Configured parser
from .api import (
    CallbackHandler,
    EventType,
    LxmlTreeBuilder,
    MarkupEvent,
    MarkupParser,
    collect_events,
    parse,
    serialize,
    to_lxml,
)

# Configuration and errors
from .shared import (
    ConfigValidationError,
    LenientMarkupError,
    MarkupParseError,
    ParserConfig,
)
from .tokenization import Attribute

# Level 3: Tree building with transforms
from .tree import Element, TreeBuilder, build_tree

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: Simple functions
    "parse",
    "serialize",
    "collect_events",
    "build_tree",
    "to_lxml",

    # Level 2: Configured parser
    "MarkupParser",
    "ParserConfig",

    # Event types and handlers
    "Attribute",
    "CallbackHandler",
    "EventType",
    "MarkupEvent",

    # Level 3: Consumers
    "Element",
    "TreeBuilder",
    "LxmlTreeBuilder",

    # Errors
    "ConfigValidationError",
    "LenientMarkupError",
    "MarkupParseError",
]
