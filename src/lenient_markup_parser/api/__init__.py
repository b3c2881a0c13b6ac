"""Public API for lenient markup parsing.

Progressive API disclosure:
- Level 1: Simple functions - parse(), serialize(), collect_events()
- Level 2: Configured parser - MarkupParser with a ParserConfig
- Level 3: Custom consumers - any handler implementing the event sink contract
"""

from .adapters import LxmlTreeBuilder, to_lxml
from .events import (
    CallbackHandler,
    EventCollector,
    EventDispatcher,
    EventType,
    MarkupEvent,
)
from .parser import MarkupParser, collect_events, parse
from .serializer import MarkupSerializer, serialize

__all__ = [
    "CallbackHandler",
    "EventCollector",
    "EventDispatcher",
    "EventType",
    "LxmlTreeBuilder",
    "MarkupEvent",
    "MarkupParser",
    "MarkupSerializer",
    "collect_events",
    "parse",
    "serialize",
    "to_lxml",
]
