"""Core parser API for lenient markup parsing.

This module ties the tokenizer, the tag balancer and the event dispatcher
into the single dispatch loop behind ``parse``. Every call owns its own
cursor and open-element stack; nothing is shared between calls except the
read-only classification tables.
"""

import logging
import time
from typing import Any, List, Optional

from lenient_markup_parser.shared import ParserConfig, get_logger
from lenient_markup_parser.tokenization import TagBalancer, Tokenizer, TokenType

from .events import EventCollector, EventDispatcher, MarkupEvent

# Constants for API operations
PREVIEW_LENGTH = 100  # Max length for content preview in logs
MS_PER_SECOND = 1000  # Milliseconds per second conversion


class MarkupParser:
    """Reusable, configured markup parser.

    A parser instance holds only its configuration, so one instance may run
    any number of parses, including concurrently from different threads.
    """

    def __init__(self, config: Optional[ParserConfig] = None) -> None:
        """Initialize the parser.

        Args:
            config: Parser configuration (HTML defaults if omitted)
        """
        self.config = config or ParserConfig()
        self.logger = get_logger(__name__, self.config.correlation_id, "markup_parser")

    def parse(self, markup: str, handler: Any = None) -> None:
        """Parse ``markup``, delivering structural events to ``handler``.

        Args:
            markup: Complete input text
            handler: Object or mapping with optional ``start``, ``end``,
                ``text`` and ``comment`` callables

        Raises:
            TypeError: If ``markup`` is not a string
            MarkupParseError: If the tokenizer failed to make progress
        """
        if not isinstance(markup, str):
            raise TypeError(f"markup must be str, not {type(markup).__name__}")

        start_time = time.time()
        if self.logger.is_enabled_for(logging.DEBUG):
            self.logger.debug(
                "Starting parse",
                extra={
                    "content_length": len(markup),
                    "preview": (
                        markup[:PREVIEW_LENGTH] + "..."
                        if len(markup) > PREVIEW_LENGTH else markup
                    ),
                },
            )

        dispatcher = EventDispatcher(handler)
        balancer = TagBalancer(dispatcher, self.config)
        tokenizer = Tokenizer(markup, self.config, lambda: balancer.current)

        for token in tokenizer:
            if token.type is TokenType.START_TAG:
                balancer.open(token.value, token.attributes, token.self_closing)
            elif token.type is TokenType.END_TAG:
                balancer.close(token.value)
            elif token.type is TokenType.TEXT:
                dispatcher.text(token.value)
            else:
                dispatcher.comment(token.value)

            if balancer.flushed:
                break

        if not balancer.flushed:
            balancer.flush()

        self.logger.debug(
            "Parse completed",
            extra={
                "characters_processed": tokenizer.offset,
                "events_dispatched": dispatcher.event_count,
                "processing_time_ms": (time.time() - start_time) * MS_PER_SECOND,
            },
        )

    def collect_events(self, markup: str) -> List[MarkupEvent]:
        """Parse ``markup`` and return its events as a list."""
        collector = EventCollector()
        self.parse(markup, collector)
        return collector.events


def parse(
    markup: str,
    handler: Any = None,
    config: Optional[ParserConfig] = None
) -> None:
    """Parse markup and deliver structural events to a handler.

    This is the primary entry point. Events are delivered synchronously and
    in document order; end events synthesized by recovery are delivered at
    the point they are generated.

    Args:
        markup: Complete input text
        handler: Object or mapping with optional ``start(name, attributes,
            is_void)``, ``end(name)``, ``text(content)`` and
            ``comment(content)`` callables
        config: Optional parser configuration

    Examples:
        >>> names = []
        >>> parse('<p>one<p>two', {"start": lambda n, a, v: names.append(n)})
        >>> names
        ['p', 'p']
    """
    MarkupParser(config).parse(markup, handler)


def collect_events(markup: str, config: Optional[ParserConfig] = None) -> List[MarkupEvent]:
    """Parse markup and return the full event sequence.

    Examples:
        >>> [event.type.name for event in collect_events('<br>')]
        ['START', 'END']
    """
    return MarkupParser(config).collect_events(markup)
