"""Tests for the parse entry points and the dispatch loop."""

import time
from unittest.mock import Mock, call

import pytest

from lenient_markup_parser import (
    CallbackHandler,
    EventType,
    MarkupParseError,
    MarkupParser,
    ParserConfig,
    collect_events,
    parse,
)
from lenient_markup_parser.tokenization import Tokenizer


def _summary(markup, config=None):
    """Compact (kind, value) view of the event stream."""
    return [(event.type.name.lower(), event.value) for event in collect_events(markup, config)]


class TestEventStream:
    """Tests for the events produced by representative inputs."""

    def test_void_element(self):
        events = collect_events("<br>")
        assert [(e.type, e.value, e.is_void) for e in events] == [
            (EventType.START, "br", True),
            (EventType.END, "br", False),
        ]
        assert events[0].attributes == ()

    def test_stray_end_tag(self):
        """Test a stray end tag is dropped and the paragraph closed at flush."""
        assert _summary("<p>text</div>") == [
            ("start", "p"),
            ("text", "text"),
            ("end", "p"),
        ]

    def test_inline_block_correction(self):
        """Test span is force-closed before div opens."""
        assert _summary("<span><div>x</div></span>") == [
            ("start", "span"),
            ("end", "span"),
            ("start", "div"),
            ("text", "x"),
            ("end", "div"),
        ]

    def test_boolean_attribute(self):
        start = collect_events("<input disabled>")[0]
        assert [(a.name, a.value) for a in start.attributes] == [("disabled", "disabled")]

    def test_comment_passthrough(self):
        assert _summary("<!--hi-->") == [("comment", "hi")]
        assert _summary("<!-- hi -->") == [("comment", " hi ")]

    def test_trailing_lone_less_than(self):
        assert _summary("<b>x<") == [
            ("start", "b"),
            ("text", "x"),
            ("text", "<"),
            ("end", "b"),
        ]

    def test_adjacent_list_items(self):
        assert _summary("<ul><li>one<li>two</ul>") == [
            ("start", "ul"),
            ("start", "li"),
            ("text", "one"),
            ("end", "li"),
            ("start", "li"),
            ("text", "two"),
            ("end", "li"),
            ("end", "ul"),
        ]

    def test_unclosed_elements_flushed(self):
        assert _summary("<div><p>a") == [
            ("start", "div"),
            ("start", "p"),
            ("text", "a"),
            ("end", "p"),
            ("end", "div"),
        ]

    def test_script_content_is_raw(self):
        assert _summary("<script>if (a<b) {}</script><p>") == [
            ("start", "script"),
            ("text", "if (a<b) {}"),
            ("end", "script"),
            ("start", "p"),
            ("end", "p"),
        ]

    def test_empty_script_gives_empty_text(self):
        """Test empty raw text still produces an (inert) text event."""
        assert _summary("<style></style>") == [
            ("start", "style"),
            ("text", ""),
            ("end", "style"),
        ]

    def test_unclosed_script_takes_rest_of_input(self):
        assert _summary("<script>var a = '<b>';") == [
            ("start", "script"),
            ("text", "var a = '<b>';"),
            ("end", "script"),
        ]

    def test_empty_input(self):
        assert collect_events("") == []

    def test_xml_config(self):
        """Test xml configuration keeps case and skips HTML recovery."""
        assert _summary("<Span><Div/></Span>", ParserConfig.xml()) == [
            ("start", "Span"),
            ("start", "Div"),
            ("end", "Div"),
            ("end", "Span"),
        ]

    def test_unterminated_backslash_value_parses_quickly(self):
        """Test a quoted value of backslashes without a closing quote is text."""
        markup = '<a x="' + "\\" * 60
        start = time.perf_counter()
        events = collect_events(markup)
        assert time.perf_counter() - start < 1.0
        assert [(e.type, e.value) for e in events] == [(EventType.TEXT, markup)]

    def test_stack_never_negative(self):
        """Test end events never outnumber start events at any prefix."""
        events = collect_events("</a></b><i></i></i></p><p></div>x</p></p>")
        depth = 0
        for event in events:
            if event.type is EventType.START:
                depth += 1
            elif event.type is EventType.END:
                depth -= 1
            assert depth >= 0
        assert depth == 0


class TestHandlers:
    """Tests for handler slot resolution and dispatch."""

    def test_object_handler_receives_events_in_order(self):
        handler = Mock(spec=["start", "end", "text", "comment"])
        parse("<p>a<!--c--></p>", handler)
        assert handler.mock_calls == [
            call.start("p", [], False),
            call.text("a"),
            call.comment("c"),
            call.end("p"),
        ]

    def test_mapping_handler(self):
        names = []
        parse("<a><b></b></a>", {"end": names.append})
        assert names == ["b", "a"]

    def test_missing_slots_are_dropped(self):
        """Test a handler with only some slots receives only those events."""
        texts = []
        parse("<p>x<!--y--></p>", CallbackHandler(text=texts.append))
        assert texts == ["x"]

    def test_no_handler(self):
        parse("<p>nothing observed")

    def test_non_callable_slot_rejected(self):
        with pytest.raises(TypeError, match="must be callable"):
            parse("<p>", {"start": "not callable"})

    def test_handler_exception_propagates(self):
        def boom(name, attributes, is_void):
            raise RuntimeError("handler failed")

        with pytest.raises(RuntimeError, match="handler failed"):
            parse("<p>", CallbackHandler(start=boom))

    def test_markup_must_be_str(self):
        with pytest.raises(TypeError, match="markup must be str"):
            parse(b"<p>")


class TestMarkupParser:
    """Tests for the configured parser class."""

    def test_parser_is_reusable(self):
        parser = MarkupParser()
        first = parser.collect_events("<p>a")
        second = parser.collect_events("<p>a")
        assert first == second

    def test_default_config(self):
        assert MarkupParser().config == ParserConfig()

    def test_parse_error_propagates(self, monkeypatch):
        """Test a tokenizer stall surfaces as MarkupParseError."""
        def stalled(self):
            raise MarkupParseError(self.remainder, self.offset)

        monkeypatch.setattr(Tokenizer, "next_tokens", stalled)
        with pytest.raises(MarkupParseError) as exc_info:
            parse("<p>x")
        assert exc_info.value.remainder == "<p>x"
