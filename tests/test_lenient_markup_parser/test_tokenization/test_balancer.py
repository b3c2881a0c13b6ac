"""Tests for the open-element stack machine."""

from unittest.mock import Mock, call

import pytest

from lenient_markup_parser.shared import ParserConfig
from lenient_markup_parser.tokenization import Attribute, TagBalancer


@pytest.fixture
def dispatcher():
    return Mock(spec=["start", "end", "text", "comment"])


@pytest.fixture
def balancer(dispatcher):
    return TagBalancer(dispatcher)


class TestStartTags:
    """Tests for start tag resolution."""

    def test_non_void_element_is_pushed(self, balancer, dispatcher):
        balancer.open("div")
        assert balancer.open_elements == ("div",)
        assert balancer.current == "div"
        assert dispatcher.mock_calls == [call.start("div", [], False)]

    def test_void_element_started_and_ended(self, balancer, dispatcher):
        """Test void elements get start then end and are never pushed."""
        balancer.open("br")
        assert balancer.depth == 0
        assert dispatcher.mock_calls == [call.start("br", [], True), call.end("br")]

    def test_self_closing_element_is_void(self, balancer, dispatcher):
        balancer.open("widget", self_closing=True)
        assert balancer.depth == 0
        assert dispatcher.mock_calls == [call.start("widget", [], True), call.end("widget")]

    def test_attributes_forwarded(self, balancer, dispatcher):
        attributes = [Attribute.create("id", "x")]
        balancer.open("div", attributes)
        dispatcher.start.assert_called_once_with("div", attributes, False)

    def test_block_closes_open_inline_elements(self, balancer, dispatcher):
        """Test a block element force-closes every inline element above it."""
        balancer.open("section")
        balancer.open("span")
        balancer.open("b")
        dispatcher.reset_mock()

        balancer.open("div")

        assert dispatcher.mock_calls == [
            call.end("b"),
            call.end("span"),
            call.start("div", [], False),
        ]
        assert balancer.open_elements == ("section", "div")

    def test_inline_inside_inline_allowed(self, balancer, dispatcher):
        balancer.open("span")
        balancer.open("b")
        assert balancer.open_elements == ("span", "b")

    def test_close_self_element_closes_previous(self, balancer, dispatcher):
        """Test reopening a close-self element closes the previous one."""
        balancer.open("ul")
        balancer.open("li")
        dispatcher.reset_mock()

        balancer.open("li")

        assert dispatcher.mock_calls == [call.end("li"), call.start("li", [], False)]
        assert balancer.open_elements == ("ul", "li")

    def test_close_self_only_when_on_top(self, balancer):
        """Test a nested list item does not close an outer one."""
        balancer.open("li")
        balancer.open("ul")
        balancer.open("li")
        assert balancer.open_elements == ("li", "ul", "li")


class TestEndTags:
    """Tests for end tag resolution."""

    def test_matching_end_tag_pops(self, balancer, dispatcher):
        balancer.open("p")
        balancer.close("p")
        assert balancer.depth == 0
        assert dispatcher.mock_calls[-1] == call.end("p")

    def test_end_tag_closes_everything_above_match(self, balancer, dispatcher):
        """Test inner elements are closed top to bottom before the match."""
        balancer.open("div")
        balancer.open("section")
        balancer.open("span")
        dispatcher.reset_mock()

        balancer.close("div")

        assert dispatcher.mock_calls == [
            call.end("span"),
            call.end("section"),
            call.end("div"),
        ]
        assert balancer.depth == 0

    def test_nearest_match_wins(self, balancer):
        balancer.open("div")
        balancer.open("div")
        balancer.close("div")
        assert balancer.open_elements == ("div",)

    def test_stray_end_tag_ignored(self, balancer, dispatcher):
        """Test an end tag without open match is dropped silently."""
        balancer.open("p")
        dispatcher.reset_mock()

        balancer.close("div")

        assert dispatcher.mock_calls == []
        assert balancer.open_elements == ("p",)

    def test_end_tag_without_name_flushes(self, balancer, dispatcher):
        balancer.open("a")
        balancer.open("b")
        dispatcher.reset_mock()

        balancer.close(None)

        assert dispatcher.mock_calls == [call.end("b"), call.end("a")]
        assert balancer.flushed


class TestFlush:
    """Tests for the terminal flush."""

    def test_flush_closes_all_top_to_bottom(self, balancer, dispatcher):
        for name in ("html", "body", "p"):
            balancer.open(name)
        dispatcher.reset_mock()

        balancer.flush()

        assert dispatcher.mock_calls == [call.end("p"), call.end("body"), call.end("html")]
        assert balancer.depth == 0
        assert balancer.flushed

    def test_flush_on_empty_stack(self, balancer, dispatcher):
        balancer.flush()
        assert dispatcher.mock_calls == []
        assert balancer.flushed


class TestStackInvariant:
    """Tests for the stack/open-event bookkeeping."""

    def test_depth_matches_unclosed_starts_during_callbacks(self):
        """Test stack depth equals unclosed start events whenever a handler runs."""
        observed = []
        balancer = None
        dispatcher = Mock()
        unclosed = []

        def on_start(name, attributes, is_void):
            unclosed.append(name)
            observed.append((balancer.depth, len(unclosed) - (1 if is_void else 0)))

        def on_end(name):
            unclosed.pop()
            observed.append((balancer.depth, len(unclosed)))

        dispatcher.start.side_effect = on_start
        dispatcher.end.side_effect = on_end
        balancer = TagBalancer(dispatcher)

        balancer.open("div")
        balancer.open("span")
        balancer.open("img")
        balancer.open("p")
        balancer.close("div")

        for depth, expected in observed:
            assert depth == expected

    def test_xml_config_disables_recovery_rules(self, dispatcher):
        """Test xml configuration only balances tags."""
        balancer = TagBalancer(dispatcher, ParserConfig.xml())
        balancer.open("span")
        balancer.open("div")
        balancer.open("br")
        assert balancer.open_elements == ("span", "div", "br")
