"""Single-pass lenient markup tokenizer.

The tokenizer walks an immutable input string with an advancing cursor and
resolves one token at a time: a comment, an end tag, a start tag or a run of
text. Inside a raw-text element (``script``, ``style``) everything up to the
matching closing tag is a single text token.

Nothing the tokenizer sees is an error. Anything that does not form a
complete comment or tag is treated as text, so every step advances the
cursor. The one fatal condition, a step that does not advance, is raised as
``MarkupParseError`` and signals a defect rather than bad input.
"""

import re
from dataclasses import dataclass, field
from enum import Enum, auto
from functools import lru_cache
from typing import Callable, Iterator, List, Optional, Pattern

from lenient_markup_parser.shared import MarkupParseError, ParserConfig

from .attributes import ATTRIBUTE_NAME, Attribute, parse_attributes

COMMENT_OPEN = "<!--"
COMMENT_CLOSE = "-->"

TAG_NAME = r"[-A-Za-z0-9_]+"

START_TAG_PATTERN = re.compile(
    rf"<({TAG_NAME})"
    rf"((?:\s+{ATTRIBUTE_NAME}"
    r"""(?:\s*=\s*(?:"(?:[^"\\]|\\.)*"|'(?:[^'\\]|\\.)*'|[^>\s]+))?)*)"""
    r"\s*(/?)>",
    re.DOTALL,
)

END_TAG_PATTERN = re.compile(rf"</({TAG_NAME})[^>]*>")

# Comment and CDATA wrappers unwrapped inside raw-text content
RAW_TEXT_WRAPPER_PATTERN = re.compile(r"<!--(.*?)-->|<!\[CDATA\[(.*?)]]>", re.DOTALL)


class TokenType(Enum):
    """Lexical token types produced by the tokenizer."""

    COMMENT = auto()     # <!-- ... -->
    END_TAG = auto()     # </name ...>
    START_TAG = auto()   # <name attrs> or <name attrs/>
    TEXT = auto()        # Character run, or raw-text element content


@dataclass
class Token:
    """A single resolved token.

    ``value`` is the tag name for tag tokens and the content for text and
    comment tokens. ``start`` and ``end`` delimit the source text the token
    was resolved from; a synthetic token (the end tag closing a raw-text
    element) covers no source text of its own.
    """

    type: TokenType
    value: str
    start: int
    end: int
    attributes: List[Attribute] = field(default_factory=list)
    self_closing: bool = False
    synthetic: bool = False

    @property
    def source_length(self) -> int:
        """Number of input characters this token consumed."""
        return self.end - self.start


@lru_cache(maxsize=64)
def _raw_text_end_pattern(name: str) -> Pattern[str]:
    return re.compile(rf"(.*?)</{re.escape(name)}[^>]*>", re.DOTALL | re.IGNORECASE)


def unwrap_raw_text(content: str) -> str:
    """Replace comment and CDATA wrappers with their inner content."""
    return RAW_TEXT_WRAPPER_PATTERN.sub(
        lambda match: match.group(1) if match.group(1) is not None else match.group(2),
        content,
    )


class Tokenizer:
    """Cursor-based tokenizer over a complete in-memory buffer.

    The tokenizer needs to know the innermost open element to decide whether
    it is inside raw text. That state belongs to the tag balancer, so it is
    supplied as a callable rather than tracked here.

    Iterating a tokenizer yields tokens until the buffer is exhausted.
    """

    def __init__(
        self,
        markup: str,
        config: Optional[ParserConfig] = None,
        current_element: Optional[Callable[[], Optional[str]]] = None
    ) -> None:
        """Initialize the tokenizer.

        Args:
            markup: Complete input text
            config: Parser configuration (HTML defaults if omitted)
            current_element: Returns the innermost open element name, or None
        """
        self.markup = markup
        self.config = config or ParserConfig()
        self.offset = 0
        self._current_element = current_element or (lambda: None)

    @property
    def remainder(self) -> str:
        """The unconsumed part of the input."""
        return self.markup[self.offset:]

    @property
    def exhausted(self) -> bool:
        """Whether the whole input has been consumed."""
        return self.offset >= len(self.markup)

    def __iter__(self) -> Iterator[Token]:
        while not self.exhausted:
            yield from self.next_tokens()

    def next_tokens(self) -> List[Token]:
        """Resolve the next step's tokens and advance the cursor.

        Every step yields exactly one token, except a raw-text step which
        yields its content followed by the synthetic end tag closing it.

        Raises:
            MarkupParseError: If the step did not advance the cursor
        """
        start = self.offset
        current = self._current_element()
        if current is not None and current in self.config.raw_text_elements:
            tokens = self._raw_text(current)
        else:
            tokens = [
                self._comment()
                or self._end_tag()
                or self._start_tag()
                or self._text()
            ]

        end = max(token.end for token in tokens)
        if end <= start:
            raise MarkupParseError(self.markup[start:], start)
        self.offset = end
        return tokens

    def _raw_text(self, name: str) -> List[Token]:
        match = _raw_text_end_pattern(name).match(self.markup, self.offset)
        if match:
            content, end = match.group(1), match.end()
        else:
            # unterminated: the rest of the input belongs to the element
            content, end = self.markup[self.offset:], len(self.markup)
        return [
            Token(TokenType.TEXT, unwrap_raw_text(content), self.offset, end),
            Token(TokenType.END_TAG, name, end, end, synthetic=True),
        ]

    def _comment(self) -> Optional[Token]:
        if not self.markup.startswith(COMMENT_OPEN, self.offset):
            return None
        body_start = self.offset + len(COMMENT_OPEN)
        close = self.markup.find(COMMENT_CLOSE, body_start)
        if close < 0:
            return None
        return Token(
            TokenType.COMMENT,
            self.markup[body_start:close],
            self.offset,
            close + len(COMMENT_CLOSE),
        )

    def _end_tag(self) -> Optional[Token]:
        if not self.markup.startswith("</", self.offset):
            return None
        match = END_TAG_PATTERN.match(self.markup, self.offset)
        if not match:
            return None
        return Token(
            TokenType.END_TAG,
            self._tag_name(match.group(1)),
            self.offset,
            match.end(),
        )

    def _start_tag(self) -> Optional[Token]:
        if not self.markup.startswith("<", self.offset):
            return None
        match = START_TAG_PATTERN.match(self.markup, self.offset)
        if not match:
            return None
        return Token(
            TokenType.START_TAG,
            self._tag_name(match.group(1)),
            self.offset,
            match.end(),
            attributes=parse_attributes(match.group(2), self.config.fill_attributes),
            self_closing=bool(match.group(3)),
        )

    def _text(self) -> Token:
        # A '<' that did not open a comment or tag is literal text
        search_from = self.offset + 1 if self.markup.startswith("<", self.offset) else self.offset
        next_open = self.markup.find("<", search_from)
        end = len(self.markup) if next_open < 0 else next_open
        return Token(TokenType.TEXT, self.markup[self.offset:end], self.offset, end)

    def _tag_name(self, name: str) -> str:
        return name.lower() if self.config.lowercase_tag_names else name


def tokenize(markup: str, config: Optional[ParserConfig] = None) -> List[Token]:
    """Tokenize ``markup`` without tracking open elements.

    Without a balancer there is never an open element, so raw-text content is
    tokenized like any other markup. Intended for inspection and debugging;
    ``parse`` is the entry point for real use.
    """
    return list(Tokenizer(markup, config))
