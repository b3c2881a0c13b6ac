"""Tokenization engine for lenient markup parsing.

This package turns a complete markup buffer into lexical tokens and balances
the resulting tags against an open-element stack.

Key Components:
    Tokenizer: Cursor-based scanner resolving one token per step
    Token: A resolved comment, start tag, end tag or text run
    TokenType: Enumeration of token kinds
    Attribute: A start tag attribute with its escaped value
    TagBalancer: Open-element stack machine synthesizing end events
"""

from .attributes import (
    Attribute,
    escape_value,
    parse_attributes,
)
from .balancer import TagBalancer
from .tokenizer import (
    Token,
    Tokenizer,
    TokenType,
    tokenize,
    unwrap_raw_text,
)

__all__ = [
    "Attribute",
    "TagBalancer",
    "Token",
    "TokenType",
    "Tokenizer",
    "escape_value",
    "parse_attributes",
    "tokenize",
    "unwrap_raw_text",
]
