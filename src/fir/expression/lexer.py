"""Tokenizer for fir event expressions.

Splits ``create:ok.debounce,update->todo=>$fir.replace()`` into a flat
token list. Whitespace is dropped; any character that starts no token
is a syntax error.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from fir.errors import ExpressionSyntaxError


class TokenType(Enum):
    FIR_ACTION = "fir_action"  # $fir.replace()
    STATE = "state"  # :ok
    MODIFIER = "modifier"  # .debounce
    IDENT = "ident"  # create, todo-list
    TEMPLATE_ARROW = "->"
    ACTION_ARROW = "=>"
    COMMA = ","
    SEMICOLON = ";"
    LBRACKET = "["
    RBRACKET = "]"


@dataclass(frozen=True, slots=True)
class Token:
    type: TokenType
    value: str
    pos: int


# Order matters: the $fir call must win over "$" being unknown, and an
# identifier stops at "-" when it is the start of "->".
_TOKEN_RE = re.compile(
    r"""
    (?P<ws>\s+)
    |(?P<fir_action>\$fir\.[A-Za-z]+\(\))
    |(?P<state>:(?:ok|error|pending|done)(?![A-Za-z0-9_]))
    |(?P<modifier>\.[A-Za-z]+)
    |(?P<ident>[A-Za-z_](?:[A-Za-z0-9_]|-(?!>))*)
    |(?P<template_arrow>->)
    |(?P<action_arrow>=>)
    |(?P<punct>[,;\[\]])
    """,
    re.VERBOSE,
)

_PUNCT = {
    ",": TokenType.COMMA,
    ";": TokenType.SEMICOLON,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
}

_KINDS = {
    "fir_action": TokenType.FIR_ACTION,
    "state": TokenType.STATE,
    "modifier": TokenType.MODIFIER,
    "ident": TokenType.IDENT,
    "template_arrow": TokenType.TEMPLATE_ARROW,
    "action_arrow": TokenType.ACTION_ARROW,
}


def tokenize(text: str) -> list[Token]:
    """Turn an expression into tokens.

    Raises:
        ExpressionSyntaxError: On the first character that starts no token.
    """
    tokens: list[Token] = []
    pos = 0
    while pos < len(text):
        match = _TOKEN_RE.match(text, pos)
        if match is None:
            raise ExpressionSyntaxError("unexpected input", _fragment(text, pos))
        kind = match.lastgroup
        value = match.group()
        if kind == "punct":
            tokens.append(Token(_PUNCT[value], value, pos))
        elif kind != "ws":
            tokens.append(Token(_KINDS[kind], value, pos))
        pos = match.end()
    return tokens


def _fragment(text: str, pos: int) -> str:
    """The offending run of text, up to the next separator."""
    end = pos + 1
    while end < len(text) and not text[end].isspace() and text[end] not in ",;":
        end += 1
    return text[pos:end]
