"""Recursive-descent parser for fir event expressions.

Grammar::

    Expressions := Expression (";" Expression)* ";"?
    Expression  := Binding ("," Binding)*
    Binding     := EventGroup ("," EventGroup)* Target?
    EventGroup  := EventExpr | "[" EventExpr ("," EventExpr)* "]" Modifier*
    EventExpr   := Ident State? Modifier*
    Target      := ("->" Ident)? ("=>" (Ident | FirAction))?

A comma-separated run of events folds into one binding until a target
is seen; the target closes the binding and a following comma starts the
next one::

    >>> [str(e) for e in parse_expressions("create:ok,delete:error=>replace;update->todo")]
    ['create:ok,delete:error=>replace', 'update->todo']

Parsing is all-or-nothing: any error raises ``ExpressionSyntaxError``
and no partial result is returned.
"""

from __future__ import annotations

from fir.errors import ExpressionSyntaxError
from fir.expression.lexer import Token, TokenType, tokenize
from fir.expression.nodes import Binding, EventExpression, Expression, Target


def parse_expressions(text: str) -> list[Expression]:
    """Parse ``text`` into its ``;``-separated expressions."""
    return _Parser(text).parse()


class _Parser:
    __slots__ = ("_pos", "_text", "_tokens")

    def __init__(self, text: str) -> None:
        self._text = text
        self._tokens = tokenize(text)
        self._pos = 0

    # -- helpers ---------------------------------------------------------

    def _peek(self) -> Token | None:
        if self._pos < len(self._tokens):
            return self._tokens[self._pos]
        return None

    def _at(self, kind: TokenType) -> bool:
        tok = self._peek()
        return tok is not None and tok.type is kind

    def _advance(self) -> Token:
        tok = self._tokens[self._pos]
        self._pos += 1
        return tok

    def _error(self, message: str) -> ExpressionSyntaxError:
        tok = self._peek()
        fragment = self._text[tok.pos :] if tok else self._text
        return ExpressionSyntaxError(message, fragment.strip())

    def _expect(self, kind: TokenType, what: str) -> Token:
        if not self._at(kind):
            tok = self._peek()
            found = f"{tok.value!r}" if tok else "end of input"
            raise self._error(f"expected {what}, found {found}")
        return self._advance()

    # -- grammar ---------------------------------------------------------

    def parse(self) -> list[Expression]:
        if not self._tokens:
            raise ExpressionSyntaxError("empty expression", self._text)
        expressions = [self._expression()]
        while self._at(TokenType.SEMICOLON):
            self._advance()
            if self._peek() is None:
                break
            expressions.append(self._expression())
        if self._peek() is not None:
            raise self._error(f"unexpected {self._peek().value!r}")
        return expressions

    def _expression(self) -> Expression:
        bindings = [self._binding()]
        while bindings[-1].target is not None and self._at(TokenType.COMMA):
            self._advance()
            bindings.append(self._binding())
        return Expression(tuple(bindings))

    def _binding(self) -> Binding:
        events = self._event_group()
        while self._at(TokenType.COMMA):
            self._advance()
            events.extend(self._event_group())
        target = None
        if self._at(TokenType.TEMPLATE_ARROW) or self._at(TokenType.ACTION_ARROW):
            target = self._target()
        return Binding(tuple(events), target)

    def _event_group(self) -> list[EventExpression]:
        if not self._at(TokenType.LBRACKET):
            return [self._event()]
        self._advance()
        members = [self._event()]
        while self._at(TokenType.COMMA):
            self._advance()
            members.append(self._event())
        self._expect(TokenType.RBRACKET, "']'")
        shared = self._modifiers()
        if not shared:
            return members
        return [
            EventExpression(m.name, m.state, _union(m.modifiers, shared))
            for m in members
        ]

    def _event(self) -> EventExpression:
        name = self._expect(TokenType.IDENT, "event name").value
        state = None
        if self._at(TokenType.STATE):
            state = self._advance().value[1:]
            if self._at(TokenType.STATE):
                raise self._error("event has more than one state")
        return EventExpression(name, state, self._modifiers())

    def _modifiers(self) -> tuple[str, ...]:
        mods: list[str] = []
        while self._at(TokenType.MODIFIER):
            mods.append(self._advance().value[1:])
        return tuple(mods)

    def _target(self) -> Target:
        template = action = None
        if self._at(TokenType.TEMPLATE_ARROW):
            self._advance()
            template = self._expect(TokenType.IDENT, "template name").value
        if self._at(TokenType.ACTION_ARROW):
            self._advance()
            if self._at(TokenType.FIR_ACTION):
                action = self._advance().value
            else:
                action = self._expect(TokenType.IDENT, "action name").value
        return Target(template, action)


def _union(first: tuple[str, ...], second: tuple[str, ...]) -> tuple[str, ...]:
    return first + tuple(m for m in second if m not in first)
