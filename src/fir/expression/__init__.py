"""Fir event expression language: lexer, AST, parser and translation."""

from fir.expression.nodes import Binding, EventExpression, Expression, Target
from fir.expression.parser import parse_expressions
from fir.expression.translate import (
    DEFAULT_ACTION,
    format_attribute,
    translate_event_expression,
    translate_render_expression,
)

__all__ = [
    "DEFAULT_ACTION",
    "Binding",
    "EventExpression",
    "Expression",
    "Target",
    "format_attribute",
    "parse_expressions",
    "translate_event_expression",
    "translate_render_expression",
]
