"""Tests for fir.expression — lexer, parser and AST shape.

Covers:

- Single events with state and modifiers
- Binding folding and target closing
- Multiple ;-separated expressions
- Bracket groups
- $fir.X() actions
- Rejected input (no partial results)
"""

import pytest

from fir.errors import ExpressionSyntaxError
from fir.expression import Binding, EventExpression, Target, parse_expressions
from fir.expression.lexer import TokenType, tokenize


# ---------------------------------------------------------------------------
# Lexer
# ---------------------------------------------------------------------------


class TestTokenize:
    def test_arrow_ends_identifier(self):
        tokens = tokenize("create->todo")
        assert [t.type for t in tokens] == [
            TokenType.IDENT,
            TokenType.TEMPLATE_ARROW,
            TokenType.IDENT,
        ]
        assert tokens[0].value == "create"

    def test_hyphenated_identifier(self):
        tokens = tokenize("mutation-observer:ok")
        assert tokens[0].value == "mutation-observer"
        assert tokens[1].type is TokenType.STATE

    def test_whitespace_dropped(self):
        assert [t.value for t in tokenize(" a , b ")] == ["a", ",", "b"]

    def test_fir_action(self):
        tokens = tokenize("x=>$fir.appendEl()")
        assert tokens[-1].type is TokenType.FIR_ACTION
        assert tokens[-1].value == "$fir.appendEl()"

    def test_unknown_character(self):
        with pytest.raises(ExpressionSyntaxError) as exc_info:
            tokenize("cre@te")
        assert exc_info.value.fragment == "@te"


# ---------------------------------------------------------------------------
# Valid expressions
# ---------------------------------------------------------------------------


class TestParseSingle:
    def test_bare_event(self):
        [expr] = parse_expressions("create")
        assert expr.bindings == (Binding((EventExpression("create"),)),)

    def test_event_with_template(self):
        [expr] = parse_expressions("create->todo")
        assert expr.bindings[0].target == Target(template="todo")

    def test_state_and_modifiers(self):
        [expr] = parse_expressions("create:ok.debounce.prevent")
        event = expr.bindings[0].events[0]
        assert event.state == "ok"
        assert event.modifiers == ("debounce", "prevent")

    def test_modifier_before_target(self):
        [expr] = parse_expressions("create.nohtml->todo")
        binding = expr.bindings[0]
        assert binding.events[0].modifiers == ("nohtml",)
        assert binding.target == Target(template="todo")

    def test_missing_state_reads_as_ok(self):
        [expr] = parse_expressions("create")
        assert expr.events[0].event_id == "create:ok"

    def test_underscores_and_digits(self):
        [expr] = parse_expressions("event_1->templateA=>action123_B")
        binding = expr.bindings[0]
        assert binding.events[0].name == "event_1"
        assert binding.target == Target("templateA", "action123_B")

    def test_hyphenated_names(self):
        [expr] = parse_expressions("mutation-observer:ok->template-name=>action-handler")
        binding = expr.bindings[0]
        assert binding.events[0] == EventExpression("mutation-observer", "ok")
        assert binding.target == Target("template-name", "action-handler")

    def test_fir_action_target(self):
        [expr] = parse_expressions("create => $fir.X()")
        assert expr.bindings[0].target == Target(action="$fir.X()")


class TestBindingFolding:
    def test_comma_run_is_one_binding(self):
        [expr] = parse_expressions("event1:ok, event2.mod")
        assert len(expr.bindings) == 1
        assert [e.name for e in expr.bindings[0].events] == ["event1", "event2"]

    def test_shared_target(self):
        [expr] = parse_expressions("create,delete=>replace")
        [binding] = expr.bindings
        assert len(binding.events) == 2
        assert binding.target == Target(action="replace")

    def test_target_closes_binding(self):
        [expr] = parse_expressions("create:ok->todo,delete:error=>replace")
        assert len(expr.bindings) == 2
        assert expr.bindings[0].target == Target(template="todo")
        assert expr.bindings[1].events == (EventExpression("delete", "error"),)
        assert expr.bindings[1].target == Target(action="replace")

    def test_trailing_binding_without_target(self):
        [expr] = parse_expressions("a->x,b")
        assert expr.bindings[1].target is None


class TestMultipleExpressions:
    def test_replace_then_append(self):
        first, second = parse_expressions(
            "create:ok,delete:error=>replace;create:ok->todo=>append"
        )
        assert first.bindings[-1].target.action == "replace"
        assert [e.event_id for e in first.events] == ["create:ok", "delete:error"]
        [binding] = second.bindings
        assert binding.target.template == "todo"
        assert binding.target.action == "append"

    def test_three_bindings_over_two_expressions(self):
        first, second = parse_expressions(
            "create:ok->todo,delete:error=>replace;update:pending->done=>archive"
        )
        assert len(first.bindings) == 2
        assert second.bindings[0].events[0] == EventExpression("update", "pending")
        assert second.bindings[0].target == Target("done", "archive")

    def test_trailing_semicolon(self):
        assert len(parse_expressions("create->todo;")) == 1

    def test_mixed_fir_actions(self):
        first, second = parse_expressions("load:ok -> data, save => $fir.Z(); submit => $fir.A()")
        assert [b.target for b in first.bindings] == [
            Target(template="data"),
            Target(action="$fir.Z()"),
        ]
        assert second.bindings[0].target == Target(action="$fir.A()")


class TestBracketGroups:
    def test_group_shares_target(self):
        [expr] = parse_expressions("[create:ok,update:error]->todo")
        [binding] = expr.bindings
        assert [e.event_id for e in binding.events] == ["create:ok", "update:error"]
        assert binding.target == Target(template="todo")

    def test_modifiers_after_group_apply_to_members(self):
        [expr] = parse_expressions("[a:ok.x,b:ok].debounce")
        events = expr.bindings[0].events
        assert events[0].modifiers == ("x", "debounce")
        assert events[1].modifiers == ("debounce",)

    def test_unclosed_group(self):
        with pytest.raises(ExpressionSyntaxError):
            parse_expressions("[a:ok,b:ok->x")


# ---------------------------------------------------------------------------
# Rejected input
# ---------------------------------------------------------------------------


class TestInvalid:
    @pytest.mark.parametrize(
        "text",
        [
            "",
            "   ",
            "create:ok->todo.nohtml",
            "create:invalid.nohtml",
            "create.nohtml->123",
            "create.nohtml->",
            "=>replace=>append",
            "create.no_html",
            "create:ok:error.nohtml",
            "create.nohtml->todo@123",
            ".nohtml",
            ":ok",
            "->todo",
            "=>replace",
            "create.",
            "cre@te:ok.nohtml",
            "create => $fir.X().mod",
            "update => myAction.mod",
            "$fir.1()",
            "create => $fir.X",
            "create,",
            "create->a->b",
            "2fa:ok",
        ],
    )
    def test_rejected(self, text):
        with pytest.raises(ExpressionSyntaxError):
            parse_expressions(text)

    def test_error_carries_fragment(self):
        with pytest.raises(ExpressionSyntaxError) as exc_info:
            parse_expressions("create:ok->todo.nohtml")
        assert exc_info.value.fragment == ".nohtml"

    def test_is_a_value_error(self):
        with pytest.raises(ValueError):
            parse_expressions("->todo")
