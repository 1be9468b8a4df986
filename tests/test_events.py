"""Tests for fir.templates.events — event → template mapping and merging."""

import logging

from fir.templates.events import (
    event_templates_from_attr,
    event_templates_from_html,
    merge_event_templates,
)


class TestFromAttr:
    def test_named_block(self):
        assert event_templates_from_attr("@fir:create:ok::todo") == {"create:ok": frozenset({"todo"})}

    def test_whole_element(self):
        assert event_templates_from_attr("@fir:create:pending") == {"create:pending": frozenset({"-"})}

    def test_modifiers_stripped(self):
        assert event_templates_from_attr("x-on:fir:create:ok::todo.nohtml.prevent") == {
            "create:ok": frozenset({"todo"})
        }

    def test_bracket_group(self):
        assert event_templates_from_attr("@fir:[a:ok,b:done]") == {
            "a:ok": frozenset({"-"}),
            "b:done": frozenset({"-"}),
        }

    def test_bracket_group_with_block(self):
        assert event_templates_from_attr("@fir:[a:ok,b:error]::blk") == {
            "a:ok": frozenset({"blk"}),
            "b:error": frozenset({"blk"}),
        }

    def test_not_an_event_attribute(self):
        assert event_templates_from_attr("class") == {}


class TestRejectedEntries:
    def test_pending_with_block(self, caplog):
        with caplog.at_level(logging.WARNING, logger="fir.templates"):
            assert event_templates_from_attr("@fir:create:pending::todo") == {}
        assert "only allowed for ok and error" in caplog.text

    def test_done_with_block(self):
        assert event_templates_from_attr("@fir:create:done::todo") == {}

    def test_unknown_state(self):
        assert event_templates_from_attr("@fir:create:later") == {}

    def test_missing_state(self):
        assert event_templates_from_attr("@fir:create") == {}

    def test_too_many_separators(self):
        assert event_templates_from_attr("@fir:create:ok::a::b") == {}

    def test_invalid_template_name(self, caplog):
        with caplog.at_level(logging.WARNING, logger="fir.templates"):
            assert event_templates_from_attr("@fir:create:ok::bad/name") == {}
        assert "invalid template name" in caplog.text

    def test_bad_member_skipped_others_kept(self):
        assert event_templates_from_attr("@fir:[a:ok,b:pending]::blk") == {"a:ok": frozenset({"blk"})}


class TestFromHtml:
    def test_collects_across_elements(self):
        html = (
            b'<div @fir:create:ok::list="x"><p @fir:create:ok::count="y"></p></div>'
            b'<span x-on:fir:delete:error="z"></span>'
        )
        assert event_templates_from_html(html) == {
            "create:ok": frozenset({"list", "count"}),
            "delete:error": frozenset({"-"}),
        }

    def test_empty(self):
        assert event_templates_from_html(b"") == {}


class TestMerge:
    A = {"a:ok": {"x"}, "b:ok": {"-"}}
    B = {"a:ok": {"y"}}
    C = {"c:error": {"z"}, "a:ok": {"x"}}

    def test_union(self):
        assert merge_event_templates(self.A, self.B) == {
            "a:ok": frozenset({"x", "y"}),
            "b:ok": frozenset({"-"}),
        }

    def test_commutative(self):
        assert merge_event_templates(self.A, self.B) == merge_event_templates(self.B, self.A)

    def test_associative(self):
        left = merge_event_templates(merge_event_templates(self.A, self.B), self.C)
        right = merge_event_templates(self.A, merge_event_templates(self.B, self.C))
        assert left == right

    def test_idempotent(self):
        once = merge_event_templates(self.A)
        assert merge_event_templates(once, once) == once

    def test_inputs_untouched(self):
        merge_event_templates(self.A, self.B)
        assert self.A["a:ok"] == {"x"}
