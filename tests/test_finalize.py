"""Tests for fir.html.finalize — class synthesis, bracket expansion and keys."""

from bs4 import BeautifulSoup

from fir.html.finalize import class_name, write_attributes


def _finalize(html: str) -> BeautifulSoup:
    out = write_attributes(html.encode()).decode()
    return BeautifulSoup(out, "html.parser", multi_valued_attributes=None)


class TestClassName:
    def test_event_state_block(self):
        assert class_name("@fir:create:ok::todo") == "fir-create-ok--todo"

    def test_without_block(self):
        assert class_name("@fir:create:pending") == "fir-create-pending"

    def test_modifiers_dropped(self):
        assert class_name("x-on:fir:create:ok::todo.prevent") == "fir-create-ok--todo"

    def test_key_appended(self):
        assert class_name("@fir:update:ok::row", "item 7") == "fir-update-ok--row--item-7"

    def test_bracket_key_has_no_class(self):
        assert class_name("@fir:[a:ok,b:ok]") is None


class TestWriteAttributes:
    def test_class_added(self):
        div = _finalize('<div @fir:create:ok::todo="x"></div>').div
        assert div["class"] == "fir-create-ok--todo"

    def test_existing_classes_kept(self):
        div = _finalize('<div class="p-4 fir-create-ok--todo" @fir:create:ok::todo="x"></div>').div
        assert div["class"] == "p-4 fir-create-ok--todo"

    def test_one_class_per_event(self):
        div = _finalize('<div @fir:a:ok="x" @fir:b:error::blk="y"></div>').div
        assert div["class"].split() == ["fir-a-ok", "fir-b-error--blk"]

    def test_bracket_expanded(self):
        div = _finalize('<div @fir:[a:ok,b:error]::blk.nohtml="v"></div>').div
        assert "@fir:[a:ok,b:error]::blk.nohtml" not in div.attrs
        assert div["@fir:a:ok::blk.nohtml"] == "v"
        assert div["@fir:b:error::blk.nohtml"] == "v"
        assert div["class"].split() == ["fir-a-ok--blk", "fir-b-error--blk"]

    def test_bracket_does_not_override_existing(self):
        div = _finalize('<div @fir:a:ok="keep" @fir:[a:ok,b:ok]="new"></div>').div
        assert div["@fir:a:ok"] == "keep"
        assert div["@fir:b:ok"] == "new"

    def test_malformed_bracket_left_alone(self):
        div = _finalize('<div @fir:[a:nope]="v"></div>').div
        assert div["@fir:[a:nope]"] == "v"
        assert "class" not in div.attrs

    def test_key_propagates_to_bound_children(self):
        soup = _finalize(
            '<li fir-key="7"><button @fir:delete:ok="x"></button><span>plain</span></li>'
        )
        assert soup.button["fir-key"] == "7"
        assert soup.button["class"] == "fir-delete-ok--7"
        assert "fir-key" not in soup.span.attrs

    def test_child_key_not_overwritten(self):
        soup = _finalize('<li fir-key="7"><b fir-key="8" @fir:a:ok="x"></b></li>')
        assert soup.b["fir-key"] == "8"

    def test_unchanged_markup_returned_as_is(self):
        html = b"<p  class='x'>{{ v }}</p>"
        assert write_attributes(html) is html

    def test_template_syntax_survives(self):
        out = write_attributes(b'<p @fir:a:ok="x">{% if a > b %}{{ a }}{% end %}</p>').decode()
        assert "{% if a > b %}{{ a }}{% end %}" in out
