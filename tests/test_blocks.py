"""Tests for fir.html.blocks — content-addressed inline block extraction."""

import re

import pytest

from fir.errors import TemplateParseError
from fir.html.blocks import extract_templates, hash_id, is_template


def _extract(html: str) -> tuple[str, dict[str, str]]:
    content, blocks = extract_templates(html.encode())
    return content.decode(), blocks


class TestHashId:
    def test_sixteen_hex_chars(self):
        assert re.fullmatch(r"[0-9a-f]{16}", hash_id("<h1>{{ title }}</h1>"))

    def test_whitespace_ignored(self):
        assert hash_id("  test  content  ") == hash_id("test content")

    def test_different_content(self):
        assert hash_id("a") != hash_id("b")


class TestIsTemplate:
    def test_markers(self):
        assert is_template("<p>{{ x }}</p>")
        assert not is_template("<p>{{ x</p>")
        assert not is_template("<p>plain</p>")


class TestExtractTemplates:
    def test_block_extracted(self):
        content, blocks = _extract('<div @fir:event:ok="template1"><h1>{{.Title}}</h1></div>')
        name = "fir-" + hash_id("<h1>{{.Title}}</h1>")
        assert content == f'<div @fir:event:ok::{name}="template1"><h1>{{{{.Title}}}}</h1></div>'
        assert blocks == {name: "<h1>{{.Title}}</h1>"}

    def test_plain_content_unchanged(self):
        html = '<div @fir:event:ok="template1"><h1>Title</h1></div>'
        assert _extract(html) == (html, {})

    def test_empty(self):
        assert extract_templates(b"") == (b"", {})

    def test_identical_fragments_share_a_block(self):
        content, blocks = _extract(
            '<div @fir:event:ok="a"><h1>{{.Title}}</h1></div>'
            '<div @fir:event:ok="b"><h1>{{.Title}}</h1></div>'
        )
        [name] = blocks
        assert content.count(f"::{name}") == 2

    def test_error_state(self):
        content, blocks = _extract('<p @fir:save:error="x">{{ err }}</p>')
        [name] = blocks
        assert f"@fir:save:error::{name}=" in content

    def test_pending_never_named(self):
        html = '<p @fir:save:pending="x">{{ spinner }}</p>'
        assert _extract(html) == (html, {})

    def test_invalid_utf8_is_a_parse_error(self):
        with pytest.raises(TemplateParseError, match="not valid UTF-8"):
            extract_templates(b'<div @fir:a:ok="x">\xff{{ x }}</div>', "bad.html")

    def test_explicit_name_kept(self):
        html = '<ul @fir:create:ok::todo-list="x">{{ items }}</ul>'
        assert _extract(html) == (html, {})

    def test_name_goes_before_modifiers(self):
        content, blocks = _extract('<p @fir:a:ok.prevent.debounce="x">{{ v }}</p>')
        [name] = blocks
        assert f"@fir:a:ok::{name}.prevent.debounce=" in content

    def test_bracket_group(self):
        content, blocks = _extract('<p @fir:[a:ok,b:error]="x">{{ v }}</p>')
        [name] = blocks
        assert f"@fir:[a:ok,b:error]::{name}=" in content

    def test_x_on_prefix(self):
        content, blocks = _extract('<p x-on:fir:a:ok="x">{{ v }}</p>')
        [name] = blocks
        assert f"x-on:fir:a:ok::{name}=" in content

    def test_no_placeholder_left_behind(self):
        content, _ = _extract(
            '<div @fir:a:ok="x"><p @fir:b:ok="y">static</p>{{ v }}</div>'
        )
        assert "fir-slot" not in content

    def test_formatting_preserved(self):
        html = "<div   class='c'\n     @fir:a:ok = \"x\">\n  {{ v }}\n</div>"
        content, blocks = _extract(html)
        [name] = blocks
        assert content == html.replace("@fir:a:ok", f"@fir:a:ok::{name}")

    def test_nested_blocks(self):
        content, blocks = _extract('<div @fir:a:ok="x"><p @fir:b:ok="y">{{ v }}</p></div>')
        inner = "fir-" + hash_id("{{ v }}")
        assert blocks[inner] == "{{ v }}"
        outer = next(n for n in blocks if n != inner)
        assert blocks[outer] == f'<p @fir:b:ok::{inner}="y">{{{{ v }}}}</p>'
        assert content.startswith(f'<div @fir:a:ok::{outer}="x">')


class TestIdempotence:
    def test_rerun_yields_same_blocks(self):
        html = (
            '<div @fir:a:ok="x"><p @fir:b:ok="y">{{ v }}</p><span @fir:c:ok="z">c</span></div>'
            '<section @fir:d:error="w">{{ err }}</section>'
        )
        first, blocks = extract_templates(html.encode())
        second, again = extract_templates(first)
        assert again == blocks
        assert second == first

    def test_edited_fragment_gets_new_name(self):
        first, blocks = _extract('<p @fir:a:ok="x">{{ v }}</p>')
        [old] = blocks
        edited = first.replace("{{ v }}", "{{ w }}")
        content, again = _extract(edited)
        [new] = again
        assert new != old
        assert f"::{new}" in content
        assert old not in content
