"""
Highlight block rendering tests

Tests HighlightBlockParam.render() end to end through MappingRenderContext:
body trimming, the language container, variable parameters, prefix/suffix
and language errors.
"""

import pytest
from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_by_name

from highlight_param.lib.parser import LanguageError, TagSyntaxError
from highlight_param.lib.tag import (
    HighlightBlockParam,
    MappingRenderContext,
    RenderContext,
    block_render,
    chomp,
)


RUBY_BODY = "\n\ndef foo\n  1\nend\n"


def ruby_spans(code: str) -> str:
    """Pygments spans for Ruby code, without the final newline"""
    return highlight(code, get_lexer_by_name("ruby"), HtmlFormatter(nowrap=True))[:-1]


class TestRouge:
    """Test blocks rendered with the rouge backend"""

    def test_ruby_block(self):
        """Trimmed code is highlighted and wrapped in the language container"""
        html = block_render("ruby", RUBY_BODY, highlighter="rouge")
        spans = ruby_spans("def foo\n  1\nend")

        assert html == f'<div class="highlight language-ruby" data-lang="ruby">{spans}</div>'
        assert "gutter" not in html

    def test_inline_line_numbers(self):
        """linenos adds a number to every line"""
        html = block_render("ruby linenos", RUBY_BODY, highlighter="rouge")

        assert html.count('<span class="gutter gl">') == 3
        assert '<span class="gutter gl">1 </span>' in html

    def test_table_line_numbers(self):
        """linenos=table lays numbers out in a table"""
        html = block_render("ruby linenos=table", RUBY_BODY, highlighter="rouge")

        assert html.startswith(
            '<div class="highlight language-ruby" data-lang="ruby">'
            '<table class="highlight-table">'
        )
        assert html.endswith("</table></div>")

    def test_marked_lines(self):
        """hl_lines marks lines by their position in the block"""
        html = block_render('text hl_lines="2"', "a\nb\nc", highlighter="rouge")
        assert html == (
            '<div class="highlight language-text" data-lang="text">'
            'a\n<span class="hll">b</span>\nc</div>'
        )

    def test_unknown_language_still_renders(self):
        """A well-formed but unknown language renders as plain text"""
        html = block_render("klingon", "a < b", highlighter="rouge")
        assert html == '<div class="highlight language-klingon" data-lang="klingon">a &lt; b</div>'


class TestPlain:
    """Test blocks rendered without highlighting"""

    def test_escaped_and_stripped(self):
        """The plain backend escapes and trims the code"""
        html = block_render("html", "\n  <p>hi</p>  \n", highlighter="none")
        assert html == '<div class="highlight language-html" data-lang="html">&lt;p&gt;hi&lt;/p&gt;</div>'

    def test_pygments_matches_rouge(self, warnings_log):
        """The deprecated backend renders exactly like rouge"""
        expected = block_render("ruby", RUBY_BODY, highlighter="rouge")
        assert block_render("ruby", RUBY_BODY, highlighter="pygments") == expected
        assert len(warnings_log) == 2


class TestContainer:
    """Test the language-tagged container"""

    def test_plus_replaced_in_class(self):
        """+ becomes - in the class but not in data-lang"""
        html = block_render("C++", "int x;", highlighter="none")
        assert html.startswith('<div class="highlight language-c--" data-lang="c++">')

    def test_language_lower_cased(self):
        html = block_render("Ruby", "x", highlighter="none")
        assert 'data-lang="ruby"' in html

    def test_one_trailing_newline_removed(self):
        """Only one trailing newline of the rendered code is dropped"""
        tag = HighlightBlockParam("highlight_param", "text")
        assert tag.codeTag_add("x\n\n", "text") == (
            '<div class="highlight language-text" data-lang="text">x\n</div>'
        )

    @pytest.mark.parametrize("text, expected", [
        ("a\r\n", "a"),
        ("a\n", "a"),
        ("a\r", "a"),
        ("a\n\n", "a\n"),
        ("a", "a"),
    ])
    def test_chomp(self, text, expected):
        assert chomp(text) == expected

    def test_body_terminators_trimmed_once(self):
        """Leading and trailing newline runs go, inner blank lines stay"""
        html = block_render("text", "\r\n\nfirst\n\nsecond\r\n", highlighter="none")
        assert ">first\n\nsecond</div>" in html


class TestVariables:
    """Test language and options supplied by variables"""

    def test_language_variable(self):
        html = block_render("{{ lang }}", "x", {"lang": "Python"}, highlighter="none")
        assert 'data-lang="python"' in html

    def test_dotted_language_variable(self):
        variables = {"page": {"code": {"lang": "ruby"}}}
        html = block_render("{{ page.code.lang }}", "x", variables, highlighter="none")
        assert 'data-lang="ruby"' in html

    def test_options_variable(self):
        """An options variable is decoded like literal options"""
        variables = {"opts": 'linenos=table hl_lines="1"'}
        html = block_render("ruby {{ opts }}", RUBY_BODY, variables, highlighter="rouge")

        assert '<table class="highlight-table">' in html
        assert '<span class="hll">' in html

    def test_undefined_options_variable(self):
        """An undefined options variable means no options"""
        html = block_render("ruby {{ opts }}", RUBY_BODY, highlighter="rouge")
        assert html == block_render("ruby", RUBY_BODY, highlighter="rouge")

    def test_same_tag_different_contexts(self):
        """One tag renders against any number of contexts"""
        tag = HighlightBlockParam("highlight_param", "{{ lang }}")

        ruby = tag.render(MappingRenderContext({"lang": "ruby"}, highlighter="none"), "x")
        python = tag.render(MappingRenderContext({"lang": "python"}, highlighter="none"), "x")

        assert 'data-lang="ruby"' in ruby
        assert 'data-lang="python"' in python

    def test_injected_language_rejected(self):
        """Characters outside the language set are rejected after resolving"""
        with pytest.raises(LanguageError, match="ruby; drop"):
            block_render("{{ lang }}", "x", {"lang": "ruby; DROP"}, highlighter="rouge")

    def test_language_with_spaces_rejected(self):
        with pytest.raises(LanguageError, match="Alphanumeric"):
            block_render("{{ lang }}", "x", {"lang": "ruby on rails"}, highlighter="none")

    def test_undefined_language_variable(self):
        with pytest.raises(LanguageError, match="'lang' is not defined"):
            block_render("{{ lang }}", "x", {}, highlighter="rouge")

    def test_non_numeric_marked_lines_literal(self):
        """hl_lines=abc parses but is rejected when rendering"""
        with pytest.raises(TagSyntaxError, match="Option hl_lines must be whole numbers"):
            block_render("ruby hl_lines=abc", "x", highlighter="rouge")

    def test_non_numeric_marked_lines_variable(self):
        """Quoted lists from an options variable are checked too"""
        with pytest.raises(TagSyntaxError, match="got: a b"):
            block_render("ruby {{ o }}", "x", {"o": 'hl_lines="a b"'}, highlighter="rouge")


class TestPrefixSuffix:
    """Test highlighter_prefix and highlighter_suffix"""

    def test_prefix_and_suffix(self):
        variables = {"highlighter_prefix": "<figure>", "highlighter_suffix": "</figure>"}
        html = block_render("text", "x", variables, highlighter="none")

        assert html == (
            '<figure><div class="highlight language-text" data-lang="text">x</div></figure>'
        )

    def test_prefix_only(self):
        html = block_render("text", "x", {"highlighter_prefix": "\n"}, highlighter="none")
        assert html.startswith('\n<div class="highlight')
        assert html.endswith("</div>")


class TestMappingRenderContext:
    """Test variable lookup in MappingRenderContext"""

    def test_is_render_context(self):
        assert isinstance(MappingRenderContext(), RenderContext)

    def test_resolve_nested(self):
        context = MappingRenderContext({"page": {"langs": ["ruby", "go"]}})

        assert context.resolve("page.langs.1") == "go"
        assert context.resolve("page.langs.5") is None
        assert context.resolve("page.missing.deeper") is None

    def test_resolve_attribute(self):
        class Page:
            lang = "rust"

        assert MappingRenderContext({"page": Page()}).resolve("page.lang") == "rust"

    def test_get_default(self):
        context = MappingRenderContext({"a": 1})

        assert context.get("a") == 1
        assert context.get("b", "fallback") == "fallback"

    def test_default_highlighter(self):
        assert MappingRenderContext().highlighter == "rouge"
