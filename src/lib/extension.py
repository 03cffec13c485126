"""
Jinja2 binding for the highlight block tag

Registers the highlight block tag with a Jinja2 environment:

    env = Environment(extensions=[HighlightParamExtension])
    env.highlighter = "rouge"
    env.from_string(
        "{% highlight_param {{ lang }} linenos %}\\n"
        "puts 1\\n"
        "{% endhighlight_param %}"
    ).render(lang="ruby")

Jinja2's own lexer cannot read the tag's markup (`c#`, `{{ var }}` inside a
block tag), so a preprocess pass rewrites each opening tag to carry its raw
markup as a single string literal before lexing. Parsing then validates the
markup once per template compile and emits a call block that renders the tag
against the live template context, loop and block locals included.
"""

import re
from typing import Any, Callable, Optional

from jinja2 import nodes
from jinja2.environment import Environment
from jinja2.exceptions import TemplateSyntaxError
from jinja2.ext import Extension
from jinja2.parser import Parser
from jinja2.runtime import Context, Undefined
from jinja2.utils import missing
from markupsafe import Markup

from ..config import appsettings
from .parser import TagSyntaxError
from .renderers import RendererRegistry
from .tag import HighlightBlockParam, segment_get


def markup_quote(markup: str) -> str:
    """
    Quote raw tag markup as a Jinja2 string literal

    Non-ASCII characters, backslashes and newlines are backslash-escaped,
    which Jinja2's lexer reverses when it reads the literal.

    Example:
        >>> markup_quote('ruby hl_lines="1 2"')
        '"ruby hl_lines=\\\\"1 2\\\\""'
    """
    escaped = markup.encode("unicode_escape").decode("ascii").replace('"', '\\"')
    return f'"{escaped}"'


class JinjaRenderContext:
    """
    Render context over a Jinja2 template context

    Variables come from the template context; the highlighter backend comes
    from the environment, the way a site-wide setting would.
    """

    def __init__(self, context: Context, environment: Environment) -> None:
        self.context = context
        self.environment = environment

    @property
    def highlighter(self) -> Any:
        return getattr(self.environment, "highlighter", appsettings.highlighter)

    def resolve(self, name: str) -> Any:
        first, *rest = name.split(".")
        value = self.context.resolve_or_missing(first)
        if value is missing:
            return None
        for segment in rest:
            value = segment_get(value, segment)
            if value is None:
                return None
        if isinstance(value, Undefined):
            return None
        return value

    def get(self, key: str, default: Any = None) -> Any:
        value = self.resolve(key)
        return default if value is None else value


class HighlightParamExtension(Extension):
    """
    Jinja2 extension providing the highlight block tag

    The tag name comes from appsettings.tag_name when the environment is
    created. Adds two attributes to the environment:

        highlighter: Backend name used by every highlight block
        highlight_tag_name: Name of the registered tag
    """

    def __init__(self, environment: Environment) -> None:
        super().__init__(environment)
        self.tag_name = appsettings.tag_name
        self.tags = {self.tag_name}
        self.registry = RendererRegistry()
        environment.extend(
            highlighter=appsettings.highlighter,
            highlight_tag_name=self.tag_name,
        )

    def preprocess(
        self, source: str, name: Optional[str], filename: Optional[str] = None
    ) -> str:
        """
        Rewrite opening tags so their markup reaches the parser verbatim

        `{% highlight_param {{ lang }} linenos %}` becomes
        `{% highlight_param "{{ lang }} linenos" %}`. Newlines inside the
        original markup are kept after the literal so line numbers do not
        shift. Text inside `{% raw %}` blocks and comments is left alone.
        """
        start = re.escape(self.environment.block_start_string)
        end = re.escape(self.environment.block_end_string)
        comment_start = re.escape(self.environment.comment_start_string)
        comment_end = re.escape(self.environment.comment_end_string)
        pattern = re.compile(
            rf"(?P<skip>{start}[-+]?\s*raw\s*-?{end}.*?{start}[-+]?\s*endraw\s*-?{end}"
            rf"|{comment_start}.*?{comment_end})"
            rf"|(?P<open>{start}[-+]?\s*{re.escape(self.tag_name)})(?!\w)"
            rf"(?P<markup>.*?)(?P<close>-?{end})",
            re.DOTALL,
        )

        def markup_replace(match: re.Match[str]) -> str:
            if match.group("skip"):
                return match.group("skip")
            markup = match.group("markup")
            newlines = "\n" * markup.count("\n")
            return (
                f"{match.group('open')} {markup_quote(markup.strip())} "
                f"{newlines}{match.group('close')}"
            )

        return pattern.sub(markup_replace, source)

    def parse(self, parser: Parser) -> nodes.Node:
        """
        Parse a highlight block into a call block node

        Raises:
            TemplateSyntaxError: If the tag markup is invalid, at the tag's line
        """
        token = next(parser.stream)
        lineno = token.lineno
        markup = parser.stream.expect("string").value

        try:
            HighlightBlockParam(token.value, markup, registry=self.registry)
        except TagSyntaxError as e:
            parser.fail(str(e), lineno, TemplateSyntaxError)

        body = parser.parse_statements(
            (f"name:{appsettings.endTag_make(token.value)}",), drop_needle=True
        )
        call = self.call_method(
            "_block_render",
            [nodes.Const(token.value), nodes.Const(markup), nodes.DerivedContextReference()],
            lineno=lineno,
        )
        return nodes.CallBlock(call, [], [], body).set_lineno(lineno)

    def _block_render(
        self, tag_name: str, markup: str, context: Context, caller: Callable[[], str]
    ) -> Markup:
        tag = HighlightBlockParam(tag_name, markup, registry=self.registry)
        html = tag.render(JinjaRenderContext(context, self.environment), caller())
        return Markup(html)
