"""
Highlight block tag with literal or variable parameters

A block tag whose language and options may each be given literally or as
a `{{ variable }}` reference resolved at render time:

    {% highlight_param {{ page.lang }} linenos %}
    def foo
      1
    end
    {% endhighlight_param %}

The tag's markup is validated once when the tag is built. Rendering then
resolves the parameters against a RenderContext, hands the code to the
highlighter backend the context selects, and wraps the result in a
`<div class="highlight language-X" data-lang="X">` container.

The tag itself is engine-agnostic; see extension.py for the Jinja2 binding.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Protocol, Sequence, runtime_checkable

from ..config import appsettings
from ..models.parser import OptionSet, ParsedParameters
from .log import LOG
from .parser import (
    LanguageError,
    TagSyntaxError,
    language_validate,
    markup_parse,
    options_parse,
)
from .renderers import CSS_CLASS, RendererRegistry


# One run of line terminators at either end of the block body
LEADING_OR_TRAILING_LINE_TERMINATORS = re.compile(r"\A[\n\r]+|[\n\r]+\Z")


@runtime_checkable
class RenderContext(Protocol):
    """
    What a highlight block needs from the host template engine

    Attributes:
        highlighter: Configured highlighter backend name (e.g., "rouge")
    """

    highlighter: Any

    def resolve(self, name: str) -> Any:
        """Value of a (possibly dotted) variable name, or None if undefined"""
        ...

    def get(self, key: str, default: Any = None) -> Any:
        """Value of a variable, or default if undefined"""
        ...


def segment_get(value: Any, segment: str) -> Any:
    """
    Look up one segment of a dotted variable name

    Mappings are indexed by key, sequences by numeric segments, and any
    other object by attribute.

    Args:
        value: Object resolved so far
        segment: Next name segment

    Returns:
        The looked-up value, or None if it does not exist
    """
    if isinstance(value, Mapping):
        return value.get(segment)
    if isinstance(value, Sequence) and not isinstance(value, str) and segment.isdigit():
        index = int(segment)
        return value[index] if index < len(value) else None
    return getattr(value, segment, None)


@dataclass
class MappingRenderContext:
    """
    Render context backed by a plain mapping of variables

    Attributes:
        variables: Template variables (e.g., {"page": {"lang": "ruby"}})
        highlighter: Highlighter backend name (defaults to appsettings.highlighter)

    Example:
        >>> context = MappingRenderContext({"page": {"lang": "ruby"}})
        >>> context.resolve("page.lang")
        'ruby'
        >>> context.resolve("page.missing") is None
        True
    """
    variables: Mapping[str, Any] = field(default_factory=dict)
    highlighter: Any = field(default_factory=lambda: appsettings.highlighter)

    def resolve(self, name: str) -> Any:
        value: Any = self.variables
        for segment in name.split("."):
            value = segment_get(value, segment)
            if value is None:
                return None
        return value

    def get(self, key: str, default: Any = None) -> Any:
        value = self.resolve(key)
        return default if value is None else value


def usage_format(tag_name: str, markup: str) -> str:
    """Build the syntax error message listing the valid tag forms"""
    return (
        f"Syntax Error in tag '{tag_name}' while parsing the following markup:\n"
        f"\n"
        f"{markup}\n"
        f"\n"
        f"Valid syntax: {tag_name} <lang> [linenos]\n"
        f"          \tOR: {tag_name} {{{{ lang_variable }}}} [linenos]\n"
        f"          \tOR: {tag_name} <lang> {{{{ [linenos_variable(s)] }}}}\n"
        f"          \tOR: {tag_name} {{{{ lang_variable }}}} {{{{ [linenos_variable(s)] }}}}\n"
    )


def chomp(text: str) -> str:
    """Remove one trailing line terminator (\\r\\n, \\n or \\r)"""
    if text.endswith("\r\n"):
        return text[:-2]
    if text.endswith(("\n", "\r")):
        return text[:-1]
    return text


class HighlightBlockParam:
    """
    Highlight block tag with variable-capable parameters

    Holds nothing but its parsed markup, so a single instance can be
    rendered any number of times, concurrently, against different contexts.
    """

    def __init__(
        self,
        tag_name: str,
        markup: str,
        registry: Optional[RendererRegistry] = None,
    ) -> None:
        """
        Parse and validate the tag's markup

        Args:
            tag_name: Name the tag was invoked with (used in error messages)
            markup: Raw markup following the tag name
            registry: Highlighter backends to render with (defaults to built-ins)

        Raises:
            TagSyntaxError: If the markup does not follow the tag grammar,
                            including stray or trailing text
        """
        self.tag_name = tag_name
        self.markup = markup.strip()

        parsed = markup_parse(self.markup)
        if parsed is None or not parsed.consumed:
            raise TagSyntaxError(usage_format(tag_name, self.markup))
        self.parsed: ParsedParameters = parsed
        self.registry = registry if registry is not None else RendererRegistry()

    def language_resolve(self, context: RenderContext) -> str:
        """
        Determine the effective, lower-cased language

        Args:
            context: Render context supplying variable values

        Returns:
            Language identifier (e.g., "ruby", "c++")

        Raises:
            LanguageError: If the language variable is undefined or its value
                           contains characters outside the language set
            TagSyntaxError: If neither a literal nor a variable language
                            was parsed
        """
        lang_var = self.parsed.lang_var
        if lang_var:
            value = context.resolve(lang_var)
            if value is None:
                raise LanguageError(
                    f"Language variable '{lang_var}' is not defined in this context"
                )
            lang = str(value).lower()
            if not language_validate(lang):
                raise LanguageError(
                    "Language characters can only include Alphanumeric and the "
                    "following characters, without spaces: . + # _ -\n"
                    f"Your passed language variable: {lang}\n"
                )
            return lang

        if self.parsed.lang:
            return self.parsed.lang.lower()

        raise TagSyntaxError(
            f"Unknown Syntax Error in tag '{self.tag_name}'.\n"
            "Please review tag documentation.\n"
        )

    def options_resolve(self, context: RenderContext) -> OptionSet:
        """
        Decode the tag's options from its literal or variable form

        Args:
            context: Render context supplying variable values

        Returns:
            Decoded option set (empty when the tag has no options)
        """
        if self.parsed.params_var:
            value = context.resolve(self.parsed.params_var)
            return options_parse(None if value is None else str(value))
        if self.parsed.params:
            return options_parse(self.parsed.params)
        return options_parse("")

    def render(self, context: RenderContext, body: str) -> str:
        """
        Render the block body as highlighted, wrapped HTML

        Args:
            context: Render context (variables, highlighter, prefix/suffix)
            body: Block body, i.e. the code to highlight

        Returns:
            prefix + <div class="highlight language-X" data-lang="X">...</div> + suffix
        """
        prefix = context.get("highlighter_prefix") or ""
        suffix = context.get("highlighter_suffix") or ""
        code = LEADING_OR_TRAILING_LINE_TERMINATORS.sub("", str(body))

        lang = self.language_resolve(context)
        options = self.options_resolve(context)
        LOG(f"Tag '{self.tag_name}': lang={lang} options={options}", level=3)

        output = self.registry.render(
            context.highlighter, code, lang, options, lang_var=self.parsed.lang_var
        )
        return f"{prefix}{self.codeTag_add(output, lang)}{suffix}"

    def codeTag_add(self, code: str, lang: str) -> str:
        """
        Wrap rendered code in the language-tagged container

        Args:
            code: Rendered HTML fragment
            lang: Effective language

        Returns:
            <div class="highlight language-X" data-lang="X">code</div>,
            with + in the class name replaced by - and one trailing
            newline removed from code
        """
        code_attributes = " ".join([
            f'class="{CSS_CLASS} language-{lang.replace("+", "-")}"',
            f'data-lang="{lang}"',
        ])
        return f"<div {code_attributes}>{chomp(code)}</div>"


def block_render(
    markup: str,
    body: str,
    variables: Optional[Mapping[str, Any]] = None,
    highlighter: Any = None,
    tag_name: Optional[str] = None,
) -> str:
    """
    Build and render a highlight block in one call

    Args:
        markup: Tag markup (e.g., "ruby linenos")
        body: Code to highlight
        variables: Template variables for {{ }} references and prefix/suffix
        highlighter: Highlighter backend name (defaults to appsettings.highlighter)
        tag_name: Tag name for error messages (defaults to appsettings.tag_name)

    Returns:
        Rendered HTML

    Example:
        >>> block_render("text", "a < b", highlighter="none")
        '<div class="highlight language-text" data-lang="text">a &lt; b</div>'
    """
    context = MappingRenderContext(
        variables=variables or {},
        highlighter=highlighter if highlighter is not None else appsettings.highlighter,
    )
    tag = HighlightBlockParam(tag_name or appsettings.tag_name, markup)
    return tag.render(context, body)
