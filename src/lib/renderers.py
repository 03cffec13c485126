"""
Highlighter backends for highlight blocks

Each backend turns a block's code into an HTML fragment. The tag picks one
through the site's `highlighter` value; see RendererKind for the set.
Uses RendererSpec for metadata and dispatch.
"""

from html import escape as html_escape
from typing import Any, Dict, List, Optional

from pygments.lexers.special import TextLexer

from ..models.parser import OptionSet
from ..models.renderers import RendererKind, RendererSpec
from .formatter import LegacyHtmlFormatter
from .lexer import lexer_findFancy
from .log import LOG, WARN
from .parser import TagSyntaxError, language_validate


# Class names of the highlighted block, its line-number gutter and its code
CSS_CLASS = "highlight"
GUTTER_CLASS = "gutter"
CODE_CLASS = "code"


def lineList_get(options: OptionSet, *keys: str) -> List[str]:
    """
    Get a line-number list option, accepting the first key that is set

    Args:
        options: Decoded option set
        *keys: Option names to try in order (e.g., "hl_lines", "mark_lines")

    Returns:
        List of line numbers as strings (empty if no key is set)

    Raises:
        TagSyntaxError: If a listed line is not a whole number

    Example:
        >>> lineList_get({"mark_lines": ["1", "3"]}, "hl_lines", "mark_lines")
        ['1', '3']
        >>> lineList_get({"hl_lines": "2"}, "hl_lines")
        ['2']
    """
    for key in keys:
        value = options.get(key)
        if isinstance(value, list):
            lines = value
        elif isinstance(value, str):
            lines = value.split()
        else:
            continue
        if not all(line.isdecimal() for line in lines):
            raise TagSyntaxError(
                f"Option {key} must be whole numbers, got: {' '.join(lines)}"
            )
        return lines
    return []


def startLine_get(options: OptionSet) -> int:
    """Get the start_line option as an integer (default 1)"""
    value = options.get("start_line", 1)
    try:
        return int(value)
    except (TypeError, ValueError):
        raise TagSyntaxError(
            f"Option start_line must be a whole number, got: {value}"
        )


def rouge_render(
    code: str, lang: str, options: OptionSet, lang_var: Optional[str] = None
) -> str:
    """
    Highlight code with the legacy HTML formatter

    Args:
        code: Code to highlight
        lang: Effective (lower-cased) language
        options: Decoded option set (linenos, start_line, hl_lines, mark_lines)
        lang_var: Variable the language came from, for error reporting

    Returns:
        Highlighted HTML fragment without a wrapping container

    Raises:
        TagSyntaxError: If lang is not a valid language identifier
    """
    formatter = LegacyHtmlFormatter(
        line_numbers=options.get("linenos"),
        wrap=False,
        css_class=CSS_CLASS,
        gutter_class=GUTTER_CLASS,
        code_class=CODE_CLASS,
        start_line=startLine_get(options),
        hl_lines=lineList_get(options, "hl_lines", "mark_lines"),
    )
    if language_validate(lang):
        lexer = lexer_findFancy(lang, code) or TextLexer()
    else:
        raise TagSyntaxError(f"Can't find language variable {lang_var}")
    return formatter.format(code, lexer)


def plain_render(
    code: str, lang: str, options: OptionSet, lang_var: Optional[str] = None
) -> str:
    """Escape code for HTML without highlighting it (single quotes as &#39;)"""
    return html_escape(code).replace("&#x27;", "&#39;").strip()


class RendererRegistry:
    """
    Registry of highlighter backends

    Maps every RendererKind to the RendererSpec that renders it.
    """

    def __init__(self) -> None:
        """Initialize the registry and register all built-in backends"""
        self.specs: Dict[RendererKind, RendererSpec] = {}
        self.renderers_register()

    def register(self, spec: RendererSpec) -> None:
        """Register a backend specification"""
        self.specs[spec.kind] = spec

    def spec_get(self, name: Any) -> RendererSpec:
        """
        Get the backend specification for a configured highlighter name

        Args:
            name: Highlighter name from the site configuration

        Returns:
            Matching RendererSpec; unrecognized names get the plain backend
        """
        return self.specs[RendererKind.from_name(name)]

    def spec_resolve(self, name: Any) -> RendererSpec:
        """
        Get the backend that actually renders for a highlighter name

        Deprecated backends are followed to their fallback, warning the user.

        Args:
            name: Highlighter name from the site configuration

        Returns:
            RendererSpec of the rendering backend
        """
        spec = self.spec_get(name)
        if spec.deprecated and spec.fallback is not None:
            fallback = self.specs[spec.fallback]
            WARN("Warning:", f"Highlight tag no longer supports rendering with {spec.name.capitalize()}.")
            WARN("", f"Using the default highlighter, {fallback.name.capitalize()}, instead.")
            spec = fallback
        return spec

    def render(
        self,
        name: Any,
        code: str,
        lang: str,
        options: OptionSet,
        lang_var: Optional[str] = None,
    ) -> str:
        """
        Render code with the backend selected by a highlighter name

        Args:
            name: Highlighter name from the site configuration
            code: Code to render (line terminators already trimmed)
            lang: Effective language
            options: Decoded option set
            lang_var: Variable the language came from, for error reporting

        Returns:
            HTML fragment from the selected backend
        """
        spec = self.spec_resolve(name)
        LOG(f"Rendering '{lang}' block with {spec.name}", level=3)
        return spec.handler(code, lang, options, lang_var=lang_var)

    def renderers_register(self) -> None:
        """Register the built-in backends"""
        self.register(RendererSpec(
            kind=RendererKind.ROUGE,
            description="Highlight with Pygments lexers through the legacy HTML formatter",
            handler=rouge_render,
        ))

        self.register(RendererSpec(
            kind=RendererKind.PYGMENTS,
            description="Deprecated highlighter name, rendered with rouge",
            handler=rouge_render,
            deprecated=True,
            fallback=RendererKind.ROUGE,
        ))

        self.register(RendererSpec(
            kind=RendererKind.PLAIN,
            description="HTML-escaped code without highlighting",
            handler=plain_render,
        ))
