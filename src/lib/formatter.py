"""
Legacy-style HTML formatter built on Pygments

Pygments' own HtmlFormatter drops line numbers as soon as its wrapping is
turned off, while highlight blocks need both: unwrapped output (the tag adds
its own container) with an optional line-number gutter. This formatter takes
Pygments' bare token spans and lays them out itself:

- no line numbers: the spans as-is
- "inline": each line prefixed with its number
- "table" (or any other truthy value): numbers and code in a two-cell table

Example:
    >>> from pygments.lexers import get_lexer_by_name
    >>> formatter = LegacyHtmlFormatter(line_numbers="table", wrap=False)
    >>> html = formatter.format("x = 1\\n", get_lexer_by_name("python"))
    >>> html.startswith('<table class="highlight-table">')
    True
"""

from typing import Any, Iterable, List, Optional

from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexer import Lexer


class LegacyHtmlFormatter:
    """
    Format code as HTML with configurable gutter and wrapping

    Attributes:
        line_numbers: None/False, "inline", "table" or another truthy value
        wrap: Surround output with <div class="css_class"><pre>
        css_class: Class of the wrapping div and prefix of the table class
        gutter_class: Class of the line-number cell or spans
        code_class: Class of the code cell in table mode
        start_line: Number of the first line
        hl_lines: 1-based positions of lines to mark with class "hll"
    """

    def __init__(
        self,
        line_numbers: Any = None,
        wrap: bool = True,
        css_class: str = "highlight",
        gutter_class: str = "gutter",
        code_class: str = "code",
        start_line: int = 1,
        hl_lines: Optional[Iterable[Any]] = None,
    ) -> None:
        self.line_numbers = line_numbers
        self.wrap = wrap
        self.css_class = css_class
        self.gutter_class = gutter_class
        self.code_class = code_class
        self.start_line = start_line
        self.hl_lines = {int(line) for line in (hl_lines or [])}
        self.spans = HtmlFormatter(nowrap=True)

    def format(self, code: str, lexer: Lexer) -> str:
        """
        Highlight code with the given lexer

        Args:
            code: Source code to highlight
            lexer: Pygments lexer for the code's language

        Returns:
            HTML fragment, ending in a newline unless table-wrapped
        """
        lines = self.lines_split(highlight(code, lexer, self.spans))

        if self.hl_lines:
            lines = [
                f'<span class="hll">{line}</span>' if index in self.hl_lines else line
                for index, line in enumerate(lines, start=1)
            ]

        if self.line_numbers == "inline":
            html = self.inlineLinenos_wrap(lines)
        elif self.line_numbers:
            html = self.tableLinenos_wrap(lines)
        else:
            html = "".join(f"{line}\n" for line in lines)

        if self.wrap:
            html = f'<div class="{self.css_class}"><pre>{html}</pre></div>'
        return html

    def lines_split(self, html: str) -> List[str]:
        """Split highlighted HTML into lines, dropping the final newline"""
        lines = html.split("\n")
        if lines and lines[-1] == "":
            lines.pop()
        return lines

    def lineNumbers_make(self, count: int) -> List[str]:
        """Right-aligned line numbers for count lines, from start_line"""
        last = self.start_line + count - 1
        width = len(str(last))
        return [f"{number:>{width}}" for number in range(self.start_line, last + 1)]

    def inlineLinenos_wrap(self, lines: List[str]) -> str:
        numbers = self.lineNumbers_make(len(lines))
        return "".join(
            f'<span class="{self.gutter_class} gl">{number} </span>{line}\n'
            for number, line in zip(numbers, lines)
        )

    def tableLinenos_wrap(self, lines: List[str]) -> str:
        numbers = "\n".join(self.lineNumbers_make(len(lines)))
        code = "".join(f"{line}\n" for line in lines)
        return (
            f'<table class="{self.css_class}-table"><tbody><tr>'
            f'<td class="{self.gutter_class} gl"><pre class="lineno">{numbers}</pre></td>'
            f'<td class="{self.code_class}"><pre>{code}</pre></td>'
            "</tr></tbody></table>"
        )
