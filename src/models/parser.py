"""
Parser-specific data models

Type-safe structures for tag markup parsing and option decoding.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Union


# A decoded option value: bare flag, scalar, or quoted integer list
OptionValue = Union[bool, str, List[str]]

# Mapping from option name to decoded value (e.g., {"linenos": "inline"})
OptionSet = Dict[str, OptionValue]


@dataclass(frozen=True)
class ParsedParameters:
    """
    Result of parsing the markup of a highlight block tag

    Returned by markup_parse() once the language slot has been recognized.
    Holds the literal or variable form of each parameter plus whatever text
    the grammar could not consume.

    Attributes:
        lang: Literal language token (e.g., "ruby", "c++")
        lang_var: Variable name supplying the language (e.g., "page.lang")
        params: Literal options text, including its leading whitespace
                (e.g., " linenos hl_lines=\"1 2\"")
        params_var: Variable name supplying the options string
        stray: Closing braces left between the language and the options
               (e.g., "}}" in "ruby}} linenos")
        trailing: Text left after the options token (e.g., "!" in "ruby linenos!")

    Example:
        For markup "{{ lang }} linenos":
        ParsedParameters(lang=None, lang_var="lang", params=" linenos",
                         params_var=None, stray="", trailing="")
    """
    lang: Optional[str] = None
    lang_var: Optional[str] = None
    params: Optional[str] = None
    params_var: Optional[str] = None
    stray: str = ""
    trailing: str = ""

    @property
    def consumed(self) -> bool:
        """True when no stray or trailing text was left unparsed"""
        return not self.stray.strip() and not self.trailing.strip()
