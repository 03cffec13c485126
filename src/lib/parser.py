"""
Parser for highlight tag markup

Turns the markup of a highlight block tag into structured parameters, and
option strings into option sets.

The markup grammar is a language token followed by optional options, where
either may instead be a variable reference:

    ruby
    ruby linenos hl_lines="2 3"
    {{ page.lang }} linenos
    ruby {{ page.highlight_options }}
    {{ page.lang }} {{ page.highlight_options }}

Parsing runs in two stages:
1. Grammar: recognize the language slot, any stray closing braces, and the
   options slot, recording each as it is consumed
2. Consumption check: the markup is valid only when nothing but whitespace
   was left over (see ParsedParameters.consumed)

Example:
    >>> params = markup_parse('ruby linenos hl_lines="1 2"')
    >>> params.lang, params.params
    ('ruby', ' linenos hl_lines="1 2"')
    >>> options_parse(params.params)
    {'linenos': 'inline', 'hl_lines': ['1', '2']}
"""

import re
from typing import Any, Mapping, Optional

from ..models.parser import ParsedParameters, OptionSet


class TagSyntaxError(SyntaxError):
    """Raised when tag markup does not follow the parameter grammar"""
    pass


class LanguageError(ValueError):
    """Raised when a language variable resolves to an unusable value"""
    pass


# Variable names: word characters, optionally dot-separated (e.g., page.lang)
PARAM_SYNTAX = r"\w+(?:\.\w+)*"

# Language identifiers: alphanumerics plus . + # _ -
LANG_SYNTAX = re.compile(r"[a-zA-Z0-9.+#_-]+")

VARIABLE_SYNTAX = re.compile(r"\{\{\s*(?P<name>" + PARAM_SYNTAX + r")\s*\}\}")

# One or more whitespace-prefixed options: name, name=value or name="1 2 3"
OPTIONS_SYNTAX = re.compile(r'(?:\s+\w+(?:=(?:\w+|"(?:[0-9]+\s)*[0-9]+"))?)+')

STRAY_BRACES = re.compile(r"\s*\}+")
WHITESPACE = re.compile(r"\s*")

# Individual options inside an options string, quoted values taken whole
OPTIONS_REGEX = re.compile(r'\w+(?:=(?:"[^"]*"|\w+))?')


def markup_parse(markup: str) -> Optional[ParsedParameters]:
    """
    Parse tag markup into its language and options parameters

    The language slot must match at the start of the markup; everything
    after it is optional. Text the grammar cannot place is kept in the
    result's `stray` and `trailing` fields rather than rejected here.

    Args:
        markup: Tag markup with surrounding whitespace already stripped

    Returns:
        ParsedParameters, or None if the markup does not start with a
        language token or variable reference

    Example:
        >>> markup_parse("ruby}} linenos").stray
        '}}'
        >>> markup_parse("ruby linenos!").trailing
        '!'
        >>> markup_parse("!ruby") is None
        True
    """
    lang = lang_var = params = params_var = None

    match = VARIABLE_SYNTAX.match(markup)
    if match:
        lang_var = match.group("name")
    else:
        match = LANG_SYNTAX.match(markup)
        if not match:
            return None
        lang = match.group()
    pos = match.end()

    stray = ""
    brace_match = STRAY_BRACES.match(markup, pos)
    if brace_match:
        stray = brace_match.group().strip()
        pos = brace_match.end()

    # A variable may follow directly; literal options carry their own whitespace
    variable_match = VARIABLE_SYNTAX.match(markup, WHITESPACE.match(markup, pos).end())
    if variable_match:
        params_var = variable_match.group("name")
        pos = variable_match.end()
    else:
        options_match = OPTIONS_SYNTAX.match(markup, pos)
        if options_match:
            params = options_match.group()
            pos = options_match.end()

    return ParsedParameters(
        lang=lang,
        lang_var=lang_var,
        params=params,
        params_var=params_var,
        stray=stray,
        trailing=markup[pos:],
    )


def language_validate(lang: Any) -> bool:
    """True if lang is a non-empty string made only of language characters"""
    return isinstance(lang, str) and LANG_SYNTAX.fullmatch(lang) is not None


def options_parse(text: Optional[str]) -> OptionSet:
    """
    Decode an options string into an option set

    Options take one of three forms: `name` (decoded as True), `name=value`
    (decoded as the string value) or `name="1 2 3"` (decoded as a list of
    strings). Later options overwrite earlier ones with the same name. A bare
    `linenos` is normalized to "inline".

    Args:
        text: Options string, may be None or empty

    Returns:
        Option set mapping names to decoded values

    Example:
        >>> options_parse('linenos start_line=5 hl_lines="5 6"')
        {'linenos': 'inline', 'start_line': '5', 'hl_lines': ['5', '6']}
        >>> options_parse("   ")
        {}
    """
    options: OptionSet = {}
    if text is None or not text.strip():
        return options

    for option in OPTIONS_REGEX.findall(text):
        key, sep, value = option.partition("=")
        if not sep:
            options[key] = True
        elif '"' in value:
            options[key] = value.replace('"', "").split()
        else:
            options[key] = value

    if options.get("linenos") is True:
        options["linenos"] = "inline"
    return options


def options_dump(options: Mapping[str, Any]) -> str:
    """
    Encode an option set back into an options string

    False and None values are left out, since the options syntax has no way
    to spell them.

    Args:
        options: Option set as produced by options_parse()

    Returns:
        Space-separated options string

    Example:
        >>> options_dump({"linenos": True, "hl_lines": ["1", "2"]})
        'linenos hl_lines="1 2"'
    """
    parts = []
    for key, value in options.items():
        if value is True:
            parts.append(key)
        elif value is False or value is None:
            continue
        elif isinstance(value, (list, tuple)):
            parts.append(f'{key}="{" ".join(str(item) for item in value)}"')
        else:
            parts.append(f"{key}={value}")
    return " ".join(parts)
