"""
Pygments lexer lookup for highlight blocks

Resolves a block's language string to a Pygments lexer the way a fuzzy
finder would: a special "guess" name inspects the code itself, anything
else is looked up by lexer alias (e.g., "ruby", "c++", "py").

Lookups that find nothing return None so the caller can pick its own
fallback (the tag uses the plain text lexer).
"""

from typing import Optional

from pygments.lexer import Lexer
from pygments.lexers import get_lexer_by_name, guess_lexer
from pygments.util import ClassNotFound

# Language name that asks for the lexer to be guessed from the code
GUESS = "guess"


def lexer_findFancy(lang: str, code: str = "", **options) -> Optional[Lexer]:
    """
    Find a lexer for a language string, or guess one from the code

    Args:
        lang: Language name or alias, or "guess"
        code: Code to be highlighted (only used when guessing)
        **options: Lexer options passed through to Pygments

    Returns:
        Lexer instance, or None if no lexer matches

    Example:
        >>> lexer_findFancy("ruby").name
        'Ruby'
        >>> lexer_findFancy("no-such-language") is None
        True
    """
    if lang == GUESS:
        try:
            return guess_lexer(code, **options)
        except ClassNotFound:
            return None

    try:
        return get_lexer_by_name(lang, **options)
    except ClassNotFound:
        return None
