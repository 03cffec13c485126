"""
highlight_param - Code highlighting block tag with variable parameters

A template block tag whose language and options may be literal or
supplied by template variables, rendered through a pluggable highlighter.
"""

__version__ = "1.0.0"

from .lib import (
    HighlightBlockParam,
    HighlightParamExtension,
    LanguageError,
    TagSyntaxError,
    block_render,
    LOG,
    state_connectToLogger,
)

__all__ = [
    "HighlightBlockParam",
    "HighlightParamExtension",
    "LanguageError",
    "TagSyntaxError",
    "block_render",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
