"""
highlight_param - Code highlighting block tag with variable parameters

A template block tag whose language and options may be literal or
supplied by template variables, rendered through a pluggable highlighter.
"""

__version__ = "1.0.0"

from .parser import TagSyntaxError, LanguageError, markup_parse, options_parse, options_dump
from .tag import HighlightBlockParam, MappingRenderContext, RenderContext, block_render
from .renderers import RendererRegistry
from .extension import HighlightParamExtension
from .site import SiteConfig, SiteConfigError
from .log import LOG, WARN, state_connectToLogger

__all__ = [
    "TagSyntaxError",
    "LanguageError",
    "markup_parse",
    "options_parse",
    "options_dump",
    "HighlightBlockParam",
    "MappingRenderContext",
    "RenderContext",
    "block_render",
    "RendererRegistry",
    "HighlightParamExtension",
    "SiteConfig",
    "SiteConfigError",
    "LOG",
    "WARN",
    "state_connectToLogger",
    "__version__",
]
