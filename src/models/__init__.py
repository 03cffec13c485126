"""
Models package for highlight_param

Contains data structures and type definitions for tag parsing and rendering.
"""

from .state import ProgramState, pipeline
from .renderers import RendererKind, RendererSpec
from .parser import ParsedParameters, OptionSet, OptionValue

__all__ = [
    "ProgramState",
    "pipeline",
    "RendererKind",
    "RendererSpec",
    "ParsedParameters",
    "OptionSet",
    "OptionValue",
]
