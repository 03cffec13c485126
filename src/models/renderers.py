"""
Renderer specification and metadata models

Defines the closed set of highlighter backends a block tag can dispatch to,
and the RendererSpec record the RendererRegistry keeps for each of them.
"""

from enum import Enum
from dataclasses import dataclass
from typing import Callable


class RendererKind(Enum):
    """
    Highlighter backends selectable through the site's `highlighter` value

    Any name outside this set selects PLAIN.
    """
    ROUGE = "rouge"          # legacy HTML formatter over Pygments lexers
    PYGMENTS = "pygments"    # deprecated name, falls back to ROUGE
    PLAIN = "plain"          # escaped code, no highlighting

    @classmethod
    def from_name(cls, name: object) -> "RendererKind":
        """
        Map a configured highlighter name to a backend

        Args:
            name: Configured highlighter value (usually a string, may be None)

        Returns:
            Matching RendererKind, or PLAIN for unrecognized values

        Example:
            >>> RendererKind.from_name("rouge")
            <RendererKind.ROUGE: 'rouge'>
            >>> RendererKind.from_name("none")
            <RendererKind.PLAIN: 'plain'>
        """
        for kind in (cls.ROUGE, cls.PYGMENTS):
            if name == kind.value:
                return kind
        return cls.PLAIN


@dataclass
class RendererSpec:
    """
    Specification for a highlighter backend

    Attributes:
        kind: Backend this record describes
        description: Human-readable description
        handler: Rendering function (code, lang, options) -> str
        deprecated: Whether selecting this backend logs a deprecation warning
        fallback: Backend that actually renders when deprecated
    """
    kind: RendererKind
    description: str
    handler: Callable
    deprecated: bool = False
    fallback: RendererKind | None = None

    @property
    def name(self) -> str:
        return self.kind.value
