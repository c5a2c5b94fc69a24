#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Option classes for parsing and rendering."""

from scrapbox2review.options.base import BaseParserOptions, BaseRendererOptions, CloneFrozenMixin
from scrapbox2review.options.review import ReviewRendererOptions
from scrapbox2review.options.scrapbox import ScrapboxParserOptions

__all__ = [
    "BaseParserOptions",
    "BaseRendererOptions",
    "CloneFrozenMixin",
    "ReviewRendererOptions",
    "ScrapboxParserOptions",
]
