#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Renderers turning scrapbox2review nodes into output markup."""

from scrapbox2review.renderers.base import BaseRenderer
from scrapbox2review.renderers.review import ItemizationEntry, RenderState, ReviewRenderer, normalize_blank_lines

__all__ = ["BaseRenderer", "ItemizationEntry", "RenderState", "ReviewRenderer", "normalize_blank_lines"]
