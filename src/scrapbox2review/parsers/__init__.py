#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Source parsers producing scrapbox2review nodes."""

from scrapbox2review.parsers.base import BaseParser, ParserInput
from scrapbox2review.parsers.scrapbox import ScrapboxParser, decoration_marks

__all__ = ["BaseParser", "ParserInput", "ScrapboxParser", "decoration_marks"]
