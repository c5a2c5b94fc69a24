#  Copyright (c) 2025 Tom Villani, Ph.D.

# scrapbox2review/options/scrapbox.py
"""Configuration options for Scrapbox parsing."""

from __future__ import annotations

from dataclasses import dataclass, field

from scrapbox2review.constants import DEFAULT_HAS_TITLE
from scrapbox2review.options.base import BaseParserOptions


@dataclass(frozen=True)
class ScrapboxParserOptions(BaseParserOptions):
    """Configuration options for Scrapbox-to-tree parsing.

    Parameters
    ----------
    has_title : bool, default True
        Whether the first line of the source is the page title. When False,
        the first line is parsed like any other line.

    Examples
    --------
    Parse a page fragment without a title line:
        >>> options = ScrapboxParserOptions(has_title=False)
        >>> parser = ScrapboxParser(options)

    """

    has_title: bool = field(
        default=DEFAULT_HAS_TITLE,
        metadata={
            "help": "Treat the first line of the source as the page title",
            "cli_name": "no-title",
            "importance": "core",
        },
    )
