#  Copyright (c) 2025 Tom Villani, Ph.D.

# scrapbox2review/options/review.py
"""Configuration options for Re:VIEW rendering."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from scrapbox2review.constants import DEFAULT_BASE_HEADING_LEVEL, DEFAULT_LINK_BASE_URL
from scrapbox2review.logging_utils import DiagnosticLogger
from scrapbox2review.options.base import BaseRendererOptions


@dataclass(frozen=True)
class ReviewRendererOptions(BaseRendererOptions):
    """Configuration options for tree-to-Re:VIEW rendering.

    Parameters
    ----------
    base_heading_level : int, default 3
        Number of asterisks in ``[*** text]`` that maps to a level 2
        (``==``) heading. A decoration with N asterisks becomes a heading of
        level ``base_heading_level + 2 - N`` while N does not exceed this
        value; larger runs are rendered as bold text.
    logger : DiagnosticLogger or None, default None
        Receiver of ``error``/``warn`` calls for unsupported constructs.
        When None, messages go to the ``scrapbox2review.diagnostics`` logger.
    link_base_url : str, default "https://scrapbox.io"
        Origin used to resolve ``[/project/page]`` links.

    Examples
    --------
        >>> from scrapbox2review.renderers import ReviewRenderer
        >>> options = ReviewRendererOptions(base_heading_level=4)
        >>> renderer = ReviewRenderer(options)

    """

    base_heading_level: int = field(
        default=DEFAULT_BASE_HEADING_LEVEL,
        metadata={
            "help": "Asterisk count of the top heading decoration ([*** text] with the default of 3)",
            "type": int,
            "importance": "core",
        },
    )
    logger: Optional[DiagnosticLogger] = field(
        default=None,
        compare=False,
        metadata={"help": "Diagnostics sink with error() and warn() methods", "exclude_from_cli": True},
    )
    link_base_url: str = field(
        default=DEFAULT_LINK_BASE_URL,
        metadata={"help": "Origin used to resolve links to other Scrapbox projects", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate the heading level.

        Raises
        ------
        ValueError
            If ``base_heading_level`` is lower than 1.

        """
        super().__post_init__()
        if self.base_heading_level < 1:
            raise ValueError(f"base_heading_level must be at least 1, got {self.base_heading_level}")
