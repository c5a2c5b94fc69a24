"""scrapbox2review - Convert Scrapbox pages to Re:VIEW.

scrapbox2review parses the wiki markup of a Scrapbox page (bracket
decorations, links, icons, indentation-based lists, quotes, code blocks,
tables and formulas) and renders it as Re:VIEW, the markup used for
technical books.

Constructs Re:VIEW cannot express are reported through a diagnostics sink
with ``error`` and ``warn`` methods and replaced by their source text, so a
conversion always produces a complete document.

Examples
--------
Basic conversion:

    >>> from scrapbox2review import scrapbox_to_review
    >>> print(scrapbox_to_review("Page title\\n[** Section]\\n body"))
    = Page title
    <BLANKLINE>
    === Section
    <BLANKLINE>
     * body
    <BLANKLINE>

Collecting diagnostics:

    >>> from scrapbox2review import CollectingDiagnostics
    >>> diagnostics = CollectingDiagnostics()
    >>> _ = scrapbox_to_review("[Some page]", has_title=False, logger=diagnostics)
    >>> diagnostics.errors
    ["Can't convert relative links. Please use absolute links instead: [Some page]"]

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

__version__ = "1.0.0"

from scrapbox2review.api import from_ast, scrapbox_to_review, to_ast
from scrapbox2review.exceptions import (
    FileError,
    InvalidOptionsError,
    OutputWriteError,
    ParsingError,
    RenderingError,
    Scrapbox2ReviewError,
    ValidationError,
)
from scrapbox2review.logging_utils import CollectingDiagnostics, DiagnosticLogger, LoggingDiagnostics
from scrapbox2review.options import ReviewRendererOptions, ScrapboxParserOptions
from scrapbox2review.parsers import ScrapboxParser
from scrapbox2review.renderers import ReviewRenderer

__all__ = [
    "__version__",
    "scrapbox_to_review",
    "to_ast",
    "from_ast",
    "ScrapboxParser",
    "ReviewRenderer",
    "ScrapboxParserOptions",
    "ReviewRendererOptions",
    "DiagnosticLogger",
    "LoggingDiagnostics",
    "CollectingDiagnostics",
    "Scrapbox2ReviewError",
    "ValidationError",
    "InvalidOptionsError",
    "FileError",
    "ParsingError",
    "RenderingError",
    "OutputWriteError",
]
