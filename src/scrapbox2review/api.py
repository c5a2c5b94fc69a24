"""The exported API functions for Scrapbox to Re:VIEW conversion."""

#  Copyright (c) 2025 Tom Villani, Ph.D.
# src/scrapbox2review/api.py
import logging
from dataclasses import fields
from pathlib import Path
from typing import IO, Any, Optional, Sequence, Union

from scrapbox2review.ast import BlockNode
from scrapbox2review.exceptions import ParsingError, RenderingError, Scrapbox2ReviewError
from scrapbox2review.options.review import ReviewRendererOptions
from scrapbox2review.options.scrapbox import ScrapboxParserOptions
from scrapbox2review.parsers.base import ParserInput
from scrapbox2review.parsers.scrapbox import ScrapboxParser
from scrapbox2review.renderers.review import ReviewRenderer

logger = logging.getLogger(__name__)

OutputDestination = Union[str, Path, IO[bytes], IO[str], None]


def _split_kwargs_for_parser_and_renderer(kwargs: dict) -> tuple[dict, dict]:
    """Split kwargs between parser and renderer based on their field names.

    Parameters
    ----------
    kwargs : dict
        Keyword arguments to split

    Returns
    -------
    tuple[dict, dict]
        (parser_kwargs, renderer_kwargs)

    """
    parser_fields = {f.name for f in fields(ScrapboxParserOptions)}
    renderer_fields = {f.name for f in fields(ReviewRendererOptions)}

    parser_kwargs = {}
    renderer_kwargs = {}
    unmatched = []

    for k, v in kwargs.items():
        if k in parser_fields:
            parser_kwargs[k] = v
        elif k in renderer_fields:
            renderer_kwargs[k] = v
        else:
            unmatched.append(k)

    if unmatched:
        logger.debug(f"Kwargs don't match parser or renderer fields: {unmatched}")

    return parser_kwargs, renderer_kwargs


def _resolve_parser_options(
    parser_options: Optional[ScrapboxParserOptions], kwargs: dict
) -> Optional[ScrapboxParserOptions]:
    if kwargs and parser_options:
        return parser_options.create_updated(**kwargs)
    if kwargs:
        return ScrapboxParserOptions(**kwargs)
    return parser_options


def _resolve_renderer_options(
    renderer_options: Optional[ReviewRendererOptions], kwargs: dict
) -> Optional[ReviewRendererOptions]:
    if kwargs and renderer_options:
        return renderer_options.create_updated(**kwargs)
    if kwargs:
        return ReviewRendererOptions(**kwargs)
    return renderer_options


def to_ast(
    source: ParserInput,
    *,
    parser_options: Optional[ScrapboxParserOptions] = None,
    **kwargs: Any,
) -> list[BlockNode]:
    """Parse Scrapbox source into block nodes.

    Parameters
    ----------
    source : str, Path, bytes or IO
        Scrapbox page. A ``str`` is always page text; pass a ``Path`` to
        read a file.
    parser_options : ScrapboxParserOptions, optional
        Pre-configured parser options
    **kwargs
        Individual ``ScrapboxParserOptions`` fields, overriding
        ``parser_options``

    Returns
    -------
    list of BlockNode
        Parsed page

    Raises
    ------
    FileError
        If a ``Path`` source cannot be read
    ParsingError
        If parsing fails unexpectedly

    Examples
    --------
        >>> blocks = to_ast("[* bold] text", has_title=False)
        >>> type(blocks[0]).__name__
        'Line'

    """
    parser_kwargs, _ = _split_kwargs_for_parser_and_renderer(kwargs)
    parser = ScrapboxParser(_resolve_parser_options(parser_options, parser_kwargs))

    # A trailing empty line closes any list or quote still open at the end of the page
    if isinstance(source, str):
        source = source + "\n"

    try:
        return parser.parse(source)
    except Scrapbox2ReviewError:
        raise
    except Exception as e:
        raise ParsingError(f"Scrapbox parsing failed: {e!r}", parsing_stage="scrapbox", original_error=e) from e


def from_ast(
    blocks: Sequence[BlockNode],
    output: OutputDestination = None,
    *,
    renderer_options: Optional[ReviewRendererOptions] = None,
    **kwargs: Any,
) -> Optional[str]:
    """Render block nodes to Re:VIEW.

    Parameters
    ----------
    blocks : sequence of BlockNode
        Parsed page, as returned by ``to_ast``
    output : str, Path, IO[bytes], IO[str], or None, optional
        Output destination. If None, the Re:VIEW text is returned.
    renderer_options : ReviewRendererOptions, optional
        Pre-configured renderer options
    **kwargs
        Individual ``ReviewRendererOptions`` fields, overriding
        ``renderer_options``

    Returns
    -------
    str or None
        Re:VIEW text when ``output`` is None, otherwise None

    Raises
    ------
    OutputWriteError
        If ``output`` cannot be written

    """
    _, renderer_kwargs = _split_kwargs_for_parser_and_renderer(kwargs)
    renderer = ReviewRenderer(_resolve_renderer_options(renderer_options, renderer_kwargs))

    try:
        text = renderer.render_to_string(blocks)
    except Scrapbox2ReviewError:
        raise
    except Exception as e:
        raise RenderingError(f"Re:VIEW rendering failed: {e!r}", rendering_stage="review", original_error=e) from e

    if output is None:
        return text
    renderer.write_text_output(text, output)
    return None


def scrapbox_to_review(
    source: ParserInput,
    output: OutputDestination = None,
    *,
    parser_options: Optional[ScrapboxParserOptions] = None,
    renderer_options: Optional[ReviewRendererOptions] = None,
    **kwargs: Any,
) -> Optional[str]:
    """Convert a Scrapbox page to Re:VIEW.

    Parameters
    ----------
    source : str, Path, bytes or IO
        Scrapbox page. A ``str`` is always page text; pass a ``Path`` to
        read a file.
    output : str, Path, IO[bytes], IO[str], or None, optional
        Output destination. If None, the Re:VIEW text is returned.
    parser_options : ScrapboxParserOptions, optional
        Pre-configured parser options
    renderer_options : ReviewRendererOptions, optional
        Pre-configured renderer options
    **kwargs
        Individual option fields (``has_title``, ``base_heading_level``,
        ``logger``, ``link_base_url``), routed to the matching options
        class and overriding the pre-configured objects. Unknown names are
        ignored.

    Returns
    -------
    str or None
        Re:VIEW text when ``output`` is None, otherwise None

    Examples
    --------
        >>> scrapbox_to_review("Title\\n[** Section]\\ntext")
        '= Title\\n\\n=== Section\\n\\ntext\\n'

        >>> scrapbox_to_review("[**** Big]", has_title=False, base_heading_level=4)
        '== Big\\n'

    """
    parser_kwargs, renderer_kwargs = _split_kwargs_for_parser_and_renderer(kwargs)
    blocks = to_ast(source, parser_options=parser_options, **parser_kwargs)
    return from_ast(blocks, output, renderer_options=renderer_options, **renderer_kwargs)


__all__ = ["from_ast", "scrapbox_to_review", "to_ast"]
