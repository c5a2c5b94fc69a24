#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/scrapbox2review/renderers/review.py
"""Re:VIEW rendering from Scrapbox nodes.

This module provides the ReviewRenderer class, which walks the block nodes
produced by ``ScrapboxParser`` once and emits Re:VIEW markup.

Most blocks map to one Re:VIEW construct on their own. Two constructs span
several blocks: consecutive indented lines are buffered into one
itemization and flushed at the next top-level block, and consecutive
``>`` lines share one ``//quote{`` block. That cross-block state lives in a
``RenderState`` created for each call, so a renderer instance can be reused.

Constructs Re:VIEW cannot express are never fatal. They are reported through
the configured diagnostics sink and replaced by their raw source text or a
simpler supported shape.

"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from functools import reduce
from typing import Callable, Optional, Sequence
from urllib.parse import quote, urljoin

from scrapbox2review.ast import (
    Blank,
    BlockNode,
    Code,
    CodeBlock,
    CommandLine,
    Decoration,
    Formula,
    HashTag,
    Icon,
    Image,
    InlineNode,
    Line,
    Link,
    NumberList,
    Plain,
    Quote,
    Strong,
    StrongIcon,
    StrongImage,
    Table,
    Title,
)
from scrapbox2review.constants import ICON_SUFFIX, TABLE_HEADER_BORDER, ItemizationType
from scrapbox2review.logging_utils import DiagnosticLogger, LoggingDiagnostics
from scrapbox2review.options.review import ReviewRendererOptions
from scrapbox2review.renderers.base import BaseRenderer
from scrapbox2review.utils.escape import escape_block_option, escape_href, escape_inline_command

logger = logging.getLogger(__name__)

_BLANK_LINE_RUN = re.compile(r"\n{2,}")
_TRAILING_NEWLINES = re.compile(r"\n*\Z")
_HEADING_DECOS = re.compile(r"\*+")
_BOLD_MARK = re.compile(r"\*-?[0-9]*")

# Characters kept as-is when a root link path is turned into a URL
_URL_SAFE_CHARS = "!#$%&'()*+,/:;=?@[]~"

# Decoration marks in the order they wrap the content, innermost first
_DECORATION_COMMANDS: tuple[tuple[Callable[[str], bool], str], ...] = (
    (lambda mark: _BOLD_MARK.fullmatch(mark) is not None, "strong"),
    (lambda mark: mark == "/", "i"),
    (lambda mark: mark == "-", "del"),
)


def normalize_blank_lines(text: str) -> str:
    """Collapse runs of blank lines to one and end the text with exactly one newline.

    Examples
    --------
        >>> normalize_blank_lines("= Title\\n\\n\\n\\nbody\\n\\n")
        '= Title\\n\\nbody\\n'

    """
    text = _BLANK_LINE_RUN.sub("\n\n", text)
    return _TRAILING_NEWLINES.sub("\n", text, count=1)


def _wrap_decoration(inner: str, mark: str) -> str:
    for matches, command in _DECORATION_COMMANDS:
        if matches(mark):
            return f"@<{command}>{{{inner}}}"
    return inner


def _leading_quote(node: BlockNode) -> Optional[Quote]:
    """Return the quote opening a top-level line, if any."""
    if isinstance(node, Line) and node.indent == 0 and node.nodes and isinstance(node.nodes[0], Quote):
        return node.nodes[0]
    return None


@dataclass
class ItemizationEntry:
    """One buffered list item.

    Parameters
    ----------
    level : int
        Indent of the source line
    type : {"normal", "number"}
        Whether the line started with ``N. ``
    nodes : list of InlineNode
        Item content, without the number prefix for numbered items
    number : int, default 0
        Parsed item number for numbered items
    raw : str, default ""
        Source text of the numbered item

    """

    level: int
    type: ItemizationType
    nodes: list[InlineNode]
    number: int = 0
    raw: str = ""


@dataclass
class RenderState:
    """Cross-block state of a single rendering pass."""

    current_itemization: Optional[list[ItemizationEntry]] = None
    in_block_quote: bool = False


class ReviewRenderer(BaseRenderer):
    r"""Render Scrapbox block nodes to Re:VIEW text.

    Parameters
    ----------
    options : ReviewRendererOptions or None, default = None
        Re:VIEW rendering options

    Examples
    --------
        >>> from scrapbox2review.ast import Line, Plain, Title
        >>> renderer = ReviewRenderer()
        >>> renderer.render_to_string([Title(text="Page"), Line(nodes=[Plain(text="Hello")])])
        '= Page\n\nHello\n'

    """

    def __init__(self, options: ReviewRendererOptions | None = None):
        """Initialize the Re:VIEW renderer with options."""
        BaseRenderer._validate_options_type(options, ReviewRendererOptions, "review")
        options = options or ReviewRendererOptions()
        super().__init__(options)
        self.options: ReviewRendererOptions = options
        self.diagnostics: DiagnosticLogger = options.logger if options.logger is not None else LoggingDiagnostics()

    def render_to_string(self, blocks: Sequence[BlockNode]) -> str:
        """Render block nodes to Re:VIEW text.

        Parameters
        ----------
        blocks : sequence of BlockNode
            Parsed page in source order

        Returns
        -------
        str
            Re:VIEW text ending with exactly one newline

        """
        state = RenderState()
        parts: list[str] = []
        for node in blocks:
            parts.append(self._render_block(node, state))
        parts.append(self._close_open_blocks(state))
        logger.debug(f"Rendered {len(blocks)} blocks to Re:VIEW")
        return normalize_blank_lines("".join(parts))

    # ------------------------------------------------------------------
    # Blocks
    # ------------------------------------------------------------------

    def _render_block(self, node: BlockNode, state: RenderState) -> str:
        if isinstance(node, Title):
            return f"= {node.text}\n\n"

        parts: list[str] = []
        if node.indent == 0 and state.current_itemization is not None:
            parts.append(self.render_itemization(state.current_itemization))
            state.current_itemization = None

        quote_node = _leading_quote(node)
        if quote_node is None and state.in_block_quote:
            state.in_block_quote = False
            parts.append("//}\n\n")

        if quote_node is not None:
            parts.append(self._render_quote_line(quote_node, state))
        elif node.indent != 0:
            parts.append(self._buffer_indented(node, state))
        else:
            parts.append(self._render_top_level(node))
        return "".join(parts)

    def _close_open_blocks(self, state: RenderState) -> str:
        parts: list[str] = []
        if state.current_itemization is not None:
            parts.append(self.render_itemization(state.current_itemization))
            state.current_itemization = None
        if state.in_block_quote:
            state.in_block_quote = False
            parts.append("//}\n\n")
        return "".join(parts)

    def _render_quote_line(self, node: Quote, state: RenderState) -> str:
        opening = "" if state.in_block_quote else "//quote{\n"
        state.in_block_quote = True
        return f"{opening}{self.render_inline(node.nodes)}\n"

    def _buffer_indented(self, node: Line | CodeBlock | Table, state: RenderState) -> str:
        if state.current_itemization is None:
            state.current_itemization = []
        if isinstance(node, Line):
            state.current_itemization.append(self._itemization_entry(node))
            return ""

        if isinstance(node, Table):
            self.diagnostics.error(f"Table inside itemization not supported: {node.file_name}")
        else:
            self.diagnostics.error(f"Code block inside itemization not supported: {node.file_name}")
        return f" {'*' * node.indent}\n"

    def _itemization_entry(self, line: Line) -> ItemizationEntry:
        first = line.nodes[0] if line.nodes else None
        if isinstance(first, NumberList):
            return ItemizationEntry(
                level=line.indent, type="number", nodes=first.nodes, number=first.number, raw=first.raw
            )
        if isinstance(first, Quote):
            self.diagnostics.error(f"Blockquote inside itemization not supported: {first.raw}")
            return ItemizationEntry(level=line.indent, type="normal", nodes=[Plain(text=first.raw, raw=first.raw)])
        return ItemizationEntry(level=line.indent, type="normal", nodes=line.nodes)

    def _render_top_level(self, node: Line | CodeBlock | Table) -> str:
        if isinstance(node, CodeBlock):
            return f"//emlist[{escape_block_option(node.file_name)}]{{\n{node.content}\n//}}\n\n"
        if isinstance(node, Table):
            return f"{self.render_table(node)}\n\n"

        if node.nodes and isinstance(node.nodes[0], CommandLine):
            return f"//cmd{{\n{node.nodes[0].raw}\n//}}\n\n"

        if len(node.nodes) == 1:
            only = node.nodes[0]
            heading = self._render_heading(only)
            if heading is not None:
                return heading
            if isinstance(only, (Image, StrongImage)):
                return f"//indepimage[{escape_block_option(only.src)}]\n\n"
            if isinstance(only, Formula):
                return f"//texequation{{\n{only.formula}\n//}}\n\n"

        return f"{self.render_inline(node.nodes)}\n\n"

    def _render_heading(self, node: InlineNode) -> Optional[str]:
        """Render a line made of a single ``[** text]`` decoration as a heading.

        Returns None when the decoration is not a heading: a single asterisk,
        other marks mixed in, or more asterisks than ``base_heading_level``.
        """
        if not isinstance(node, Decoration):
            return None
        if node.raw_decos == "*" or not _HEADING_DECOS.fullmatch(node.raw_decos):
            return None
        count = len(node.raw_decos)
        if count > self.options.base_heading_level:
            return None

        if len(node.nodes) == 1 and isinstance(node.nodes[0], Image):
            return f"//indepimage[{escape_block_option(node.nodes[0].src)}]\n\n"
        marker = "=" * (self.options.base_heading_level + 2 - count)
        return f"{marker} {self.render_inline(node.nodes)}\n\n"

    # ------------------------------------------------------------------
    # Itemizations and tables
    # ------------------------------------------------------------------

    def render_itemization(self, entries: Sequence[ItemizationEntry]) -> str:
        """Render one buffered itemization.

        A run of numbered items at level 1 whose numbers increase by one is
        rendered as a Re:VIEW numbered list, preceded by ``//olnum[N]`` when it
        does not start at 1. Everything else becomes a bulleted list; numbered
        items in it keep their number as text and are reported.

        Parameters
        ----------
        entries : sequence of ItemizationEntry
            Buffered items in source order

        Returns
        -------
        str
            Rendered list followed by a blank line, or "" for no entries

        """
        if not entries:
            return ""

        if all(entry.type == "number" for entry in entries):
            numbers = [entry.number for entry in entries]
            contiguous = all(following - current == 1 for current, following in zip(numbers, numbers[1:]))
            if contiguous and all(entry.level == 1 for entry in entries):
                parts: list[str] = []
                if numbers[0] != 1:
                    parts.append(f"//olnum[{numbers[0]}]\n\n")
                for entry in entries:
                    parts.append(f" {entry.number}. {self.render_inline(entry.nodes)}\n")
                parts.append("\n")
                return "".join(parts)

        lines: list[str] = []
        for entry in entries:
            bullet = "*" * entry.level
            if entry.type == "normal":
                lines.append(f" {bullet} {self.render_inline(entry.nodes)}\n")
                continue
            self.diagnostics.error(f"Nested or discontinuous number list not supported: {entry.raw}")
            lines.append(f" {bullet} {entry.number}. {self.render_inline(entry.nodes)}\n")
        lines.append("\n")
        return "".join(lines)

    def render_table(self, table: Table) -> str:
        """Render a table block as ``//emtable``.

        The first row is the header, separated from the body by a border
        line. A table without rows renders as an empty ``//emtable``.
        """
        label = escape_block_option(table.file_name)
        if not table.cells:
            return f"//emtable[{label}]{{\n//}}"

        header, *rows = table.cells
        body = "\n".join(self._render_table_row(row) for row in rows)
        return f"//emtable[{label}]{{\n{self._render_table_row(header)}\n{TABLE_HEADER_BORDER}\n{body}\n//}}"

    def _render_table_row(self, row: list[list[InlineNode]]) -> str:
        return "\t".join(self.render_inline(cell) for cell in row)

    # ------------------------------------------------------------------
    # Inline nodes
    # ------------------------------------------------------------------

    def render_inline(self, nodes: Sequence[InlineNode]) -> str:
        """Render a sequence of inline nodes and concatenate the results."""
        return "".join(self.render_inline_node(node) for node in nodes)

    def render_inline_node(self, node: InlineNode) -> str:
        """Render a single inline node.

        Parameters
        ----------
        node : InlineNode
            Node to render

        Returns
        -------
        str
            Re:VIEW inline markup, or the node's raw source text for
            constructs that cannot be converted

        """
        if isinstance(node, Link):
            return self._render_link(node)
        if isinstance(node, HashTag):
            self.diagnostics.error(f"Hashtags are not supported: {node.raw}")
            return node.raw
        if isinstance(node, Strong):
            return f"@<strong>{{{escape_inline_command(self.render_inline(node.nodes))}}}"
        if isinstance(node, Decoration):
            if len(node.nodes) == 1 and isinstance(node.nodes[0], Image):
                return self.render_inline_node(node.nodes[0])
            return reduce(_wrap_decoration, node.decos, escape_inline_command(self.render_inline(node.nodes)))
        if isinstance(node, Code):
            return f"@<code>{{{escape_inline_command(node.text)}}}"
        if isinstance(node, CommandLine):
            return f"@<code>{{{escape_inline_command(node.raw)}}}"
        if isinstance(node, Formula):
            return f"@<m>{{{escape_inline_command(node.formula)}}}"
        if isinstance(node, (Image, StrongImage)):
            return f"@<icon>{{{escape_inline_command(node.src)}}}"
        if isinstance(node, (Plain, Blank)):
            return node.text
        if isinstance(node, (Icon, StrongIcon)):
            self.diagnostics.warn(f"An icon is used: {node.raw}")
            return f"@<icon>{{{node.path}{ICON_SUFFIX}}}"
        if isinstance(node, NumberList):
            return node.raw

        self.diagnostics.error(f"Unsupported syntax: {node.raw}")
        return node.raw

    def _render_link(self, node: Link) -> str:
        if node.path_type == "relative":
            self.diagnostics.error(f"Can't convert relative links. Please use absolute links instead: {node.raw}")
            return node.raw
        if node.path_type == "root":
            self.diagnostics.warn(f"An internal link to a Scrapbox's page is used: {node.raw}")
            return f"@<href>{{{escape_href(self.resolve_root_link(node.href))}}}"
        if node.content == "":
            return f"@<href>{{{escape_href(node.href)}}}"
        return f"@<href>{{{escape_href(node.href)}, {escape_href(node.content)}}}"

    def resolve_root_link(self, href: str) -> str:
        """Resolve a ``/project/page`` path against ``link_base_url``.

        Examples
        --------
            >>> ReviewRenderer().resolve_root_link("/help-jp/ページ")
            'https://scrapbox.io/help-jp/%E3%83%9A%E3%83%BC%E3%82%B8'

        """
        return urljoin(self.options.link_base_url, quote(href, safe=_URL_SAFE_CHARS))
