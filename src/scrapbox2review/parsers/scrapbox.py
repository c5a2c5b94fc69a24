#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/scrapbox2review/parsers/scrapbox.py
"""Scrapbox markup to node tree parser.

This module provides regex-based parsing of Scrapbox page text into the
block and inline nodes defined in ``scrapbox2review.ast``.

Block structure is line oriented: every line is a ``Line`` unless it opens a
``code:`` or ``table:`` block, which then absorbs the following lines that
are indented deeper than its header.

Inline structure is found by an ordered list of rules. For a fragment of
text the first rule whose pattern occurs anywhere in it wins; the text on
either side of the match is parsed again from the first rule. Rules bound to
the start of a line (quotes, command lines, numbered items) only apply
before the first split.

"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, replace
from typing import Callable

from scrapbox2review.ast import (
    Blank,
    BlockNode,
    Code,
    CodeBlock,
    CommandLine,
    Decoration,
    Formula,
    HashTag,
    Helpfeel,
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
from scrapbox2review.constants import DECORATION_CHARS, IMAGE_EXTENSIONS, MAX_DECORATION_ASTERISKS, IconPathType
from scrapbox2review.options.scrapbox import ScrapboxParserOptions
from scrapbox2review.parsers.base import BaseParser, ParserInput

logger = logging.getLogger(__name__)

# =============================================================================
# Regex Patterns for Scrapbox Syntax
# =============================================================================

# Block headers: code:<file name> and table:<label>
CODE_BLOCK_PATTERN = re.compile(r"^\s*code:(.+)$")
TABLE_PATTERN = re.compile(r"^\s*table:(.+)$")

# Line-head constructs
QUOTE_PATTERN = re.compile(r"^>(.*)$")
HELPFEEL_PATTERN = re.compile(r"^\? (.+)$")
COMMAND_LINE_PATTERN = re.compile(r"^([$%]) (.+)$")
NUMBER_LIST_PATTERN = re.compile(r"^([0-9]+)\.\s(.*)$")

# Inline code: `text`
CODE_PATTERN = re.compile(r"`(.*?)`")
# Formula: [$ x^2 ]
FORMULA_PATTERN = re.compile(r"\[\$ (.+?) \]|\[\$ ([^\]]+)\]")
# Blank: [ ]
BLANK_PATTERN = re.compile(r"\[(\s+)\]")
# Decoration: [*/- text], the body may contain one level of [brackets] or a lone [
DECORATION_PATTERN = re.compile(r"\[([" + re.escape(DECORATION_CHARS) + r"]+)\s((?:\[[^\[\]]+\]|[^\]])+)\]")

_IMAGE_URL = (
    r"https?://[^\s\]]+\.(?i:" + "|".join(IMAGE_EXTENSIONS) + r")(?:\?[^\]\s]*)?"
    r"|https://gyazo\.com/[0-9a-f]{32}(?:/raw)?"
)
_URL = r"https?://[^\s\]]+"

# Strong forms: [[https://example.com/a.png]], [[name.icon]], [[text]]
STRONG_IMAGE_PATTERN = re.compile(r"\[\[(" + _IMAGE_URL + r")\]\]")
STRONG_ICON_PATTERN = re.compile(r"\[\[([^\[\]]*)\.icon(?:\*([1-9][0-9]*))?\]\]")
STRONG_PATTERN = re.compile(r"\[\[((?:[^\[]|\[[^\[]).*?\]*)\]\]")

# Image: [src] or [src link] or [link src]
IMAGE_PATTERN = re.compile(
    r"\[(" + _IMAGE_URL + r")(?:\s+(" + _URL + r"))?\]"
    r"|\[(" + _URL + r")\s+(" + _IMAGE_URL + r")\]"
)
# External link: [url text], [text url], [url] or a bare url
EXTERNAL_LINK_PATTERN = re.compile(
    r"\[(" + _URL + r")\s+([^\]]*[^\s\]])\]"
    r"|\[([^\[\]]*[^\s\[\]])\s+(" + _URL + r")\]"
    r"|\[(" + _URL + r")\]"
    r"|(" + _URL + r")"
)
# Icon: [name.icon], [/project/name.icon], [name.icon*3] repeats the icon three times
ICON_PATTERN = re.compile(r"\[([^\[\]]*)\.icon(?:\*([1-9][0-9]*))?\]")
# Internal link: [page] or [/project/page]
INTERNAL_LINK_PATTERN = re.compile(r"\[(/?[^\[\]\s][^\[\]]*)\]")
# Hash tag: #tag at the start or after whitespace
HASHTAG_PATTERN = re.compile(r"(?<!\S)#([^\s\[\]]+)")


@dataclass(frozen=True)
class _InlineContext:
    """Where an inline fragment sits.

    Attributes
    ----------
    head : bool
        The fragment starts at the beginning of the line and nothing has
        been split off it yet
    nested : bool
        The fragment is the body of a decoration or strong bracket
    quoted : bool
        The fragment is the body of a quote

    """

    head: bool = True
    nested: bool = False
    quoted: bool = False

    def after_split(self) -> _InlineContext:
        return replace(self, head=False) if self.head else self


@dataclass(frozen=True)
class _InlineRule:
    pattern: re.Pattern[str]
    build: Callable[[ScrapboxParser, re.Match[str], _InlineContext], InlineNode | list[InlineNode]]
    head_only: bool = False
    on_nested: bool = True
    on_quoted: bool = True

    def applies(self, context: _InlineContext) -> bool:
        if self.head_only and not context.head:
            return False
        if context.nested and not self.on_nested:
            return False
        return not (context.quoted and not self.on_quoted)


def _indent_of(line: str) -> int:
    return len(line) - len(line.lstrip())


def _path_type(path: str) -> IconPathType:
    return "root" if path.startswith("/") else "relative"


def _repeat_count(match: re.Match[str]) -> int:
    """Return N for an icon written as ``[name.icon*N]``, 1 without a suffix."""
    return int(match.group(2)) if match.group(2) else 1


def decoration_marks(raw_decos: str) -> list[str]:
    """Normalize a decoration mark run.

    Distinct non-asterisk marks keep their order of first appearance; the
    asterisks are counted and appended last as ``*-N``.

    Examples
    --------
        >>> decoration_marks("**/-")
        ['/', '-', '*-2']

    """
    marks: list[str] = []
    for mark in raw_decos:
        if mark != "*" and mark not in marks:
            marks.append(mark)
    asterisks = raw_decos.count("*")
    if asterisks:
        marks.append(f"*-{min(asterisks, MAX_DECORATION_ASTERISKS)}")
    return marks


class ScrapboxParser(BaseParser):
    r"""Convert Scrapbox page text to a list of block nodes.

    Parameters
    ----------
    options : ScrapboxParserOptions or None, default = None
        Parser configuration options

    Examples
    --------
    Basic parsing:

        >>> parser = ScrapboxParser()
        >>> blocks = parser.parse("Title\n[** Heading]\n body\n")

    Without a title line:

        >>> parser = ScrapboxParser(ScrapboxParserOptions(has_title=False))
        >>> blocks = parser.parse("[* bold] text\n")

    """

    def __init__(self, options: ScrapboxParserOptions | None = None):
        """Initialize the Scrapbox parser with options."""
        BaseParser._validate_options_type(options, ScrapboxParserOptions, "scrapbox")
        options = options or ScrapboxParserOptions()
        super().__init__(options)
        self.options: ScrapboxParserOptions = options

    def parse(self, input_data: ParserInput) -> list[BlockNode]:
        """Parse Scrapbox input into block nodes.

        Parameters
        ----------
        input_data : str, Path, bytes or IO
            Scrapbox source. A ``str`` is always source text.

        Returns
        -------
        list of BlockNode
            Block nodes in source order

        """
        content = self._load_text_content(input_data)
        content = content.replace("\r\n", "\n").replace("\r", "\n")
        blocks = self._parse_blocks(content.split("\n"))
        logger.debug(f"Parsed {len(blocks)} Scrapbox blocks")
        return blocks

    def parse_inline(self, text: str) -> list[InlineNode]:
        """Parse a single line of text (without indentation) into inline nodes."""
        return self._parse_inline(text, _InlineContext())

    # ------------------------------------------------------------------
    # Blocks
    # ------------------------------------------------------------------

    def _parse_blocks(self, lines: list[str]) -> list[BlockNode]:
        blocks: list[BlockNode] = []
        index = 0
        if self.options.has_title:
            blocks.append(Title(text=lines[0].strip(), raw=lines[0]))
            index = 1

        while index < len(lines):
            line = lines[index]
            indent = _indent_of(line)

            code_match = CODE_BLOCK_PATTERN.match(line)
            if code_match:
                end = self._find_block_end(lines, index, indent)
                body = lines[index + 1 : end]
                blocks.append(
                    CodeBlock(
                        indent=indent,
                        file_name=code_match.group(1),
                        content="\n".join(row[indent + 1 :] for row in body),
                        raw="\n".join(lines[index:end]),
                        line_number=index + 1,
                    )
                )
                index = end
                continue

            table_match = TABLE_PATTERN.match(line)
            if table_match:
                end = self._find_block_end(lines, index, indent)
                rows = [
                    [self._parse_inline(cell, _InlineContext(head=False)) for cell in row[indent + 1 :].split("\t")]
                    for row in lines[index + 1 : end]
                ]
                blocks.append(
                    Table(
                        indent=indent,
                        file_name=table_match.group(1),
                        cells=rows,
                        raw="\n".join(lines[index:end]),
                        line_number=index + 1,
                    )
                )
                index = end
                continue

            blocks.append(
                Line(
                    indent=indent,
                    nodes=self._parse_inline(line[indent:], _InlineContext()),
                    raw=line,
                    line_number=index + 1,
                )
            )
            index += 1

        return blocks

    @staticmethod
    def _find_block_end(lines: list[str], start: int, indent: int) -> int:
        """Return the index of the first line after ``start`` not indented deeper than ``indent``."""
        end = start + 1
        while end < len(lines) and _indent_of(lines[end]) > indent:
            end += 1
        return end

    # ------------------------------------------------------------------
    # Inline nodes
    # ------------------------------------------------------------------

    def _parse_inline(self, text: str, context: _InlineContext) -> list[InlineNode]:
        nodes: list[InlineNode] = []
        while text:
            for rule in _INLINE_RULES:
                if not rule.applies(context):
                    continue
                match = rule.pattern.search(text)
                if match is None:
                    continue
                context = context.after_split()
                nodes.extend(self._parse_inline(text[: match.start()], context))
                built = rule.build(self, match, context)
                if isinstance(built, list):
                    nodes.extend(built)
                else:
                    nodes.append(built)
                text = text[match.end() :]
                break
            else:
                nodes.append(Plain(text=text, raw=text))
                break
        return nodes

    def _build_quote(self, match: re.Match[str], context: _InlineContext) -> InlineNode:
        inner = replace(context, head=False, quoted=True)
        return Quote(nodes=self._parse_inline(match.group(1), inner), raw=match.group(0))

    def _build_helpfeel(self, match: re.Match[str], context: _InlineContext) -> InlineNode:
        return Helpfeel(text=match.group(1), raw=match.group(0))

    def _build_command_line(self, match: re.Match[str], context: _InlineContext) -> InlineNode:
        return CommandLine(symbol=match.group(1), text=match.group(2), raw=match.group(0))

    def _build_number_list(self, match: re.Match[str], context: _InlineContext) -> InlineNode:
        return NumberList(
            number=int(match.group(1)),
            nodes=self._parse_inline(match.group(2), context),
            raw=match.group(0),
        )

    def _build_code(self, match: re.Match[str], context: _InlineContext) -> InlineNode:
        return Code(text=match.group(1), raw=match.group(0))

    def _build_formula(self, match: re.Match[str], context: _InlineContext) -> InlineNode:
        formula = match.group(1) if match.group(1) is not None else match.group(2)
        return Formula(formula=formula, raw=match.group(0))

    def _build_blank(self, match: re.Match[str], context: _InlineContext) -> InlineNode:
        return Blank(text=match.group(1), raw=match.group(0))

    def _build_decoration(self, match: re.Match[str], context: _InlineContext) -> InlineNode:
        raw_decos = match.group(1)
        return Decoration(
            raw_decos=raw_decos,
            decos=decoration_marks(raw_decos),
            nodes=self._parse_inline(match.group(2), replace(context, nested=True)),
            raw=match.group(0),
        )

    def _build_strong_image(self, match: re.Match[str], context: _InlineContext) -> InlineNode:
        return StrongImage(src=match.group(1), raw=match.group(0))

    def _build_strong_icon(self, match: re.Match[str], context: _InlineContext) -> list[InlineNode]:
        path = match.group(1)
        return [
            StrongIcon(path=path, path_type=_path_type(path), raw=match.group(0)) for _ in range(_repeat_count(match))
        ]

    def _build_strong(self, match: re.Match[str], context: _InlineContext) -> InlineNode:
        return Strong(nodes=self._parse_inline(match.group(1), replace(context, nested=True)), raw=match.group(0))

    def _build_image(self, match: re.Match[str], context: _InlineContext) -> InlineNode:
        if match.group(1) is not None:
            return Image(src=match.group(1), link=match.group(2) or "", raw=match.group(0))
        return Image(src=match.group(4), link=match.group(3), raw=match.group(0))

    def _build_external_link(self, match: re.Match[str], context: _InlineContext) -> InlineNode:
        if match.group(1) is not None:
            href, content = match.group(1), match.group(2)
        elif match.group(4) is not None:
            href, content = match.group(4), match.group(3)
        else:
            href, content = match.group(5) or match.group(6), ""
        return Link(path_type="absolute", href=href, content=content, raw=match.group(0))

    def _build_icon(self, match: re.Match[str], context: _InlineContext) -> list[InlineNode]:
        path = match.group(1)
        return [Icon(path=path, path_type=_path_type(path), raw=match.group(0)) for _ in range(_repeat_count(match))]

    def _build_internal_link(self, match: re.Match[str], context: _InlineContext) -> InlineNode:
        href = match.group(1)
        return Link(path_type=_path_type(href), href=href, raw=match.group(0))

    def _build_hashtag(self, match: re.Match[str], context: _InlineContext) -> InlineNode:
        return HashTag(href=match.group(1), raw=match.group(0))


_INLINE_RULES: tuple[_InlineRule, ...] = (
    _InlineRule(QUOTE_PATTERN, ScrapboxParser._build_quote, head_only=True, on_quoted=False),
    _InlineRule(HELPFEEL_PATTERN, ScrapboxParser._build_helpfeel, head_only=True, on_quoted=False),
    _InlineRule(COMMAND_LINE_PATTERN, ScrapboxParser._build_command_line, head_only=True, on_quoted=False),
    _InlineRule(NUMBER_LIST_PATTERN, ScrapboxParser._build_number_list, head_only=True, on_quoted=False),
    _InlineRule(CODE_PATTERN, ScrapboxParser._build_code),
    _InlineRule(FORMULA_PATTERN, ScrapboxParser._build_formula),
    _InlineRule(BLANK_PATTERN, ScrapboxParser._build_blank, on_nested=False),
    _InlineRule(DECORATION_PATTERN, ScrapboxParser._build_decoration, on_nested=False),
    _InlineRule(STRONG_IMAGE_PATTERN, ScrapboxParser._build_strong_image, on_nested=False),
    _InlineRule(STRONG_ICON_PATTERN, ScrapboxParser._build_strong_icon, on_nested=False),
    _InlineRule(STRONG_PATTERN, ScrapboxParser._build_strong, on_nested=False),
    _InlineRule(IMAGE_PATTERN, ScrapboxParser._build_image),
    _InlineRule(EXTERNAL_LINK_PATTERN, ScrapboxParser._build_external_link),
    _InlineRule(ICON_PATTERN, ScrapboxParser._build_icon),
    _InlineRule(INTERNAL_LINK_PATTERN, ScrapboxParser._build_internal_link),
    _InlineRule(HASHTAG_PATTERN, ScrapboxParser._build_hashtag),
)
