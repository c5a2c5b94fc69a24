#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/scrapbox2review/ast/nodes.py
"""Node classes for the Scrapbox document tree.

A parsed page is an ordered list of block nodes. Block nodes are one of
``Title``, ``Line``, ``CodeBlock`` or ``Table``; lines and table cells are
decomposed into inline nodes.

Every node class carries a ``type`` tag matching the Scrapbox node kind
(``"line"``, ``"numberList"``, ...) and a ``raw`` field with the source slice
it was parsed from. The renderer dispatches on the node class in a fixed
order and falls back to ``raw`` for constructs it cannot convert.

Node Hierarchy
--------------
Block-level nodes:
    - Title, Line, CodeBlock, Table

Inline nodes:
    - Plain, Blank, Strong, Decoration, Code, CommandLine, Formula
    - Image, StrongImage, Icon, StrongIcon, Link, HashTag
    - NumberList, Quote, Helpfeel

"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Optional, Union

from scrapbox2review.constants import IconPathType, LinkPathType


class Node:
    """Base class for all Scrapbox nodes.

    Attributes
    ----------
    type : str
        Node kind tag, fixed per subclass
    raw : str
        Original source text of the node

    """

    type: ClassVar[str]
    raw: str


# ============================================================================
# Inline Nodes
# ============================================================================


@dataclass
class Plain(Node):
    """Plain text without markup."""

    type: ClassVar[str] = "plain"

    text: str
    raw: str = ""


@dataclass
class Blank(Node):
    """Whitespace wrapped in brackets, e.g. ``[ ]``.

    Parameters
    ----------
    text : str
        The whitespace between the brackets

    """

    type: ClassVar[str] = "blank"

    text: str
    raw: str = ""


@dataclass
class Strong(Node):
    """Double-bracket emphasis, ``[[text]]``."""

    type: ClassVar[str] = "strong"

    nodes: list[InlineNode] = field(default_factory=list)
    raw: str = ""


@dataclass
class Decoration(Node):
    """Decorated text such as ``[** heading]`` or ``[/ italic]``.

    Parameters
    ----------
    raw_decos : str
        The mark run exactly as written, e.g. ``"**/-"``
    decos : list of str
        Normalized marks: each distinct non-asterisk mark in order of first
        appearance, followed by ``"*-N"`` for N asterisks
    nodes : list of InlineNode
        Decorated content

    """

    type: ClassVar[str] = "decoration"

    raw_decos: str
    decos: list[str] = field(default_factory=list)
    nodes: list[InlineNode] = field(default_factory=list)
    raw: str = ""


@dataclass
class Code(Node):
    """Inline code, ``` `text` ```."""

    type: ClassVar[str] = "code"

    text: str
    raw: str = ""


@dataclass
class CommandLine(Node):
    """Shell command line starting with ``$`` or ``%``."""

    type: ClassVar[str] = "commandLine"

    symbol: str
    text: str
    raw: str = ""


@dataclass
class Formula(Node):
    """TeX formula, ``[$ formula]``."""

    type: ClassVar[str] = "formula"

    formula: str
    raw: str = ""


@dataclass
class Image(Node):
    """Image reference, ``[https://example.com/a.png]``.

    Parameters
    ----------
    src : str
        Image URL
    link : str
        Optional URL the image links to, empty when absent

    """

    type: ClassVar[str] = "image"

    src: str
    link: str = ""
    raw: str = ""


@dataclass
class StrongImage(Node):
    """Enlarged image, ``[[https://example.com/a.png]]``."""

    type: ClassVar[str] = "strongImage"

    src: str
    raw: str = ""


@dataclass
class Icon(Node):
    """Page icon, ``[name.icon]`` or ``[/project/name.icon]``."""

    type: ClassVar[str] = "icon"

    path: str
    path_type: IconPathType = "relative"
    raw: str = ""


@dataclass
class StrongIcon(Node):
    """Enlarged page icon, ``[[name.icon]]``."""

    type: ClassVar[str] = "strongIcon"

    path: str
    path_type: IconPathType = "relative"
    raw: str = ""


@dataclass
class Link(Node):
    """Link to a page or an external URL.

    Parameters
    ----------
    path_type : {"relative", "root", "absolute"}
        ``relative`` for a page of the same project, ``root`` for
        ``/project/page`` references, ``absolute`` for URLs
    href : str
        Link target as written
    content : str
        Display text, empty when the link has none

    """

    type: ClassVar[str] = "link"

    path_type: LinkPathType
    href: str
    content: str = ""
    raw: str = ""


@dataclass
class HashTag(Node):
    """Hash tag, ``#tag``."""

    type: ClassVar[str] = "hashTag"

    href: str
    raw: str = ""


@dataclass
class NumberList(Node):
    """Numbered line such as ``1. text``.

    Parameters
    ----------
    number : int
        The number as written
    nodes : list of InlineNode
        Content after the ``N.`` marker

    """

    type: ClassVar[str] = "numberList"

    number: int
    nodes: list[InlineNode] = field(default_factory=list)
    raw: str = ""


@dataclass
class Quote(Node):
    """Quoted line, ``>text``."""

    type: ClassVar[str] = "quote"

    nodes: list[InlineNode] = field(default_factory=list)
    raw: str = ""


@dataclass
class Helpfeel(Node):
    """Helpfeel notation, ``? text``."""

    type: ClassVar[str] = "helpfeel"

    text: str
    raw: str = ""


InlineNode = Union[
    Plain,
    Blank,
    Strong,
    Decoration,
    Code,
    CommandLine,
    Formula,
    Image,
    StrongImage,
    Icon,
    StrongIcon,
    Link,
    HashTag,
    NumberList,
    Quote,
    Helpfeel,
]


# ============================================================================
# Block-level Nodes
# ============================================================================


@dataclass
class Title(Node):
    """Page title, the first line of a page."""

    type: ClassVar[str] = "title"

    text: str
    raw: str = ""


@dataclass
class Line(Node):
    """A single source line.

    Parameters
    ----------
    indent : int
        Number of leading indentation characters
    nodes : list of InlineNode
        Inline content after the indentation
    line_number : int or None, default None
        1-based line number in the source

    """

    type: ClassVar[str] = "line"

    indent: int = 0
    nodes: list[InlineNode] = field(default_factory=list)
    raw: str = ""
    line_number: Optional[int] = None


@dataclass
class CodeBlock(Node):
    """Code block introduced by ``code:<file name>``.

    Parameters
    ----------
    indent : int
        Indentation of the ``code:`` header line
    file_name : str
        Text after ``code:``
    content : str
        Body lines with the block indentation removed, joined by newlines

    """

    type: ClassVar[str] = "codeBlock"

    indent: int
    file_name: str
    content: str = ""
    raw: str = ""
    line_number: Optional[int] = None


@dataclass
class Table(Node):
    """Table introduced by ``table:<label>``.

    Parameters
    ----------
    indent : int
        Indentation of the ``table:`` header line
    file_name : str
        Label after ``table:``
    cells : list of rows
        Each row is a list of cells, each cell a list of inline nodes

    """

    type: ClassVar[str] = "table"

    indent: int
    file_name: str
    cells: list[list[list[InlineNode]]] = field(default_factory=list)
    raw: str = ""
    line_number: Optional[int] = None


BlockNode = Union[Title, Line, CodeBlock, Table]
