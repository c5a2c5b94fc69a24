#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Scrapbox document tree nodes."""

from scrapbox2review.ast.nodes import (
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
    Node,
    NumberList,
    Plain,
    Quote,
    Strong,
    StrongIcon,
    StrongImage,
    Table,
    Title,
)

__all__ = [
    "Blank",
    "BlockNode",
    "Code",
    "CodeBlock",
    "CommandLine",
    "Decoration",
    "Formula",
    "HashTag",
    "Helpfeel",
    "Icon",
    "Image",
    "InlineNode",
    "Line",
    "Link",
    "Node",
    "NumberList",
    "Plain",
    "Quote",
    "Strong",
    "StrongIcon",
    "StrongImage",
    "Table",
    "Title",
]
