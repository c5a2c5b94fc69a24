#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/scrapbox2review/utils/escape.py
r"""Re:VIEW escaping utilities.

Re:VIEW inline commands look like ``@<cmd>{content}`` and block commands like
``//cmd[option]{``. User text embedded in them must not close the command
early:

- inside ``{...}`` an unescaped ``}`` ends the command, and a trailing
  backslash would escape the command's own closing brace;
- inside ``@<href>{url, text}`` a comma separates the arguments;
- inside ``[...]`` an unescaped ``]`` ends the block option.

Each function is applied exactly once to a value at the point where it is
embedded into a command.

"""

from __future__ import annotations

import re

_TRAILING_BACKSLASH = re.compile(r"\\\Z")


def escape_inline_command(content: str) -> str:
    r"""Escape text for the body of a Re:VIEW inline command.

    Every ``}`` becomes ``\}`` and a trailing backslash is doubled.

    Parameters
    ----------
    content : str
        Text placed between ``{`` and ``}``

    Returns
    -------
    str
        Escaped text

    Examples
    --------
        >>> escape_inline_command("Bold{}{}\\")
        'Bold{\\}{\\}\\\\'

    """
    return _TRAILING_BACKSLASH.sub(r"\\\\", content.replace("}", "\\}"), count=1)


def escape_href(href: str) -> str:
    r"""Escape one argument of ``@<href>{url, text}``.

    Applies :func:`escape_inline_command`, then escapes every ``,``.

    Examples
    --------
        >>> escape_href("https://example.com/a,{}")
        'https://example.com/a\\,{\\}'

    """
    return escape_inline_command(href).replace(",", "\\,")


def escape_block_option(option: str) -> str:
    r"""Escape a ``[...]`` option of a Re:VIEW block command.

    Examples
    --------
        >>> escape_block_option("a.js[]")
        'a.js[\\]'

    """
    return option.replace("]", "\\]")
