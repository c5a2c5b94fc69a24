#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/scrapbox2review/renderers/base.py
"""Base classes for tree renderers.

This module defines the abstract base class that renderers inherit from.
The BaseRenderer provides a consistent interface for turning the parsed
block nodes into an output format.

"""

from __future__ import annotations

import io
from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, Sequence, Union, cast

from scrapbox2review.ast import BlockNode
from scrapbox2review.exceptions import InvalidOptionsError, OutputWriteError
from scrapbox2review.options.base import BaseRendererOptions

RendererOutput = Union[str, Path, IO[bytes], IO[str]]


class BaseRenderer(ABC):
    """Abstract base class for all tree renderers.

    Parameters
    ----------
    options : BaseRendererOptions or None, default = None
        Format-specific rendering options

    Examples
    --------
    Creating a custom renderer:

        >>> class PlainTextRenderer(BaseRenderer):
        ...     def render_to_string(self, blocks):
        ...         return "\\n".join(block.raw for block in blocks)

    """

    def __init__(self, options: BaseRendererOptions | None = None):
        """Initialize the renderer with optional configuration."""
        self.options = options

    @staticmethod
    def _validate_options_type(
        options: BaseRendererOptions | None, expected_type: type, renderer_name: str
    ) -> None:
        """Validate that options are of the correct type for this renderer.

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                converter_name=renderer_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    @abstractmethod
    def render_to_string(self, blocks: Sequence[BlockNode]) -> str:
        """Render block nodes to a string.

        Parameters
        ----------
        blocks : sequence of BlockNode
            Parsed document to render

        Returns
        -------
        str
            Rendered document

        """
        pass

    def render(self, blocks: Sequence[BlockNode], output: RendererOutput) -> None:
        """Render block nodes and write the result to ``output``.

        Parameters
        ----------
        blocks : sequence of BlockNode
            Parsed document to render
        output : str, Path, IO[bytes] or IO[str]
            File path or file-like object receiving the UTF-8 text

        """
        self.write_text_output(self.render_to_string(blocks), output)

    @staticmethod
    def write_text_output(text: str, output: RendererOutput) -> None:
        """Write rendered text to a path or a file-like object.

        Binary streams receive UTF-8 bytes, text streams receive ``str``.

        Raises
        ------
        OutputWriteError
            If the destination cannot be written
        TypeError
            If ``output`` is neither a path nor writable

        Examples
        --------
        Write to StringIO:
            >>> buffer = io.StringIO()
            >>> BaseRenderer.write_text_output("= Title\\n", buffer)
            >>> buffer.getvalue()
            '= Title\\n'

        """
        if isinstance(output, (str, Path)):
            output_path = Path(output)
            try:
                output_path.write_text(text, encoding="utf-8")
            except OSError as e:
                raise OutputWriteError(str(output_path), original_error=e) from e
            return

        if not hasattr(output, "write"):
            raise TypeError(f"Unsupported output type: {type(output)}")

        if isinstance(output, io.TextIOBase):
            is_binary_mode = False
        elif isinstance(output, (io.BufferedIOBase, io.RawIOBase)):
            is_binary_mode = True
        else:
            mode = getattr(output, "mode", "")
            is_binary_mode = isinstance(mode, str) and "b" in mode

        try:
            if is_binary_mode:
                cast(IO[bytes], output).write(text.encode("utf-8"))
            else:
                cast(IO[str], output).write(text)
        except OSError as e:
            raise OutputWriteError(str(getattr(output, "name", "<stream>")), original_error=e) from e
