#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/scrapbox2review/parsers/base.py
"""Base class for source parsers.

A parser turns source markup into the list of block nodes consumed by the
renderers. ``BaseParser`` provides options validation and loading of the
supported input types.

"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, Union

from scrapbox2review.ast import BlockNode
from scrapbox2review.exceptions import FileError, FileNotFoundError, InvalidOptionsError
from scrapbox2review.options.base import BaseParserOptions
from scrapbox2review.utils.encoding import normalize_stream_to_text, read_text_with_encoding_detection

logger = logging.getLogger(__name__)

ParserInput = Union[str, Path, bytes, IO[bytes], IO[str]]


class BaseParser(ABC):
    """Abstract base class for all source parsers.

    Parameters
    ----------
    options : BaseParserOptions or None, default = None
        Format-specific parsing options

    """

    def __init__(self, options: BaseParserOptions | None = None):
        """Initialize the parser with optional configuration."""
        self.options: BaseParserOptions | None = options

    @staticmethod
    def _validate_options_type(options: BaseParserOptions | None, expected_type: type, parser_name: str) -> None:
        """Validate that options are of the correct type for this parser.

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                converter_name=parser_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    @abstractmethod
    def parse(self, input_data: ParserInput) -> list[BlockNode]:
        """Parse the input into block nodes.

        Parameters
        ----------
        input_data : str, Path, bytes or IO
            Source to parse. A ``str`` is always treated as source text;
            use ``Path`` to read a file.

        Returns
        -------
        list of BlockNode
            Block nodes in document order

        """
        pass

    @staticmethod
    def _load_text_content(input_data: ParserInput) -> str:
        """Load source text from any supported input type.

        Raises
        ------
        FileNotFoundError
            If a ``Path`` input does not exist
        FileError
            If a ``Path`` input cannot be read

        """
        if isinstance(input_data, str):
            return input_data
        if isinstance(input_data, bytes):
            return read_text_with_encoding_detection(input_data)
        if isinstance(input_data, Path):
            if not input_data.is_file():
                raise FileNotFoundError(str(input_data))
            try:
                data = input_data.read_bytes()
            except OSError as e:
                raise FileError(f"Cannot read file: {input_data}", file_path=str(input_data), original_error=e) from e
            logger.debug(f"Read {len(data)} bytes from {input_data}")
            return read_text_with_encoding_detection(data)
        return normalize_stream_to_text(input_data)
