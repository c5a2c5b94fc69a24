#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/scrapbox2review/utils/encoding.py
"""Decoding of byte input with chardet-based encoding detection."""

from __future__ import annotations

import logging
from typing import IO, Union

import chardet

logger = logging.getLogger(__name__)

DEFAULT_FALLBACK_ENCODINGS = ["cp932", "euc-jp", "latin-1"]


def detect_encoding(data: bytes, sample_size: int = 8192, confidence_threshold: float = 0.7) -> str | None:
    """Detect the character encoding of ``data`` using chardet.

    Parameters
    ----------
    data : bytes
        Binary data to analyze
    sample_size : int, default 8192
        Number of leading bytes given to the detector
    confidence_threshold : float, default 0.7
        Minimum confidence required to trust the detection

    Returns
    -------
    str | None
        Detected encoding name, or None when detection is inconclusive

    """
    result = chardet.detect(data[:sample_size])
    encoding = result.get("encoding") if result else None
    if not encoding:
        logger.debug("chardet: No encoding detected")
        return None

    confidence = result.get("confidence") or 0.0
    logger.debug(f"chardet detected encoding: {encoding} (confidence: {confidence:.2f})")
    if confidence < confidence_threshold:
        logger.debug(f"chardet confidence {confidence:.2f} below threshold {confidence_threshold}")
        return None
    return encoding


def read_text_with_encoding_detection(data: bytes, fallback_encodings: list[str] | None = None) -> str:
    """Decode ``data`` as text.

    UTF-8 is tried first, dropping a leading byte order mark, then the
    chardet guess, then each fallback encoding; as a last resort
    undecodable bytes are replaced.

    Parameters
    ----------
    data : bytes
        Binary data to decode
    fallback_encodings : list[str] | None, default None
        Encodings tried in order after detection

    Returns
    -------
    str
        Decoded text

    """
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError:
        pass

    candidates: list[str] = []
    detected = detect_encoding(data)
    if detected:
        candidates.append(detected)
    candidates.extend(fallback_encodings or DEFAULT_FALLBACK_ENCODINGS)

    for encoding in candidates:
        try:
            return data.decode(encoding)
        except (UnicodeDecodeError, LookupError):
            logger.debug(f"Failed to decode input as {encoding}")

    return data.decode("utf-8", errors="replace")


def normalize_stream_to_text(stream: Union[IO[bytes], IO[str]]) -> str:
    """Read a text or binary stream to a string."""
    content = stream.read()
    if isinstance(content, bytes):
        return read_text_with_encoding_detection(content)
    return content
