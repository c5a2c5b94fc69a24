#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for scrapbox2review.

This module centralizes the hardcoded values, fixed literals and default
configuration constants used across the package.

Constants are organized by category:
1. Type Definitions - Literal types shared by nodes and options
2. Parser Defaults - Scrapbox source handling
3. Renderer Defaults - Re:VIEW output settings
4. CLI and Configuration - Config discovery and exit codes
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

LinkPathType = Literal["relative", "root", "absolute"]
IconPathType = Literal["relative", "root"]
ItemizationType = Literal["normal", "number"]
DiagnosticLevel = Literal["error", "warning"]

# =============================================================================
# Parser Defaults
# =============================================================================

DEFAULT_HAS_TITLE = True

# Characters allowed in a decoration mark run, e.g. ``[*/- text]``
DECORATION_CHARS = "*!\"#%&'()+,-./{|}<>_~"

# Scrapbox caps the asterisk count of a decoration at this value (``*-10``)
MAX_DECORATION_ASTERISKS = 10

IMAGE_EXTENSIONS = ("png", "jpg", "jpeg", "gif", "svg", "webp")

# =============================================================================
# Renderer Defaults
# =============================================================================

DEFAULT_BASE_HEADING_LEVEL = 3

# Origin used to resolve root links such as ``[/project/page]``
DEFAULT_LINK_BASE_URL = "https://scrapbox.io"

# Separator between the header row and body rows of an //emtable block
TABLE_HEADER_BORDER = "------------"

ICON_SUFFIX = ".icon"

# =============================================================================
# CLI and Configuration
# =============================================================================

CONFIG_ENV_VAR = "SCRAPBOX2REVIEW_CONFIG"
CONFIG_FILENAMES = [
    ".scrapbox2review.toml",
    ".scrapbox2review.yaml",
    ".scrapbox2review.yml",
    ".scrapbox2review.json",
]
PYPROJECT_TOOL_SECTION = "scrapbox2review"

EXIT_SUCCESS = 0
EXIT_DIAGNOSTICS = 1
EXIT_VALIDATION_ERROR = 2
EXIT_FILE_ERROR = 3
