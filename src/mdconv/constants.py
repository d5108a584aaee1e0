#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the mdconv library.

Constants are organized by category:
1. Type Definitions - Literal types and type aliases
2. Markdown Parsing - GFM reader defaults
3. Rendering - Per-writer defaults
4. Interchange Format - Pandoc JSON constants
5. CLI - Exit codes
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

Alignment = Literal["left", "center", "right"]
TaskStatus = Literal["checked", "unchecked"]
OrderedDelimiter = Literal[".", ")"]
BulletSymbol = Literal["-", "*", "+"]
EmphasisSymbol = Literal["*", "_"]
CodeFenceChar = Literal["`", "~"]
LatexCodeEnvironment = Literal["lstlisting", "verbatim"]

# =============================================================================
# Markdown Parsing
# =============================================================================

DEFAULT_PARSE_FRONTMATTER = True
DEFAULT_PARSE_TABLES = True
DEFAULT_PARSE_TASK_LISTS = True
DEFAULT_PARSE_STRIKETHROUGH = True
DEFAULT_PARSE_AUTOLINKS = True
DEFAULT_PARSE_MENTIONS = True
DEFAULT_PARSE_ISSUE_REFERENCES = True
DEFAULT_PARSE_EMOJI = True

TAB_STOP = 4
MAX_HEADING_LEVEL = 6
MAX_ORDERED_START_DIGITS = 9
MAX_MENTION_LENGTH = 39
CODE_INDENT = 4

# =============================================================================
# Rendering
# =============================================================================

DEFAULT_MENTION_BASE_URL = "https://github.com/"
DEFAULT_ISSUE_BASE_URL: str | None = None

DEFAULT_BULLET_SYMBOL: BulletSymbol = "-"
DEFAULT_EMPHASIS_SYMBOL: EmphasisSymbol = "*"
DEFAULT_STRONG_SYMBOL: EmphasisSymbol = "*"
DEFAULT_CODE_FENCE_CHAR: CodeFenceChar = "`"
DEFAULT_CODE_FENCE_MIN = 3
DEFAULT_EMIT_FRONTMATTER = True

DEFAULT_HTML_STANDALONE = False
DEFAULT_HTML_TITLE = "Untitled"
DEFAULT_HTML_CLASS_PREFIX = ""

DEFAULT_LATEX_INCLUDE_PREAMBLE = False
DEFAULT_LATEX_DOCUMENT_CLASS = "article"
DEFAULT_LATEX_CODE_ENVIRONMENT: LatexCodeEnvironment = "verbatim"
LATEX_PACKAGES = ["hyperref", "graphicx", "ulem", "amssymb", "listings"]

DEFAULT_TYPST_INCLUDE_METADATA = True

DEFAULT_PLAINTEXT_BULLET = "*"
DEFAULT_PLAINTEXT_CELL_SEPARATOR = " | "
DEFAULT_PLAINTEXT_SHOW_LINK_URLS = True

DEFAULT_NATIVE_INDENT: int | None = None
DEFAULT_NATIVE_ENSURE_ASCII = False

# =============================================================================
# Interchange Format (Pandoc JSON)
# =============================================================================

PANDOC_API_VERSION = [1, 23, 1]
UNCHECKED_BOX = "☐"
CHECKED_BOX = "☒"

CLASS_URI = "uri"
CLASS_USER_MENTION = "user-mention"
CLASS_ISSUE_REFERENCE = "issue-reference"
CLASS_EMOJI = "emoji"
CLASS_ESCAPED = "escaped"

DEFAULT_NATIVE_STRICT_MODE = False

# =============================================================================
# CLI
# =============================================================================

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_UNRECOGNIZED_FORMAT = 2
EXIT_UNREADABLE_INPUT = 3
EXIT_PARSE_FAILURE = 4

DEFAULT_INPUT_FORMAT = "gfm"
DEFAULT_OUTPUT_FORMAT = "html"
