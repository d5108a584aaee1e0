#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdconv/options/markdown.py
"""Configuration options for GFM parsing and rendering."""

from __future__ import annotations

from dataclasses import dataclass, field

from mdconv.constants import (
    DEFAULT_BULLET_SYMBOL,
    DEFAULT_CODE_FENCE_CHAR,
    DEFAULT_CODE_FENCE_MIN,
    DEFAULT_EMIT_FRONTMATTER,
    DEFAULT_EMPHASIS_SYMBOL,
    DEFAULT_PARSE_AUTOLINKS,
    DEFAULT_PARSE_EMOJI,
    DEFAULT_PARSE_FRONTMATTER,
    DEFAULT_PARSE_ISSUE_REFERENCES,
    DEFAULT_PARSE_MENTIONS,
    DEFAULT_PARSE_STRIKETHROUGH,
    DEFAULT_PARSE_TABLES,
    DEFAULT_PARSE_TASK_LISTS,
    DEFAULT_STRONG_SYMBOL,
    BulletSymbol,
    CodeFenceChar,
    EmphasisSymbol,
)
from mdconv.options.base import BaseParserOptions, BaseRendererOptions


@dataclass(frozen=True)
class MarkdownParserOptions(BaseParserOptions):
    """Configuration options for GFM-to-AST parsing.

    Each GFM extension can be switched off, leaving the affected syntax as
    literal text (or, for tables, as paragraphs).

    Parameters
    ----------
    parse_frontmatter : bool, default True
        Read a leading YAML front matter block into document metadata
    parse_tables : bool, default True
        Recognize pipe tables
    parse_task_lists : bool, default True
        Recognize ``[ ]``/``[x]`` task markers in list items
    parse_strikethrough : bool, default True
        Recognize ``~~strikethrough~~``
    parse_autolinks : bool, default True
        Recognize bare ``http(s)://``, ``ftp://`` and ``www.`` URLs
    parse_mentions : bool, default True
        Recognize ``@handle`` mentions
    parse_issue_references : bool, default True
        Recognize ``#123`` issue references
    parse_emoji : bool, default True
        Recognize ``:name:`` emoji shortcodes

    """

    parse_frontmatter: bool = field(
        default=DEFAULT_PARSE_FRONTMATTER,
        metadata={"help": "Parse YAML front matter into document metadata", "importance": "core"},
    )
    parse_tables: bool = field(
        default=DEFAULT_PARSE_TABLES,
        metadata={"help": "Parse GFM pipe tables", "importance": "core"},
    )
    parse_task_lists: bool = field(
        default=DEFAULT_PARSE_TASK_LISTS,
        metadata={"help": "Parse task list checkboxes", "importance": "core"},
    )
    parse_strikethrough: bool = field(
        default=DEFAULT_PARSE_STRIKETHROUGH,
        metadata={"help": "Parse ~~strikethrough~~ syntax", "importance": "core"},
    )
    parse_autolinks: bool = field(
        default=DEFAULT_PARSE_AUTOLINKS,
        metadata={"help": "Parse bare URLs as links", "importance": "advanced"},
    )
    parse_mentions: bool = field(
        default=DEFAULT_PARSE_MENTIONS,
        metadata={"help": "Parse @user mentions", "importance": "advanced"},
    )
    parse_issue_references: bool = field(
        default=DEFAULT_PARSE_ISSUE_REFERENCES,
        metadata={"help": "Parse #123 issue references", "importance": "advanced"},
    )
    parse_emoji: bool = field(
        default=DEFAULT_PARSE_EMOJI,
        metadata={"help": "Parse :emoji: shortcodes", "importance": "advanced"},
    )


@dataclass(frozen=True)
class MarkdownRendererOptions(BaseRendererOptions):
    """Configuration options for AST-to-GFM rendering.

    Parameters
    ----------
    bullet_symbol : {"-", "*", "+"}, default "-"
        Marker for bullet list items
    emphasis_symbol : {"*", "_"}, default "*"
        Delimiter for emphasis
    strong_symbol : {"*", "_"}, default "*"
        Delimiter for strong emphasis (doubled)
    code_fence_char : {"`", "~"}, default "`"
        Character for fenced code blocks
    code_fence_min : int, default 3
        Minimum fence length
    emit_frontmatter : bool, default True
        Write document metadata as YAML front matter

    """

    bullet_symbol: BulletSymbol = field(
        default=DEFAULT_BULLET_SYMBOL,
        metadata={"help": "Bullet list marker", "choices": ["-", "*", "+"], "importance": "core"},
    )
    emphasis_symbol: EmphasisSymbol = field(
        default=DEFAULT_EMPHASIS_SYMBOL,
        metadata={"help": "Emphasis delimiter", "choices": ["*", "_"], "importance": "core"},
    )
    strong_symbol: EmphasisSymbol = field(
        default=DEFAULT_STRONG_SYMBOL,
        metadata={"help": "Strong emphasis delimiter", "choices": ["*", "_"], "importance": "core"},
    )
    code_fence_char: CodeFenceChar = field(
        default=DEFAULT_CODE_FENCE_CHAR,
        metadata={"help": "Code fence character", "choices": ["`", "~"], "importance": "advanced"},
    )
    code_fence_min: int = field(
        default=DEFAULT_CODE_FENCE_MIN,
        metadata={"help": "Minimum code fence length", "type": int, "importance": "advanced"},
    )
    emit_frontmatter: bool = field(
        default=DEFAULT_EMIT_FRONTMATTER,
        metadata={"help": "Write document metadata as YAML front matter", "importance": "core"},
    )

    def __post_init__(self) -> None:
        """Validate option values.

        Raises
        ------
        ValueError
            If code_fence_min is less than 3

        """
        if self.code_fence_min < 3:
            raise ValueError(f"code_fence_min must be at least 3, got {self.code_fence_min}")
