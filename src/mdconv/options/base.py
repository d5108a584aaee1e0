#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdconv/options/base.py
"""Base classes for parser and renderer options.

All options are frozen dataclasses; use ``create_updated`` to derive a
modified copy.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, replace
from typing import Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from mdconv.constants import DEFAULT_ISSUE_BASE_URL, DEFAULT_MENTION_BASE_URL


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class BaseRendererOptions(CloneFrozenMixin):
    """Base class for all renderer options.

    Parameters
    ----------
    mention_base_url : str or None, default "https://github.com/"
        Prefix joined with a handle to link ``@handle`` mentions. None renders
        mentions as plain text.
    issue_base_url : str or None, default None
        Prefix joined with the number to link ``#123`` references. None
        renders references as plain text.

    Notes
    -----
    Writers that can represent the shorthand natively (GFM) ignore both
    fields.

    """

    mention_base_url: str | None = field(
        default=DEFAULT_MENTION_BASE_URL,
        metadata={"help": "URL prefix for linking @mentions (None disables linking)", "importance": "advanced"},
    )
    issue_base_url: str | None = field(
        default=DEFAULT_ISSUE_BASE_URL,
        metadata={"help": "URL prefix for linking #issue references (None disables linking)", "importance": "advanced"},
    )

    def mention_url(self, handle: str) -> str | None:
        """Return the link target for a mention, or None when linking is off."""
        if not self.mention_base_url:
            return None
        return self.mention_base_url + handle

    def issue_url(self, number: int) -> str | None:
        """Return the link target for an issue reference, or None when linking is off."""
        if not self.issue_base_url:
            return None
        return f"{self.issue_base_url}{number}"


@dataclass(frozen=True)
class BaseParserOptions(CloneFrozenMixin):
    """Base class for all parser options.

    Parsers convert source documents into the AST representation.
    Subclasses define format-specific parsing options as frozen dataclass
    fields.
    """

    pass
