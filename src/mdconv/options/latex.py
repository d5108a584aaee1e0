#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdconv/options/latex.py
"""Configuration options for LaTeX rendering."""

from __future__ import annotations

from dataclasses import dataclass, field

from mdconv.constants import (
    DEFAULT_LATEX_CODE_ENVIRONMENT,
    DEFAULT_LATEX_DOCUMENT_CLASS,
    DEFAULT_LATEX_INCLUDE_PREAMBLE,
    LATEX_PACKAGES,
    LatexCodeEnvironment,
)
from mdconv.options.base import BaseRendererOptions


@dataclass(frozen=True)
class LatexRendererOptions(BaseRendererOptions):
    r"""Configuration options for AST-to-LaTeX rendering.

    Parameters
    ----------
    include_preamble : bool, default False
        Emit ``\documentclass``, packages and ``\begin{document}``
    document_class : str, default "article"
        Document class used in the preamble
    packages : list of str
        Packages loaded in the preamble
    code_environment : {"verbatim", "lstlisting"}, default "verbatim"
        Environment used for code blocks. ``lstlisting`` passes the code
        block's language as the ``language`` option.

    """

    include_preamble: bool = field(
        default=DEFAULT_LATEX_INCLUDE_PREAMBLE,
        metadata={"help": "Generate a complete document with preamble", "importance": "core"},
    )
    document_class: str = field(
        default=DEFAULT_LATEX_DOCUMENT_CLASS,
        metadata={"help": "LaTeX document class", "importance": "advanced"},
    )
    packages: list[str] = field(
        default_factory=lambda: list(LATEX_PACKAGES),
        metadata={"help": "LaTeX packages to include in the preamble", "importance": "advanced"},
    )
    code_environment: LatexCodeEnvironment = field(
        default=DEFAULT_LATEX_CODE_ENVIRONMENT,
        metadata={"help": "Environment for code blocks", "choices": ["verbatim", "lstlisting"], "importance": "core"},
    )
