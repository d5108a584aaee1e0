#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdconv/renderers/base.py
"""Base classes for AST renderers.

This module defines the abstract base class that all writers inherit from.
Writers are pure: a renderer instance holds only its options between calls,
and every ``render_to_string`` call starts from fresh per-call state.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, Union

from mdconv.ast import Document
from mdconv.ast.nodes import Node
from mdconv.exceptions import InvalidOptionsError
from mdconv.options.base import BaseRendererOptions
from mdconv.utils.io_utils import write_content


class BaseRenderer(ABC):
    """Abstract base class for all AST renderers.

    Parameters
    ----------
    options : BaseRendererOptions or None, default = None
        Format-specific rendering options

    Examples
    --------
    Creating a custom renderer:

        >>> from mdconv.renderers.base import BaseRenderer
        >>> from mdconv.ast import Document
        >>>
        >>> class CountingRenderer(BaseRenderer):
        ...     def render_to_string(self, doc):
        ...         return str(len(doc.children))

    """

    def __init__(self, options: BaseRendererOptions | None = None):
        """Initialize the renderer with optional configuration."""
        self.options = options

    @abstractmethod
    def render_to_string(self, doc: Document) -> str:
        """Render the AST to a string.

        Parameters
        ----------
        doc : Document
            AST Document node to render

        Returns
        -------
        str
            Rendered document

        """
        raise NotImplementedError

    def render(self, doc: Document, output: Union[str, Path, IO[bytes], IO[str]]) -> None:
        """Render the AST and write it to a path or stream.

        The document is rendered completely before anything is written.

        Parameters
        ----------
        doc : Document
            AST Document node to render
        output : str, Path, IO[bytes] or IO[str]
            Output destination

        Raises
        ------
        RenderingError
            If the destination cannot be written

        """
        self.write_text_output(self.render_to_string(doc), output)

    @staticmethod
    def _validate_options_type(options: BaseRendererOptions | None, expected_type: type, renderer_name: str) -> None:
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

    @staticmethod
    def write_text_output(text: str, output: Union[str, Path, IO[bytes], IO[str]]) -> None:
        """Write text output to a file path or IO stream.

        Examples
        --------
        Write to StringIO:
            >>> from io import StringIO
            >>> buffer = StringIO()
            >>> BaseRenderer.write_text_output("# Hello", buffer)
            >>> print(buffer.getvalue())
            # Hello

        """
        write_content(text, output)


class InlineContentMixin:
    """Mixin providing inline content rendering for text-based renderers.

    The implementing class must have an ``_output`` attribute (list[str])
    that its visitor methods append to.

    Examples
    --------
        >>> class MyRenderer(NodeVisitor, InlineContentMixin, BaseRenderer):
        ...     def visit_emphasis(self, node):
        ...         content = self._render_inline_content(node.content)
        ...         self._output.append(f"*{content}*")

    """

    _output: list[str]

    def _render_inline_content(self, content: list[Node]) -> str:
        """Render a list of inline nodes to text.

        Output produced while rendering ``content`` is captured and returned
        instead of being appended to the enclosing output.
        """
        saved_output = self._output
        self._output = []

        for node in content:
            node.accept(self)

        result = "".join(self._output)
        self._output = saved_output
        return result

    def _render_blocks(self, blocks: list[Node]) -> list[str]:
        """Render block nodes individually, returning one string per block."""
        rendered = []
        for block in blocks:
            saved_output = self._output
            self._output = []
            block.accept(self)
            rendered.append("".join(self._output))
            self._output = saved_output
        return rendered
