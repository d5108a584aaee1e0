"""Pytest configuration and shared fixtures for the mdconv test suite.

This module provides shared fixtures, test configuration, and the
Hypothesis profiles used by the property-based tests.
"""

import os

import pytest
from hypothesis import Phase, Verbosity, settings

from mdconv.ast import (
    BulletList,
    CodeBlock,
    Document,
    Emphasis,
    Heading,
    Link,
    ListItem,
    Paragraph,
    Strong,
    Table,
    TableCell,
    TableRow,
    Text,
)

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=20)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


@pytest.fixture
def sample_markdown() -> str:
    """Provide a markdown document touching most block constructs.

    Returns
    -------
    str
        Markdown source used across parser, renderer and round-trip tests.

    """
    return """---
title: Sample Document
author: Jane Doe
---

# Sample Document

This is a **sample document** with *italic text* and some `inline code`.
Thanks @octocat for fixing #42 :tada:

## Section 2

- Item 1
- Item 2
- [x] Finished task

1. First item
2. Second item

> A quoted line

```python
def hello_world():
    print("Hello, World!")
```

| Name | Score |
|:-----|------:|
| Ada | 10 |
| Bob |

---

See [the docs](https://example.com/docs "Docs") or <https://example.com>.
"""


@pytest.fixture
def sample_document() -> Document:
    """Provide a small hand-built document.

    Returns
    -------
    Document
        Document with a heading, a paragraph, a list, a code block and a table.

    """
    return Document(
        children=[
            Heading(level=1, content=[Text("Title")]),
            Paragraph(
                content=[
                    Text("Some "),
                    Strong(content=[Text("bold")]),
                    Text(" and "),
                    Emphasis(content=[Text("italic")]),
                    Text(" with a "),
                    Link(url="https://example.com", content=[Text("link")]),
                ]
            ),
            BulletList(
                items=[
                    ListItem(children=[Paragraph(content=[Text("one")])]),
                    ListItem(children=[Paragraph(content=[Text("two")])], task_status="unchecked"),
                ]
            ),
            CodeBlock(content="x = 1", language="python"),
            Table(
                alignments=["left", None],
                header=TableRow(cells=[TableCell(content=[Text("A")]), TableCell(content=[Text("B")])]),
                rows=[TableRow(cells=[TableCell(content=[Text("1")]), TableCell(content=[])])],
            ),
        ],
        metadata={"title": "Title"},
    )
