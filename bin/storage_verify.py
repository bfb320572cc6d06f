"""Markdown -> Storage XHTML verification utilities.

Markdown is compiled to a storage format fragment and compared with an
expected fragment. Both sides are normalised with BeautifulSoup prettify
so formatting differences do not count.
"""

from __future__ import annotations

import difflib
from typing import Optional

from bs4 import BeautifulSoup

from md_to_storage import MacroLibrary, compile_markdown


def beautify_xhtml(xhtml: str) -> str:
    soup = BeautifulSoup(xhtml, "html.parser")
    return soup.prettify()


def xhtml_diff(a: str, b: str, label_a: str = "a", label_b: str = "b") -> list[str]:
    return list(
        difflib.unified_diff(
            a.splitlines(),
            b.splitlines(),
            fromfile=label_a,
            tofile=label_b,
            lineterm="",
        )
    )


def _normalize_xhtml(xhtml: str) -> str:
    lines = (line.strip() for line in beautify_xhtml(xhtml).splitlines())
    return "\n".join(line for line in lines if line)


def verify_markdown_against_storage(
    markdown: str,
    expected_xhtml: str,
    macros: Optional[MacroLibrary] = None,
) -> tuple[bool, str, str]:
    """Compile ``markdown`` and compare it with ``expected_xhtml``.

    Returns ``(passed, generated_xhtml, diff_report)``.
    """
    generated = compile_markdown(markdown, macros=macros)
    diff_lines = xhtml_diff(
        _normalize_xhtml(expected_xhtml),
        _normalize_xhtml(generated),
        label_a="expected.xhtml",
        label_b="generated.xhtml",
    )
    if not diff_lines:
        return True, generated, ""
    return False, generated, "\n".join(diff_lines)
