"""Leading H1 removal.

Pages already show their title, so a first-line H1 repeating it is dropped.
Operates on the whole document only; applied to single lines it would drop
every heading.
"""

import re

_LEADING_H1_RE = re.compile(r"\A#(?!#).*\n")


def drop_document_leading_h1(markdown: str) -> str:
    return _LEADING_H1_RE.sub("", markdown, count=1)
