"""Protect namespaced storage tags (``<ac:...>``, ``<ri:...>``) during rendering.

Tags without attributes such as ``<ac:rich-text-body>`` look like autolinks
to the markdown renderer, so their colon is swapped for a sentinel before
parsing and swapped back afterwards.
"""

import re

COLON_SENTINEL = "---sf-COLON---"

_NAMESPACED_TAG_RE = re.compile(r"<(/?\S+?):(\S+?)>")


def escape_namespaced_tags(markdown: str) -> str:
    return _NAMESPACED_TAG_RE.sub(
        lambda match: f"<{match.group(1)}{COLON_SENTINEL}{match.group(2)}>",
        markdown,
    )


def restore_namespaced_tags(xhtml: str) -> str:
    return xhtml.replace(COLON_SENTINEL, ":")
