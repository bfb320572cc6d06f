"""Inline markdown -> XHTML conversion helpers."""

from __future__ import annotations

import html as html_module
import re

_CODE_SPAN_RE = re.compile(r"`([^`]+)`")
_IMAGE_RE = re.compile(r"!\[([^\]]*)\]\(([^)\s]+)\)")
_LINK_RE = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")
_BOLD_ITALIC_RE = re.compile(r"\*\*\*(.+?)\*\*\*")
_BOLD_RE = re.compile(r"\*\*(.+?)\*\*")
_ITALIC_RE = re.compile(r"(?<!\*)\*(?!\*)(.+?)(?<!\*)\*(?!\*)")
_STRIKETHROUGH_RE = re.compile(r"~~(.+?)~~")
_BR_TAG_RE = re.compile(r"<br\s*/?>", flags=re.IGNORECASE)
_BACKSLASH_BREAK_RE = re.compile(r"\\\n")
_PLACEHOLDER_RE = re.compile(r"\x00CODE(\d+)\x00")
# raw inline markup kept as-is: tags (namespaced ones arrive with the colon escaped) and comments
_RAW_TAG_RE = re.compile(r"<(?:/?[A-Za-z][\w:.-]*(?:\s[^<>]*)?/?|!--.*?--)>")
_BARE_AMPERSAND_RE = re.compile(r"&(?!#\d+;|#[xX][0-9a-fA-F]+;|[A-Za-z][A-Za-z0-9]*;)")


def convert_inline(text: str) -> str:
    """Convert inline markdown syntax to XHTML.

    Supported syntax:
    - `code`
    - ***bold italic***, **bold**, *italic*, ~~strikethrough~~
    - [text](url) and ![alt](src)
    - <br> and backslash line breaks

    Plain text is XML-escaped; raw inline tags and existing entities pass through.
    """
    placeholders: list[str] = []

    def _stash_code(match: re.Match[str]) -> str:
        placeholders.append(match.group(1))
        return f"\x00CODE{len(placeholders) - 1}\x00"

    converted = _CODE_SPAN_RE.sub(_stash_code, text)
    converted = _escape_text(converted)
    converted = _BOLD_ITALIC_RE.sub(r"<strong><em>\1</em></strong>", converted)
    converted = _BOLD_RE.sub(r"<strong>\1</strong>", converted)
    converted = _ITALIC_RE.sub(r"<em>\1</em>", converted)
    converted = _STRIKETHROUGH_RE.sub(r"<del>\1</del>", converted)
    converted = _convert_images(converted)
    converted = _convert_links(converted)
    converted = _BR_TAG_RE.sub("<br />", converted)
    converted = _BACKSLASH_BREAK_RE.sub("<br />", converted)

    def _restore_code(match: re.Match[str]) -> str:
        idx = int(match.group(1))
        return f"<code>{html_module.escape(placeholders[idx], quote=False)}</code>"

    return _PLACEHOLDER_RE.sub(_restore_code, converted)


def _escape_text(text: str) -> str:
    """Escape ``&`` and stray ``<`` outside of raw inline tags."""
    parts: list[str] = []
    pos = 0
    for match in _RAW_TAG_RE.finditer(text):
        parts.append(_escape_segment(text[pos:match.start()]))
        parts.append(match.group(0))
        pos = match.end()
    parts.append(_escape_segment(text[pos:]))
    return "".join(parts)


def convert_heading_inline(text: str) -> str:
    """Convert heading inline text while stripping bold markers.

    Confluence renders headings bold already, so strong tags are not emitted.
    """
    return convert_inline(_BOLD_RE.sub(r"\1", text))


def _escape_segment(segment: str) -> str:
    return _BARE_AMPERSAND_RE.sub("&amp;", segment).replace("<", "&lt;")


def _escape_attr(value: str) -> str:
    # text is already escaped by the time links and images are converted
    return value.replace("<", "&lt;").replace('"', "&quot;")


def _convert_images(text: str) -> str:
    def _replace_image(match: re.Match[str]) -> str:
        alt = match.group(1)
        src = match.group(2)
        alt_attr = f' ac:alt="{_escape_attr(alt)}"' if alt else ""
        return f'<ac:image{alt_attr}><ri:url ri:value="{_escape_attr(src)}" /></ac:image>'

    return _IMAGE_RE.sub(_replace_image, text)


def _convert_links(text: str) -> str:
    def _replace_link(match: re.Match[str]) -> str:
        link_text = match.group(1)
        href = _escape_attr(match.group(2).strip())
        return f'<a href="{href}">{link_text}</a>'

    return _LINK_RE.sub(_replace_link, text)
