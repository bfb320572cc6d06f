"""Emit Confluence Storage XHTML from parsed blocks."""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import groupby
import logging
from operator import attrgetter
import re
from typing import Optional

from .info_string import parse_info_string
from .inline import convert_heading_inline, convert_inline
from .parser import Block, HEADING_PATTERN, parse_markdown
from .templates import MacroLibrary

_module_logger = logging.getLogger(__name__)

_LIST_ITEM_PATTERN = re.compile(r"^( *)(?:(\d+)\.|[-*+])\s+(.*)$")
_ALIGN_PATTERN = re.compile(r"^(:?)-+(:?)$")
_ALIGNMENTS = {(True, True): "center", (True, False): "left", (False, True): "right"}
_CLOSING_HASHES_PATTERN = re.compile(r"\s+#+\s*$")

CODE_BLOCK_TEMPLATE = "code-block"


@dataclass
class _ListItem:
    ordered: bool
    depth: int
    text: str
    children: list["_ListItem"] = field(default_factory=list)


def emit_block(block: Block, context: Optional[dict] = None) -> str:
    """Emit XHTML for a single block."""
    if context is None:
        context = {}

    if block.type in {"frontmatter", "empty"}:
        return ""

    if block.type == "heading":
        match = HEADING_PATTERN.match(block.content.strip())
        if not match:
            return ""
        heading_text = _CLOSING_HASHES_PATTERN.sub("", match.group(2))
        return f"<h{block.level}>{convert_heading_inline(heading_text)}</h{block.level}>"

    if block.type == "paragraph":
        paragraph_text = _join_paragraph_lines(block.content)
        if not paragraph_text:
            return "<p />"
        return f"<p>{convert_inline(paragraph_text)}</p>"

    if block.type == "code_block":
        return _emit_code_block(block, context)

    if block.type == "list":
        return _emit_list(block.content)

    if block.type == "hr":
        return "<hr />"

    if block.type == "html_block":
        return _emit_html_block(block.content)

    if block.type == "table":
        return _emit_markdown_table(block.content)

    if block.type == "blockquote":
        return _emit_blockquote(block.content, context)

    # unknown kinds render as nothing; the walk continues with the next block
    _get_logger(context).debug(f"No storage format emitter for block type {block.type!r}")
    return ""


def emit_document(
    blocks: list[Block],
    macros: Optional[MacroLibrary] = None,
    logger: Optional[logging.Logger] = None,
) -> str:
    """Emit XHTML for a full markdown document."""
    context: dict[str, object] = {
        "macros": macros or MacroLibrary(),
        "logger": logger or _module_logger,
    }
    return "".join(emit_block(block, context=context) for block in blocks)


def _get_logger(context: dict) -> logging.Logger:
    return context.get("logger") or _module_logger


def _emit_code_block(block: Block, context: dict) -> str:
    logger = _get_logger(context)
    macros = context.get("macros") or MacroLibrary()

    logger.debug(f"Rendering code block with info string {block.info!r}")
    info = parse_info_string(block.info, logger)
    return macros.render(
        CODE_BLOCK_TEMPLATE,
        language=info.language,
        collapse=info.collapse,
        theme=info.theme,
        title=info.title,
        text=block.attrs["text"],
    )


def _join_paragraph_lines(content: str) -> str:
    lines = [line.strip() for line in content.splitlines() if line.strip()]
    return " ".join(lines)


def _emit_list(content: str) -> str:
    return _render_list_items(_nest_list_items(_scan_list_items(content)))


def _scan_list_items(content: str) -> list[_ListItem]:
    items: list[_ListItem] = []
    for line in content.splitlines():
        if not line.strip():
            continue
        match = _LIST_ITEM_PATTERN.match(line.expandtabs(4))
        if match:
            indent, number, text = match.groups()
            items.append(
                _ListItem(ordered=number is not None, depth=len(indent) // 2, text=text.strip())
            )
        elif items:
            # lazy continuation line
            items[-1].text += " " + line.strip()
    return items


def _nest_list_items(items: list[_ListItem]) -> list[_ListItem]:
    roots: list[_ListItem] = []
    for item in items:
        siblings = roots
        while siblings and siblings[-1].depth < item.depth:
            siblings = siblings[-1].children
        siblings.append(item)
    return roots


def _render_list_items(items: list[_ListItem]) -> str:
    # consecutive items of one kind share a list element
    parts: list[str] = []
    for ordered, run in groupby(items, key=attrgetter("ordered")):
        tag = "ol" if ordered else "ul"
        body = "".join(
            f"<li><p>{convert_inline(item.text)}</p>{_render_list_items(item.children)}</li>"
            for item in run
        )
        parts.append(f"<{tag}>{body}</{tag}>")
    return "".join(parts)


def _emit_markdown_table(content: str) -> str:
    header, delimiter, *body = (
        _split_table_row(line) for line in content.splitlines() if line.strip()
    )
    aligns = [_column_alignment(cell) for cell in delimiter]
    rows = [_render_table_row(header, "th", aligns)]
    rows.extend(_render_table_row(cells, "td", aligns) for cells in body)
    return f"<table><tbody>{''.join(rows)}</tbody></table>"


def _split_table_row(line: str) -> list[str]:
    return [cell.strip() for cell in line.strip().strip("|").split("|")]


def _column_alignment(delimiter: str) -> str:
    match = _ALIGN_PATTERN.match(delimiter.strip())
    if not match:
        return ""
    return _ALIGNMENTS.get((bool(match.group(1)), bool(match.group(2))), "")


def _render_table_row(cells: list[str], tag: str, aligns: list[str]) -> str:
    rendered = []
    for idx, cell in enumerate(cells):
        align = aligns[idx] if idx < len(aligns) else ""
        style = f' style="text-align: {align}"' if align else ""
        rendered.append(f"<{tag}{style}><p>{convert_inline(cell)}</p></{tag}>")
    return f"<tr>{''.join(rendered)}</tr>"


def _emit_html_block(content: str) -> str:
    stripped = content.strip()
    if stripped in {"<p></p>", "<p/>", "<p />"}:
        return "<p />"
    return stripped


def _emit_blockquote(content: str, context: dict) -> str:
    stripped_lines: list[str] = []
    for line in content.splitlines():
        line = line.lstrip()
        if line.startswith(">"):
            line = line[1:]
            if line.startswith(" "):
                line = line[1:]
        stripped_lines.append(line)

    inner = "\n".join(stripped_lines).strip()
    if not inner:
        return "<blockquote><p /></blockquote>"

    body = "".join(emit_block(child, context=context) for child in parse_markdown(inner))
    return f"<blockquote>{body}</blockquote>"
