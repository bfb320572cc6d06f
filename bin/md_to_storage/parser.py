"""Parser for converting markdown text to block objects."""

from dataclasses import dataclass, field
import re
from typing import Optional


HEADING_PATTERN = re.compile(r"^(#{1,6})\s+(.*)$")
_HR_PATTERN = re.compile(r"^(?:(?:-\s*){3,}|(?:\*\s*){3,}|(?:_\s*){3,})$")
_LIST_ORDERED_PATTERN = re.compile(r"^\d+\.\s+")
_LIST_UNORDERED_PATTERN = re.compile(r"^[-*+]\s+")
_TABLE_DELIMITER_PATTERN = re.compile(r"^\|?\s*:?-+:?\s*(\|\s*:?-+:?\s*)*\|?$")
_FENCE_PATTERN = re.compile(r"^(`{3,}|~{3,})(.*)$")


@dataclass
class Block:
    """Single parsed block from a markdown document.

    ``type`` is one of: frontmatter, empty, heading, code_block, hr, list,
    table, blockquote, html_block, paragraph.
    """

    type: str
    content: str
    level: int = 0
    info: str = ""
    children: list["Block"] = field(default_factory=list)
    attrs: dict = field(default_factory=dict)


def parse_markdown(text: str) -> list[Block]:
    """Parse markdown text into block objects."""
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines = lines[:-1]

    blocks: list[Block] = []
    i = 0
    n = len(lines)

    while i < n:
        line = lines[i]

        frontmatter_block = _parse_frontmatter(lines, i)
        if frontmatter_block:
            block, i = frontmatter_block
            blocks.append(block)
            continue

        if line.strip() == "":
            blocks.append(Block(type="empty", content="\n"))
            i += 1
            continue

        heading = _parse_heading(line)
        if heading:
            blocks.append(heading)
            i += 1
            continue

        if _fence_of(line):
            block, i = _parse_code_block(lines, i)
            blocks.append(block)
            continue

        if _HR_PATTERN.match(line.strip()):
            blocks.append(Block(type="hr", content=line + "\n"))
            i += 1
            continue

        if _is_list_line(line):
            block, i = _parse_list_block(lines, i)
            blocks.append(block)
            continue

        if _is_table_start(lines, i):
            block, i = _parse_table_block(lines, i)
            blocks.append(block)
            continue

        if _is_blockquote_line(line):
            block, i = _parse_blockquote(lines, i)
            blocks.append(block)
            continue

        if _is_html_block_start(line):
            block, i = _parse_html_block(lines, i)
            blocks.append(block)
            continue

        block, i = _parse_paragraph(lines, i)
        blocks.append(block)

    return blocks


def _parse_frontmatter(lines: list[str], start: int) -> Optional[tuple[Block, int]]:
    if start != 0 or lines[start] != "---":
        return None

    i = start + 1
    while i < len(lines) and lines[i] != "---":
        i += 1

    if i >= len(lines):
        return None

    end = i + 1
    content = "\n".join(lines[start:end]) + "\n"
    return Block(type="frontmatter", content=content), end


def _parse_heading(line: str) -> Optional[Block]:
    match = HEADING_PATTERN.match(line)
    if not match:
        return None

    hashes = match.group(1)
    return Block(type="heading", content=line + "\n", level=len(hashes))


def _fence_of(line: str) -> str:
    """Return the opening fence run of ``line``, or "" if it opens no code block."""
    match = _FENCE_PATTERN.match(line)
    if not match:
        return ""
    fence, info = match.groups()
    # a backtick fence cannot carry backticks in its info string
    if fence.startswith("`") and "`" in info:
        return ""
    return fence


def _closes_fence(line: str, fence: str) -> bool:
    run = line.rstrip()
    return len(run) >= len(fence) and run == fence[0] * len(run)


def _parse_code_block(lines: list[str], start: int) -> tuple[Block, int]:
    first_line = lines[start]
    fence = _fence_of(first_line)
    info = first_line[len(fence):].strip()

    i = start + 1
    while i < len(lines) and not _closes_fence(lines[i], fence):
        i += 1

    body = lines[start + 1 : i]
    if i < len(lines):
        i += 1

    content = "\n".join(lines[start:i]) + "\n"
    # literal body without the trailing newline
    text = "\n".join(body)
    return Block(type="code_block", content=content, info=info, attrs={"text": text}), i


def _parse_list_block(lines: list[str], start: int) -> tuple[Block, int]:
    i = start + 1
    while i < len(lines):
        current = lines[i]
        if current == "":
            if i + 1 < len(lines) and _is_list_continuation(lines[i + 1]):
                i += 1
                continue
            break

        if not _is_list_continuation(current):
            break

        i += 1

    content = "\n".join(lines[start:i]) + "\n"
    return Block(type="list", content=content), i


def _parse_table_block(lines: list[str], start: int) -> tuple[Block, int]:
    i = start + 2
    while i < len(lines) and lines[i].lstrip().startswith("|"):
        i += 1

    content = "\n".join(lines[start:i]) + "\n"
    return Block(type="table", content=content), i


def _parse_blockquote(lines: list[str], start: int) -> tuple[Block, int]:
    i = start + 1
    while i < len(lines) and _is_blockquote_line(lines[i]):
        i += 1

    content = "\n".join(lines[start:i]) + "\n"
    return Block(type="blockquote", content=content), i


def _parse_html_block(lines: list[str], start: int) -> tuple[Block, int]:
    # html blocks run until a blank line
    i = start + 1
    while i < len(lines) and lines[i].strip() != "":
        i += 1

    content = "\n".join(lines[start:i]) + "\n"
    return Block(type="html_block", content=content), i


def _parse_paragraph(lines: list[str], start: int) -> tuple[Block, int]:
    i = start + 1
    while i < len(lines):
        current = lines[i]
        if current.strip() == "":
            break
        if _starts_new_block(current):
            break
        i += 1

    content = "\n".join(lines[start:i]) + "\n"
    return Block(type="paragraph", content=content), i


def _starts_new_block(line: str) -> bool:
    if _fence_of(line):
        return True
    if _is_list_line(line):
        return True
    if _is_blockquote_line(line):
        return True
    if _is_html_block_start(line):
        return True
    if _parse_heading(line):
        return True
    if _HR_PATTERN.match(line.strip()):
        return True
    return False


def _is_list_line(line: str) -> bool:
    stripped = line.lstrip()
    return bool(
        _LIST_UNORDERED_PATTERN.match(stripped)
        or _LIST_ORDERED_PATTERN.match(stripped)
    )


def _is_list_continuation(line: str) -> bool:
    if _is_list_line(line):
        return True
    return line.startswith("  ") or line.startswith("\t")


def _is_table_start(lines: list[str], start: int) -> bool:
    if not lines[start].lstrip().startswith("|"):
        return False
    if start + 1 >= len(lines):
        return False
    return bool(_TABLE_DELIMITER_PATTERN.match(lines[start + 1].strip()))


def _is_blockquote_line(line: str) -> bool:
    return line.lstrip().startswith(">")


def _is_html_block_start(line: str) -> bool:
    return line.startswith("<")
