"""Fenced code block info string parsing.

The info string is the text after the opening fence, e.g.
``python collapse theme="Eclipse" title="Example"``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

_module_logger = logging.getLogger(__name__)


@dataclass
class CodeBlockInfo:
    language: str = ""
    collapse: bool = False
    theme: str = ""
    title: str = ""


def split_except_on_quotes(text: str) -> list[str]:
    """Split on spaces, keeping double-quoted spans (and their quotes) intact."""
    tokens: list[str] = []
    current: list[str] = []
    quoted = False
    for char in text:
        if char == '"':
            quoted = not quoted
            current.append(char)
        elif not quoted and char == " ":
            tokens.append("".join(current))
            current = []
        else:
            current.append(char)
    if current:
        tokens.append("".join(current))
    return tokens


def parse_language(info: str) -> str:
    """Return the language (first word) of an info string."""
    words = info.split()
    first = words[0] if words else info

    if first == "collapse" or first.startswith("title=") or first.startswith("theme="):
        return ""
    return first


def parse_theme(info: str, logger: Optional[logging.Logger] = None) -> str:
    return _parse_quoted_param(info, "theme", 'theme="Eclipse"', logger)


def parse_title(info: str, logger: Optional[logging.Logger] = None) -> str:
    return _parse_quoted_param(info, "title", 'title="My Title Here"', logger)


def parse_info_string(info: str, logger: Optional[logging.Logger] = None) -> CodeBlockInfo:
    """Parse all supported code block attributes from ``info``."""
    return CodeBlockInfo(
        language=parse_language(info),
        collapse="collapse" in info,
        theme=parse_theme(info, logger),
        title=parse_title(info, logger),
    )


def _parse_quoted_param(
    info: str,
    key: str,
    example: str,
    logger: Optional[logging.Logger],
) -> str:
    logger = logger or _module_logger
    prefix = f"{key}="
    for param in split_except_on_quotes(info):
        if not param.startswith(key):
            continue
        if not param.startswith(prefix):
            logger.debug(
                f"Found `{key}` in info string {info!r} without a value, "
                f"set it for a code block using: {example}"
            )
            continue

        value = param[len(prefix):]
        # drop the surrounding quotes
        value = value[1:-1].strip()
        logger.debug(f"Found code block {key}: {value!r}")
        return value
    return ""
