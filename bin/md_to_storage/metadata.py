"""Extract page metadata from the head of a markdown document.

Two header styles are recognised::

    <!-- Space: DOCS -->
    <!-- Title: Getting started -->

and a YAML frontmatter block::

    ---
    space: DOCS
    title: Getting started
    ---
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Optional

import yaml

from .exceptions import MetadataExtractionError

_module_logger = logging.getLogger(__name__)

_HEADER_RE = re.compile(r"^<!--\s*([^:]+?)\s*:\s*(.*?)\s*-->\s*$")

_SINGLE_KEYS = {"space", "title", "layout"}
_MULTI_KEYS = {"parent": "parents", "attachment": "attachments", "label": "labels"}
_YAML_LIST_KEYS = {"parent": "parents", "parents": "parents", "attachments": "attachments", "labels": "labels"}


@dataclass
class Meta:
    space: str = ""
    title: str = ""
    layout: str = ""
    parents: list[str] = field(default_factory=list)
    attachments: list[str] = field(default_factory=list)
    labels: list[str] = field(default_factory=list)


def extract_meta(
    data: bytes,
    logger: Optional[logging.Logger] = None,
) -> tuple[Optional[Meta], bytes]:
    """Return ``(meta, remainder)``; ``meta`` is None for unmanaged documents.

    Raises MetadataExtractionError for malformed headers.
    """
    logger = logger or _module_logger
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise MetadataExtractionError(f"document is not valid UTF-8: {e}") from e

    if text.startswith("---\n"):
        meta, remainder = _extract_frontmatter(text)
    else:
        meta, remainder = _extract_comment_headers(text, logger)

    if meta is None:
        return None, data

    if not meta.title:
        raise MetadataExtractionError("page title is not set in metadata headers")

    logger.debug(f"Extracted metadata: space={meta.space!r} title={meta.title!r}")
    return meta, remainder.encode("utf-8")


def _extract_comment_headers(text: str, logger: logging.Logger) -> tuple[Optional[Meta], str]:
    lines = text.split("\n")
    meta: Optional[Meta] = None

    i = 0
    while i < len(lines):
        match = _HEADER_RE.match(lines[i])
        if not match:
            break
        i += 1

        key = match.group(1).strip().lower()
        value = match.group(2)
        if key not in _SINGLE_KEYS and key not in _MULTI_KEYS:
            logger.error(f"Unknown metadata header {match.group(1)!r} in line: {lines[i - 1]!r}")
            continue

        if meta is None:
            meta = Meta()
        if key in _SINGLE_KEYS:
            setattr(meta, key, value)
        else:
            getattr(meta, _MULTI_KEYS[key]).append(value)

    if meta is None:
        return None, text

    while i < len(lines) and lines[i].strip() == "":
        i += 1
    return meta, "\n".join(lines[i:])


def _extract_frontmatter(text: str) -> tuple[Optional[Meta], str]:
    lines = text.split("\n")
    end = 1
    while end < len(lines) and lines[end] != "---":
        end += 1
    if end >= len(lines):
        return None, text

    try:
        loaded: Any = yaml.safe_load("\n".join(lines[1:end]))
    except yaml.YAMLError as e:
        raise MetadataExtractionError(f"invalid YAML frontmatter: {e}") from e

    if loaded is None:
        loaded = {}
    if not isinstance(loaded, dict):
        raise MetadataExtractionError("YAML frontmatter must be a mapping")

    keys = {str(key).lower(): value for key, value in loaded.items()}
    if "space" not in keys and "title" not in keys:
        return None, text

    meta = Meta(
        space=str(keys.get("space") or "").strip(),
        title=str(keys.get("title") or "").strip(),
        layout=str(keys.get("layout") or "").strip(),
    )
    for key, attr in _YAML_LIST_KEYS.items():
        value = keys.get(key)
        if value is None:
            continue
        values = value if isinstance(value, list) else [value]
        getattr(meta, attr).extend(str(item) for item in values)

    i = end + 1
    while i < len(lines) and lines[i].strip() == "":
        i += 1
    return meta, "\n".join(lines[i:])
