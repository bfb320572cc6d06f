"""Markdown document -> Confluence storage format."""

from __future__ import annotations

import logging
import os
from typing import Optional

from .emitter import emit_document
from .headings import drop_document_leading_h1
from .links import PageLookup, resolve_relative_links, substitute_links
from .parser import parse_markdown
from .tags import escape_namespaced_tags, restore_namespaced_tags
from .templates import MacroLibrary

_module_logger = logging.getLogger(__name__)


def compile_markdown(
    markdown: str,
    macros: Optional[MacroLibrary] = None,
    logger: Optional[logging.Logger] = None,
) -> str:
    """Render markdown to storage format XHTML."""
    logger = logger or _module_logger

    escaped = escape_namespaced_tags(markdown)
    xhtml = emit_document(parse_markdown(escaped), macros=macros, logger=logger)
    xhtml = restore_namespaced_tags(xhtml)

    logger.debug(f"Rendered markdown to storage format:\n{xhtml}")
    return xhtml


def prepare_document(
    markdown: str,
    base_dir: str | os.PathLike,
    api: Optional[PageLookup] = None,
    drop_h1: bool = False,
    logger: Optional[logging.Logger] = None,
) -> str:
    """Apply the text-level rewrites that precede rendering.

    Relative links are only rewritten when ``api`` is given. Raises
    RemoteLookupError before anything is substituted if a lookup fails.
    """
    logger = logger or _module_logger

    if drop_h1:
        markdown = drop_document_leading_h1(markdown)

    if api is not None:
        substitutions = resolve_relative_links(api, markdown, base_dir, logger=logger)
        markdown = substitute_links(markdown, substitutions, logger=logger)

    return markdown
