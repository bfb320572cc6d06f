"""Markdown -> Confluence Storage XHTML conversion package."""

from .emitter import emit_block, emit_document
from .headings import drop_document_leading_h1
from .info_string import CodeBlockInfo, parse_info_string
from .inline import convert_heading_inline, convert_inline
from .links import (
    LinkResolver,
    LinkSubstitution,
    ParsedLink,
    parse_links,
    resolve_relative_links,
    substitute_links,
)
from .metadata import Meta, extract_meta
from .parser import Block, parse_markdown
from .pipeline import compile_markdown, prepare_document
from .tags import escape_namespaced_tags, restore_namespaced_tags
from .templates import MacroLibrary

__all__ = [
    "Block",
    "CodeBlockInfo",
    "LinkResolver",
    "LinkSubstitution",
    "MacroLibrary",
    "Meta",
    "ParsedLink",
    "compile_markdown",
    "convert_heading_inline",
    "convert_inline",
    "drop_document_leading_h1",
    "emit_block",
    "emit_document",
    "escape_namespaced_tags",
    "extract_meta",
    "parse_info_string",
    "parse_links",
    "parse_markdown",
    "prepare_document",
    "resolve_relative_links",
    "restore_namespaced_tags",
    "substitute_links",
]
