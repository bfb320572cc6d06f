#!/usr/bin/env python3
"""Markdown -> Confluence Storage XHTML CLI.

Subcommands:
  convert  compile a markdown document to storage format
  verify   compile a markdown document and compare it with expected storage XHTML

Usage examples:
  bin/md_to_storage_cli.py convert docs/index.md
  bin/md_to_storage_cli.py convert docs/index.md --drop-h1 --output index.xhtml
  bin/md_to_storage_cli.py convert docs/index.md --resolve-links --base-url https://example.atlassian.net/wiki
  bin/md_to_storage_cli.py verify docs/index.md --expected index.xhtml --show-diff
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from confluence.api_client import ApiClient
from confluence.config import Config
from md_to_storage import MacroLibrary, compile_markdown, extract_meta, prepare_document
from md_to_storage.exceptions import MetadataExtractionError, RemoteLookupError
from storage_verify import verify_markdown_against_storage

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Convert markdown documents to Confluence storage format"
    )
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
                        help="Set the logging level (default: %(default)s)")
    sub = parser.add_subparsers(dest="command")

    # --- convert ---
    cv = sub.add_parser("convert", help="Convert a markdown file to storage XHTML")
    cv.add_argument("input_md", type=Path, help="Input markdown file")
    cv.add_argument("--output", type=Path, default=None, help="Output file (default: stdout)")
    cv.add_argument("--drop-h1", action="store_true", default=None,
                    help="Drop a leading H1 heading which duplicates the page title")
    cv.add_argument("--resolve-links", action="store_true",
                    help="Rewrite relative links to other documents into Confluence URLs")
    cv.add_argument("--base-url", default=None, help="Confluence base URL (default: $CONFLUENCE_BASE_URL)")
    cv.add_argument("--username", default=None, help="Confluence username (default: $CONFLUENCE_USERNAME)")
    cv.add_argument("--api-token", default=None, help="Confluence API token (default: $CONFLUENCE_TOKEN)")
    cv.add_argument("--templates-dir", type=Path, default=None,
                    help="Directory with <name>.xhtml.j2 files overriding built-in macro templates")

    # --- verify ---
    vf = sub.add_parser("verify", help="Compare generated storage XHTML with an expected file")
    vf.add_argument("input_md", type=Path, help="Input markdown file")
    vf.add_argument("--expected", type=Path, required=True, help="Expected storage XHTML file")
    vf.add_argument("--show-diff", action="store_true", help="Print unified diff on mismatch")
    vf.add_argument("--templates-dir", type=Path, default=None,
                    help="Directory with <name>.xhtml.j2 files overriding built-in macro templates")

    return parser


def _read_document(path: Path) -> str:
    """Read a markdown file and strip its metadata headers."""
    meta, remainder = extract_meta(path.read_bytes(), logger=logger)
    if meta is not None:
        logger.info(f"{path}: space={meta.space!r} title={meta.title!r}")
    return remainder.decode("utf-8")


def _run_convert(args: argparse.Namespace) -> int:
    if not args.input_md.exists():
        print(f"Error: input file not found: {args.input_md}", file=sys.stderr)
        return 2

    config = Config(
        base_url=args.base_url,
        username=args.username,
        api_token=args.api_token,
        templates_dir=args.templates_dir,
    )
    if args.drop_h1 is not None:
        config.drop_h1 = args.drop_h1

    api = ApiClient(config, logger) if args.resolve_links else None
    try:
        markdown = _read_document(args.input_md)
        markdown = prepare_document(
            markdown,
            base_dir=args.input_md.resolve().parent,
            api=api,
            drop_h1=config.drop_h1,
            logger=logger,
        )
    except (MetadataExtractionError, RemoteLookupError) as e:
        print(f"Error: {args.input_md}: {e}", file=sys.stderr)
        return 1

    xhtml = compile_markdown(markdown, macros=MacroLibrary(config.templates_dir), logger=logger)
    if args.output:
        args.output.write_text(xhtml, encoding="utf-8")
        print(f"[convert] wrote: {args.output}")
    else:
        print(xhtml)
    return 0


def _run_verify(args: argparse.Namespace) -> int:
    if not args.input_md.exists():
        print(f"Error: input file not found: {args.input_md}", file=sys.stderr)
        return 2
    if not args.expected.exists():
        print(f"Error: expected file not found: {args.expected}", file=sys.stderr)
        return 2

    try:
        markdown = _read_document(args.input_md)
    except MetadataExtractionError as e:
        print(f"Error: {args.input_md}: {e}", file=sys.stderr)
        return 1

    expected_xhtml = args.expected.read_text(encoding="utf-8")
    passed, _generated, diff_report = verify_markdown_against_storage(
        markdown, expected_xhtml, macros=MacroLibrary(args.templates_dir)
    )
    if passed:
        print("[verify] passed")
        return 0
    print("[verify] failed")
    if args.show_diff:
        print(diff_report)
    return 1


def main() -> int:
    parser = _build_parser()
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format='%(levelname)s - %(filename)s:%(lineno)d - %(message)s',
        stream=sys.stderr
    )

    if args.command == "convert":
        return _run_convert(args)
    if args.command == "verify":
        return _run_verify(args)
    parser.print_help()
    return 2


if __name__ == "__main__":
    sys.exit(main())
