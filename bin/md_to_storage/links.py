"""Resolve relative markdown links to Confluence page URLs.

Links such as ``[Setup](../guide/setup.md#install)`` point at other managed
documents. Each target file is read, its metadata headers give the page's
space and title, and the Confluence API tells where that page lives. The
markdown is then rewritten in place with the resulting URLs.
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from typing import Callable, Optional, Protocol
from urllib.parse import quote_plus

from .exceptions import FileReadError, MetadataExtractionError, RemoteLookupError
from .metadata import Meta, extract_meta

_module_logger = logging.getLogger(__name__)

_LINK_RE = re.compile(r"\[[^\]]+\]\((([^)#]+)?#?([^)]+)?)\)")


@dataclass
class ParsedLink:
    full: str
    path: str = ""
    anchor: str = ""


@dataclass
class LinkSubstitution:
    from_text: str
    to_text: str


class PageRef(Protocol):
    relative_link_path: str


class PageLookup(Protocol):
    """Finds pages on the Confluence instance links should point to."""

    base_url: str

    def find_page(self, space: str, title: str, kind: str = "page") -> Optional[PageRef]:
        ...


MetaExtractor = Callable[..., tuple[Optional[Meta], bytes]]


def parse_links(markdown: str) -> list[ParsedLink]:
    """Find every ``[label](path#anchor)`` link, in document order."""
    return [
        ParsedLink(
            full=match.group(1),
            path=match.group(2) or "",
            anchor=match.group(3) or "",
        )
        for match in _LINK_RE.finditer(markdown)
    ]


class LinkResolver:
    """Resolve parsed links relative to ``base_dir`` into Confluence URLs."""

    def __init__(
        self,
        api: PageLookup,
        base_dir: str | os.PathLike,
        logger: Optional[logging.Logger] = None,
        extract: MetaExtractor = extract_meta,
    ) -> None:
        self.api = api
        self.base_dir = os.fspath(base_dir)
        self.logger = logger or _module_logger
        self.extract = extract

    def resolve(self, links: list[ParsedLink]) -> list[LinkSubstitution]:
        """Resolve all links; identity substitutions are left out.

        Raises RemoteLookupError when the Confluence lookup for any link
        fails, in which case nothing should be substituted.
        """
        substitutions: list[LinkSubstitution] = []
        for link in links:
            self.logger.debug(
                f"Found a relative link: full={link.full!r} path={link.path!r} anchor={link.anchor!r}"
            )

            resolved = self.resolve_link(link)
            if not resolved or resolved == link.full:
                continue

            substitutions.append(LinkSubstitution(from_text=link.full, to_text=resolved))
        return substitutions

    def resolve_link(self, link: ParsedLink) -> str:
        """Return the URL ``link`` should point to, or "" to leave it alone."""
        result = ""

        if link.path:
            path = os.path.normpath(os.path.join(self.base_dir, link.path.lstrip("/")))
            if not os.path.exists(path):
                return ""

            try:
                contents = self._read_linked_file(path)
            except FileReadError as e:
                self.logger.warning(f"{e}; ignoring the relative link")
                return ""

            # tells apart files that are not managed documents
            try:
                meta, _ = self.extract(contents, logger=self.logger)
            except MetadataExtractionError as e:
                self.logger.error(
                    f"Unable to extract metadata from {path!r}: {e}; ignoring the relative link"
                )
                return ""

            if meta is None:
                return ""

            try:
                result = self.page_link(meta.space, meta.title)
            except Exception as e:
                raise RemoteLookupError(
                    f"resolve link: {link.full!r}: find confluence page: "
                    f"{path} / {meta.space} / {meta.title}: {e}"
                ) from e

            if not result:
                return ""

        if link.anchor:
            result = f"{result}#{link.anchor}"

        return result

    def page_link(self, space: str, title: str) -> str:
        """Build the URL of the page ``space``/``title``.

        Pages that do not exist yet get the URL they will most likely have;
        existing pages use the path reported by the API, which may differ.
        """
        link = f"{self.api.base_url}/display/{space}/{quote_plus(title)}"

        page = self.api.find_page(space, title, "page")
        if page is not None:
            # the API path lacks the context path Confluence may be served under
            link = self.api.base_url + page.relative_link_path

        return link

    @staticmethod
    def _read_linked_file(path: str) -> bytes:
        try:
            with open(path, "rb") as f:
                return f.read()
        except OSError as e:
            raise FileReadError(f"Unable to read {path!r}: {e}") from e


def resolve_relative_links(
    api: PageLookup,
    markdown: str,
    base_dir: str | os.PathLike,
    logger: Optional[logging.Logger] = None,
) -> list[LinkSubstitution]:
    """Parse and resolve all relative links of ``markdown``."""
    resolver = LinkResolver(api, base_dir, logger=logger)
    return resolver.resolve(parse_links(markdown))


def substitute_links(
    markdown: str,
    substitutions: list[LinkSubstitution],
    logger: Optional[logging.Logger] = None,
) -> str:
    """Rewrite every ``](from)`` into ``](to)``.

    Substitution works on the literal link target, so every occurrence of the
    same target text gets the same replacement.
    """
    logger = logger or _module_logger
    replacements: dict[str, str] = {}
    for substitution in substitutions:
        if substitution.from_text == substitution.to_text:
            continue
        if substitution.from_text in replacements:
            continue

        logger.debug(f"Substitute link: {substitution.from_text!r} -> {substitution.to_text!r}")
        replacements[f"]({substitution.from_text})"] = f"]({substitution.to_text})"

    if not replacements:
        return markdown

    # one pass, so a replacement is never rewritten again by a later one
    pattern = re.compile("|".join(re.escape(source) for source in replacements))
    return pattern.sub(lambda match: replacements[match.group(0)], markdown)
