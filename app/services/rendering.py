"""Markdown rendering and citation extraction for generated answers."""

import logging
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlsplit

import nh3
from markdown_it import MarkdownIt

logger = logging.getLogger(__name__)

# GitHub-flavoured: tables, strikethrough, bare URL linkify, raw HTML allowed
_markdown = MarkdownIt("gfm-like")

WEB_SCHEMES = ("http", "https")


@dataclass(frozen=True)
class Source:
    """A web page the answer was grounded on."""

    uri: str
    title: str = ""

    @property
    def label(self) -> str:
        return self.title or self.uri


def render_markdown(text: str, sanitize: bool = True) -> str:
    """Convert markdown answer text to HTML, optionally sanitizing the result."""
    html = _markdown.render(text)
    if sanitize:
        html = nh3.clean(html)
    return html


def _get(obj: Any, name: str) -> Any:
    if isinstance(obj, dict):
        return obj.get(name)
    return getattr(obj, name, None)


def extract_sources(citations: list[Any] | None) -> list[Source]:
    """
    Keep only citations that carry a web reference.

    Annotations of any other type (file citations, container citations, ...)
    are dropped, as are URIs that are not http or https. The first occurrence
    of a URI wins.
    """
    sources: list[Source] = []
    seen: set[str] = set()
    for citation in citations or []:
        if _get(citation, "type") != "url_citation":
            continue
        uri = _get(citation, "url")
        if not uri or uri in seen:
            continue
        if urlsplit(uri).scheme.lower() not in WEB_SCHEMES:
            logger.warning(f"Dropping citation with non-web URL: {uri[:80]}")
            continue
        seen.add(uri)
        sources.append(Source(uri=uri, title=_get(citation, "title") or ""))
    logger.debug(f"Extracted {len(sources)} web sources from {len(citations or [])} citations")
    return sources
