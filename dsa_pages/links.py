"""Broken-link detection governed by the site's link policies.

Two kinds of broken link exist. A *broken link* is a sidebar entry or navbar
``to`` target that names a page the build does not produce. A *broken
markdown link* is a relative ``.md``/``.mdx`` link inside page content that
does not resolve to a documentation source. Each kind follows its own
:class:`~dsa_pages.config.LinkPolicy`: ``throw`` aborts the build, ``warn``
logs and continues, ``ignore`` continues silently.
"""

from __future__ import annotations

import dataclasses as dc
import logging
import posixpath
import typing as typ
from urllib.parse import unquote, urlsplit

from markdown import Markdown
from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor

from .config import LinkPolicy

if typ.TYPE_CHECKING:
    from xml.etree.ElementTree import Element

    from .config import NavbarConfig
    from .content import ContentIndex
else:  # pragma: no cover - type-checking fallback
    Element = typ.Any

logger = logging.getLogger(__name__)

MARKDOWN_LINK_SUFFIXES = (".md", ".mdx")


class SiteBuildError(ValueError):
    """Base class for errors that abort a site build."""


class BrokenLinkError(SiteBuildError):
    """Raised for a broken sidebar or navbar link under the ``throw`` policy."""


class BrokenMarkdownLinkError(SiteBuildError):
    """Raised for a broken in-content link under the ``throw`` policy."""


@dc.dataclass(slots=True)
class LinkReporter:
    """Apply link policies and remember the problems that were tolerated."""

    on_broken_links: LinkPolicy = LinkPolicy.THROW
    on_broken_markdown_links: LinkPolicy = LinkPolicy.WARN
    warnings: list[str] = dc.field(default_factory=list)

    def broken_link(self, message: str) -> None:
        """Report a broken sidebar or navbar link."""
        self._report(self.on_broken_links, message, BrokenLinkError)

    def broken_markdown_link(self, message: str) -> None:
        """Report a broken link inside page content."""
        self._report(self.on_broken_markdown_links, message, BrokenMarkdownLinkError)

    def _report(
        self, policy: LinkPolicy, message: str, error: type[SiteBuildError]
    ) -> None:
        match policy:
            case LinkPolicy.THROW:
                raise error(message)
            case LinkPolicy.WARN:
                logger.warning("%s", message)
                self.warnings.append(message)
            case LinkPolicy.IGNORE:
                logger.debug("ignored: %s", message)


def check_navbar_links(
    navbar: NavbarConfig,
    *,
    base_url: str,
    route_paths: typ.Collection[str],
    reporter: LinkReporter,
) -> None:
    """Report navbar ``to`` targets that do not match a generated route."""
    known = {path.rstrip("/") or "/" for path in route_paths}
    for item in navbar.items:
        if item.to is None:
            continue
        target = _resolve_site_path(item.to, base_url)
        if target not in known:
            reporter.broken_link(
                f"Navbar item '{item.label}' links to '{item.to}', "
                f"but no page exists at '{target}'."
            )


def _resolve_site_path(target: str, base_url: str) -> str:
    """Return the absolute route path a navbar ``to`` value points at."""
    path = urlsplit(target).path or "/"
    if not path.startswith("/"):
        path = f"/{path}"
    prefix = base_url.rstrip("/")
    if prefix and not (path == prefix or path.startswith(f"{prefix}/")):
        path = f"{prefix}{path}"
    if len(path) > 1:
        path = path.rstrip("/")
    return path


def check_markdown_links(content: ContentIndex, reporter: LinkReporter) -> None:
    """Report relative markdown file links that resolve to no documentation page."""
    for doc in content:
        base_dir = posixpath.dirname(doc.source)
        for href in collect_markdown_links(doc.body):
            resolved = _resolve_markdown_target(href, base_dir)
            if resolved is None:
                continue
            if content.by_source(resolved) is None:
                reporter.broken_markdown_link(
                    f"Page '{doc.source}' links to '{href}', which does not "
                    "resolve to a documentation file."
                )


def _resolve_markdown_target(href: str, base_dir: str) -> str | None:
    """Return the docs-relative file a link points at, or None if not a file link."""
    lower = href.lower()
    if lower.startswith(("http://", "https://", "mailto:", "tel:", "data:", "#", "//")):
        return None
    parsed = urlsplit(href)
    if parsed.scheme or parsed.netloc:
        return None
    path = unquote(parsed.path)
    if not path.lower().endswith(MARKDOWN_LINK_SUFFIXES):
        return None
    if path.startswith("/"):
        return posixpath.normpath(path.lstrip("/"))
    return posixpath.normpath(posixpath.join(base_dir, path))


def collect_markdown_links(text: str) -> list[str]:
    """Return every anchor ``href`` in ``text`` in document order."""
    collector = LinkCollectorExtension()
    Markdown(extensions=["fenced_code", "tables", collector]).convert(text)
    return collector.hrefs


class LinkCollectorExtension(Extension):
    """Record the ``href`` of each anchor produced while converting markdown."""

    def __init__(self) -> None:
        super().__init__()
        self.hrefs: list[str] = []

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register the link-collecting treeprocessor on the Markdown instance."""
        processor = LinkCollectorTreeprocessor(md, self.hrefs)
        md.treeprocessors.register(processor, "dsa_link_collector", 15)


class LinkCollectorTreeprocessor(Treeprocessor):
    """Append anchor targets to a shared list."""

    def __init__(self, md: Markdown, hrefs: list[str]) -> None:
        super().__init__(md)
        self.hrefs = hrefs

    def run(self, root: Element) -> None:
        """Collect anchors from the parsed markdown tree without modifying it."""
        for element in root.iter("a"):
            href = element.get("href")
            if href:
                self.hrefs.append(href)


__all__ = [
    "BrokenLinkError",
    "BrokenMarkdownLinkError",
    "LinkCollectorExtension",
    "LinkReporter",
    "SiteBuildError",
    "check_markdown_links",
    "check_navbar_links",
    "collect_markdown_links",
]
