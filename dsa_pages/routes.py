"""Derive the site's route table from the sidebars and discovered content.

The table mirrors what the framework's client-side router expects:

1. the framework debug pages (when ``debug`` is enabled);
2. an exact root route that lands on the first page of the home sidebar,
   unless a page with slug ``/`` is served at the root itself;
3. one layout route nesting ``DocsRoot`` → ``DocVersionRoot`` → ``DocRoot``
   around an exact leaf route per documentation page, sorted by path;
4. a catch-all ``*`` route rendering the not-found page.

Every document id reachable from a sidebar yields exactly one leaf whose path
is ``baseUrl`` + ``routeBasePath`` + slug. A sidebar reference without a
content page is reported through the :class:`~dsa_pages.links.LinkReporter`
and produces no route. Component hashes are derived from route data only, so
unchanged inputs always yield an identical table.
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import hashlib
import logging
import typing as typ

from ._constants import (
    CATCH_ALL_PATH,
    DEBUG_COMPONENT,
    DEBUG_ROUTE_PREFIX,
    DEBUG_ROUTE_SUFFIXES,
    DOC_ITEM_COMPONENT,
    DOC_ROOT_COMPONENT,
    DOC_VERSION_ROOT_COMPONENT,
    DOCS_ROOT_COMPONENT,
    LANDING_COMPONENT,
    NOT_FOUND_COMPONENT,
)
from .links import SiteBuildError

if typ.TYPE_CHECKING:
    from .config import SiteConfig
    from .content import ContentIndex
    from .links import LinkReporter
    from .sidebars import SidebarsConfig

logger = logging.getLogger(__name__)


class RouteConflictError(SiteBuildError):
    """Raised when two pages would be served from the same path."""


@dc.dataclass(slots=True)
class RouteEntry:
    """One route object of the generated manifest."""

    path: str
    component: str
    hash: str | None = None
    exact: bool | None = None
    sidebar: str | None = None
    doc_id: str | None = None
    edit_url: str | None = None
    routes: list[RouteEntry] = dc.field(default_factory=list)

    def to_dict(self) -> dict[str, typ.Any]:
        """Return a JSON-ready mapping, omitting unset optional fields."""
        result: dict[str, typ.Any] = {"path": self.path, "component": self.component}
        if self.hash is not None:
            result["hash"] = self.hash
        if self.exact is not None:
            result["exact"] = self.exact
        if self.sidebar is not None:
            result["sidebar"] = self.sidebar
        if self.doc_id is not None:
            result["docId"] = self.doc_id
        if self.edit_url is not None:
            result["editUrl"] = self.edit_url
        if self.routes:
            result["routes"] = [child.to_dict() for child in self.routes]
        return result


@dc.dataclass(slots=True)
class RouteTable:
    """The ordered top-level routes plus lookup helpers."""

    routes: list[RouteEntry]

    def iter_routes(self) -> cabc.Iterator[RouteEntry]:
        """Yield every route depth-first in manifest order."""
        stack = list(reversed(self.routes))
        while stack:
            route = stack.pop()
            yield route
            stack.extend(reversed(route.routes))

    def leaf_routes(self) -> list[RouteEntry]:
        """Return the documentation page routes in manifest order."""
        return [
            route
            for route in self.iter_routes()
            if route.component == DOC_ITEM_COMPONENT
        ]

    def paths(self) -> set[str]:
        """Return every concrete path served by the table."""
        return {
            route.path for route in self.iter_routes() if route.path != CATCH_ALL_PATH
        }

    def find(self, path: str) -> RouteEntry | None:
        """Return the documentation page route served at ``path``."""
        return next(
            (route for route in self.leaf_routes() if route.path == path), None
        )

    def to_list(self) -> list[dict[str, typ.Any]]:
        """Return the table as JSON-ready route mappings."""
        return [route.to_dict() for route in self.routes]


class RouteTableBuilder:
    """Build a :class:`RouteTable` for one site configuration."""

    def __init__(
        self,
        site_config: SiteConfig,
        sidebars: SidebarsConfig,
        content: ContentIndex,
        reporter: LinkReporter,
    ) -> None:
        self.site_config = site_config
        self.sidebars = sidebars
        self.content = content
        self.reporter = reporter
        self.docs_base = join_url(
            site_config.base_url, site_config.docs.route_base_path, trailing=True
        )

    def build(self) -> RouteTable:
        """Return the complete route table.

        Raises
        ------
        BrokenLinkError
            If a sidebar references a missing page and ``onBrokenLinks`` is
            ``throw``.
        RouteConflictError
            If two pages resolve to the same path.
        SiteBuildError
            If the home sidebar has no page to land on.
        """
        leaves = self._build_leaves()
        routes: list[RouteEntry] = []
        if self.site_config.debug:
            routes.extend(self._debug_routes())
        if not any(leaf.path == self.docs_base for leaf in leaves):
            routes.append(self._landing_route(leaves))
        routes.append(self._layout_route(leaves))
        routes.append(RouteEntry(path=CATCH_ALL_PATH, component=NOT_FOUND_COMPONENT))
        return RouteTable(routes=routes)

    def page_path(self, slug: str) -> str:
        """Return the route path serving a page with ``slug``.

        A page whose slug is ``/`` is served at the docs root itself and
        takes the place of the landing route.
        """
        path = join_url(self.docs_base, slug)
        return self.docs_base if path == self.docs_base.rstrip("/") else path

    def _build_leaves(self) -> list[RouteEntry]:
        leaves: dict[str, RouteEntry] = {}
        for sidebar, ref in self.sidebars.iter_doc_refs():
            doc = self.content.get(ref.doc_id)
            if doc is None:
                self.reporter.broken_link(
                    f"Sidebar '{sidebar}' references document '{ref.doc_id}', "
                    "which has no content page."
                )
                continue
            path = self.page_path(doc.slug)
            clash = leaves.get(path)
            if clash is not None:
                msg = (
                    f"Documents '{clash.doc_id}' and '{doc.doc_id}' both "
                    f"resolve to '{path}'."
                )
                raise RouteConflictError(msg)
            leaves[path] = RouteEntry(
                path=path,
                component=DOC_ITEM_COMPONENT,
                hash=component_hash(path, DOC_ITEM_COMPONENT, doc.doc_id),
                exact=True,
                sidebar=sidebar,
                doc_id=doc.doc_id,
                edit_url=self.site_config.docs.edit_url_for(doc.source),
            )

        referenced = self.sidebars.doc_ids()
        for doc in self.content:
            if doc.doc_id not in referenced:
                logger.info(
                    "Document '%s' is not referenced by any sidebar; no route emitted",
                    doc.doc_id,
                )
        return [leaves[path] for path in sorted(leaves)]

    def _debug_routes(self) -> list[RouteEntry]:
        routes: list[RouteEntry] = []
        for suffix in DEBUG_ROUTE_SUFFIXES:
            path = join_url(self.site_config.base_url, DEBUG_ROUTE_PREFIX + suffix)
            routes.append(
                RouteEntry(
                    path=path,
                    component=DEBUG_COMPONENT,
                    hash=component_hash(path, DEBUG_COMPONENT),
                    exact=True,
                )
            )
        return routes

    def _landing_route(self, leaves: list[RouteEntry]) -> RouteEntry:
        home = self.site_config.docs.home_sidebar or self.sidebars.names()[0]
        routed = {leaf.doc_id for leaf in leaves}
        landing = next(
            (ref.doc_id for ref in self.sidebars.doc_refs(home) if ref.doc_id in routed),
            None,
        )
        if landing is None:
            msg = f"Home sidebar '{home}' has no page to use as the landing page."
            raise SiteBuildError(msg)
        return RouteEntry(
            path=self.docs_base,
            component=LANDING_COMPONENT,
            hash=component_hash(self.docs_base, LANDING_COMPONENT, landing),
            exact=True,
            doc_id=landing,
        )

    def _layout_route(self, leaves: list[RouteEntry]) -> RouteEntry:
        doc_root = RouteEntry(
            path=self.docs_base,
            component=DOC_ROOT_COMPONENT,
            hash=component_hash(self.docs_base, DOC_ROOT_COMPONENT),
            routes=leaves,
        )
        version_root = RouteEntry(
            path=self.docs_base,
            component=DOC_VERSION_ROOT_COMPONENT,
            hash=component_hash(self.docs_base, DOC_VERSION_ROOT_COMPONENT),
            routes=[doc_root],
        )
        return RouteEntry(
            path=self.docs_base,
            component=DOCS_ROOT_COMPONENT,
            hash=component_hash(self.docs_base, DOCS_ROOT_COMPONENT),
            routes=[version_root],
        )


def join_url(*parts: str, trailing: bool = False) -> str:
    """Join URL path segments into a normalized absolute path.

    >>> join_url("/markdown-web-app/", "/", "/arrays")
    '/markdown-web-app/arrays'
    >>> join_url("/", "/", trailing=True)
    '/'
    >>> join_url("/markdown-web-app/", "/", trailing=True)
    '/markdown-web-app/'
    """
    segments = [segment for part in parts for segment in part.split("/") if segment]
    path = "/" + "/".join(segments)
    if trailing and path != "/":
        path = f"{path}/"
    return path


def component_hash(path: str, component: str, doc_id: str | None = None) -> str:
    """Return the short, stable identifier for a route's component bundle."""
    digest = hashlib.sha256(f"{path}|{component}|{doc_id or ''}".encode())
    return digest.hexdigest()[:3]


__all__ = [
    "RouteConflictError",
    "RouteEntry",
    "RouteTable",
    "RouteTableBuilder",
    "component_hash",
    "join_url",
]
