"""Sidebar UI state derived from the sidebar tree and the route table."""

from __future__ import annotations

import typing as typ

from .sidebars import Category, DocRef

if typ.TYPE_CHECKING:
    from .content import ContentIndex
    from .routes import RouteTable
    from .sidebars import SidebarItem, SidebarsConfig

NavItem = dict[str, typ.Any]


def build_sidebar_state(
    sidebars: SidebarsConfig, content: ContentIndex, routes: RouteTable
) -> dict[str, list[NavItem]]:
    """Return the navigation items of every sidebar keyed by sidebar name.

    Links carry ``label``, ``href``, and ``docId``; categories carry
    ``label``, ``collapsed`` (copied from the sidebar file, ``None`` when not
    set), and nested ``items``. References that produced no route are left
    out.
    """
    hrefs = {
        route.doc_id: route.path for route in routes.leaf_routes() if route.doc_id
    }
    return {
        name: _build_items(items, content, hrefs)
        for name, items in sidebars.sidebars.items()
    }


def _build_items(
    items: typ.Iterable[SidebarItem], content: ContentIndex, hrefs: dict[str, str]
) -> list[NavItem]:
    result: list[NavItem] = []
    for item in items:
        match item:
            case DocRef(doc_id=doc_id, label=label):
                doc = content.get(doc_id)
                href = hrefs.get(doc_id)
                if doc is None or href is None:
                    continue
                result.append(
                    {
                        "type": "link",
                        "label": label or doc.label,
                        "href": href,
                        "docId": doc_id,
                    }
                )
            case Category(label=label, items=children, collapsed=collapsed):
                result.append(
                    {
                        "type": "category",
                        "label": label,
                        "collapsed": collapsed,
                        "items": _build_items(children, content, hrefs),
                    }
                )
    return result


__all__ = ["NavItem", "build_sidebar_state"]
