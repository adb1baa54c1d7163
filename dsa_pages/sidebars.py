"""Load and validate the sidebar tree that drives site navigation.

A sidebar file maps each sidebar name to an ordered list of entries. An entry
is either a document reference (a bare document id string, or an explicit
``{type: doc, id: ...}`` mapping) or a category grouping further entries:

.. code-block:: yaml

    dsa:
      - intro
      - type: category
        label: Data Structures
        collapsed: false
        items: [arrays, linked-list]

:func:`load_sidebars` parses the YAML into immutable :class:`DocRef` and
:class:`Category` nodes held by a :class:`SidebarsConfig`. Parsing rejects
malformed entries and trees that do not terminate (recursive YAML aliases or
runaway nesting); :meth:`SidebarsConfig.validate_unique` rejects document ids
that appear more than once across all sidebars. Whether each id resolves to a
content page is checked later, against the discovered content, by the route
generator.

Examples
--------
>>> from dsa_pages.sidebars import parse_sidebars
>>> sidebars = parse_sidebars({"dsa": ["intro", {"type": "category",
...     "label": "Data Structures", "items": ["arrays"]}]})
>>> [ref.doc_id for _, ref in sidebars.iter_doc_refs()]
['intro', 'arrays']
>>> sidebars.first_doc_id("dsa")
'intro'
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import typing as typ

from ruamel.yaml import YAML

from ._constants import MAX_SIDEBAR_DEPTH
from .config import DocumentShapeError

if typ.TYPE_CHECKING:
    from pathlib import Path


class SidebarError(ValueError):
    """Raised when the sidebar definition is malformed or inconsistent."""


@dc.dataclass(frozen=True, slots=True)
class DocRef:
    """A sidebar leaf pointing at one documentation page."""

    doc_id: str
    label: str | None = None


@dc.dataclass(frozen=True, slots=True)
class Category:
    """A labelled group of sidebar entries.

    ``collapsed`` is ``None`` when the author did not set it; consumers must
    pass that through rather than substituting a default.
    """

    label: str
    items: tuple[SidebarItem, ...]
    collapsed: bool | None = None


SidebarItem = DocRef | Category


@dc.dataclass(slots=True)
class SidebarsConfig:
    """All sidebars of the docs plugin, keyed by name in authored order."""

    sidebars: dict[str, tuple[SidebarItem, ...]]

    def names(self) -> list[str]:
        """Return sidebar names in authored order."""
        return list(self.sidebars)

    def get(self, name: str) -> tuple[SidebarItem, ...]:
        """Return the entries of ``name`` or raise SidebarError."""
        try:
            return self.sidebars[name]
        except KeyError as exc:
            available = ", ".join(self.sidebars)
            msg = f"Unknown sidebar '{name}'. Known sidebars: {available}"
            raise SidebarError(msg) from exc

    def iter_doc_refs(self) -> cabc.Iterator[tuple[str, DocRef]]:
        """Yield ``(sidebar_name, DocRef)`` pairs depth-first in authored order."""
        for name, items in self.sidebars.items():
            for ref in _walk_doc_refs(items):
                yield name, ref

    def doc_ids(self) -> set[str]:
        """Return every document id referenced by any sidebar."""
        return {ref.doc_id for _, ref in self.iter_doc_refs()}

    def validate_unique(self) -> None:
        """Raise SidebarError when a document id appears more than once."""
        seen: dict[str, str] = {}
        for name, ref in self.iter_doc_refs():
            previous = seen.get(ref.doc_id)
            if previous is not None:
                where = (
                    f"twice in sidebar '{name}'"
                    if previous == name
                    else f"in sidebars '{previous}' and '{name}'"
                )
                msg = f"Document '{ref.doc_id}' is referenced {where}."
                raise SidebarError(msg)
            seen[ref.doc_id] = name

    def doc_refs(self, name: str) -> list[DocRef]:
        """Return the document references of sidebar ``name`` in document order."""
        return list(_walk_doc_refs(self.get(name)))

    def first_doc_id(self, name: str) -> str | None:
        """Return the first document id of sidebar ``name`` in document order."""
        return next((ref.doc_id for ref in self.doc_refs(name)), None)


def _walk_doc_refs(items: cabc.Iterable[SidebarItem]) -> cabc.Iterator[DocRef]:
    for item in items:
        match item:
            case DocRef():
                yield item
            case Category(items=children):
                yield from _walk_doc_refs(children)


def load_sidebars(path: Path) -> SidebarsConfig:
    """Load the sidebar YAML file at ``path``.

    Raises
    ------
    FileNotFoundError
        If the sidebar file does not exist.
    DocumentShapeError
        If the top-level YAML structure is not a mapping.
    SidebarError
        If any entry is malformed or the tree does not terminate.
    """
    if not path.exists():
        msg = f"Sidebar file '{path}' not found."
        raise FileNotFoundError(msg)
    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level sidebar YAML structure must be a mapping."
        raise DocumentShapeError(msg)
    return parse_sidebars(loaded)


def parse_sidebars(raw: typ.Mapping[str, typ.Any]) -> SidebarsConfig:
    """Build a SidebarsConfig from a mapping of sidebar name to entry list."""
    if not raw:
        msg = "No sidebars defined."
        raise SidebarError(msg)
    sidebars: dict[str, tuple[SidebarItem, ...]] = {}
    for name, entries in raw.items():
        sidebar_name = str(name)
        if not isinstance(entries, list):
            msg = f"Sidebar '{sidebar_name}' must be a list of entries."
            raise SidebarError(msg)
        if not entries:
            msg = f"Sidebar '{sidebar_name}' has no entries."
            raise SidebarError(msg)
        parser = _EntryParser(sidebar_name)
        sidebars[sidebar_name] = parser.parse_items(entries, where=sidebar_name)
    return SidebarsConfig(sidebars=sidebars)


class _EntryParser:
    """Recursive entry parser that tracks the categories being expanded."""

    def __init__(self, sidebar: str) -> None:
        self.sidebar = sidebar
        self._active: set[int] = set()

    def parse_items(
        self, entries: list[typ.Any], *, where: str, depth: int = 0
    ) -> tuple[SidebarItem, ...]:
        if depth > MAX_SIDEBAR_DEPTH:
            msg = f"Sidebar entry {where} is nested deeper than {MAX_SIDEBAR_DEPTH} levels."
            raise SidebarError(msg)
        key = id(entries)
        if key in self._active:
            msg = f"Sidebar entry {where} contains itself."
            raise SidebarError(msg)
        self._active.add(key)
        try:
            return tuple(
                self.parse_entry(entry, where=f"{where}[{index}]", depth=depth)
                for index, entry in enumerate(entries)
            )
        finally:
            self._active.discard(key)

    def parse_entry(self, entry: object, *, where: str, depth: int) -> SidebarItem:
        match entry:
            case str() as doc_id if doc_id.strip():
                return DocRef(doc_id=doc_id.strip())
            case {"type": "doc", **rest}:
                return self._parse_doc(rest, where=where)
            case {"type": "category", **rest}:
                return self._parse_category(rest, where=where, depth=depth)
            case {"type": other}:
                msg = f"Sidebar entry {where} has unsupported type {other!r}."
                raise SidebarError(msg)
            case _:
                msg = (
                    f"Sidebar entry {where} must be a document id or a mapping "
                    "with a 'type' of 'doc' or 'category'."
                )
                raise SidebarError(msg)

    @staticmethod
    def _parse_doc(payload: typ.Mapping[str, typ.Any], *, where: str) -> DocRef:
        doc_id = payload.get("id")
        if not isinstance(doc_id, str) or not doc_id.strip():
            msg = f"Sidebar doc entry {where} is missing 'id'."
            raise SidebarError(msg)
        label = payload.get("label")
        return DocRef(doc_id=doc_id.strip(), label=str(label) if label else None)

    def _parse_category(
        self, payload: typ.Mapping[str, typ.Any], *, where: str, depth: int
    ) -> Category:
        label = payload.get("label")
        if not isinstance(label, str) or not label.strip():
            msg = f"Sidebar category {where} is missing 'label'."
            raise SidebarError(msg)
        items = payload.get("items")
        if not isinstance(items, list):
            msg = f"Sidebar category '{label}' ({where}) must define an 'items' list."
            raise SidebarError(msg)
        collapsed = payload.get("collapsed")
        if collapsed is not None and not isinstance(collapsed, bool):
            msg = f"Sidebar category '{label}' ({where}) has non-boolean 'collapsed'."
            raise SidebarError(msg)
        return Category(
            label=label,
            items=self.parse_items(items, where=f"{where}.items", depth=depth + 1),
            collapsed=collapsed,
        )


__all__ = [
    "Category",
    "DocRef",
    "SidebarError",
    "SidebarItem",
    "SidebarsConfig",
    "load_sidebars",
    "parse_sidebars",
]
