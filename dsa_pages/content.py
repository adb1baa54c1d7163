"""Discover the documentation pages that back sidebar entries.

Every ``*.md``/``*.mdx`` file under the docs directory is one page. Its
document id comes from its path relative to the docs directory, without the
extension and with numeric ordering prefixes (``01-``, ``2_``) removed from
each segment; a front-matter ``id`` replaces the final segment. Its slug
defaults to ``/<doc id>``. A front-matter ``slug`` starting with ``/`` is
used as-is, any other slug is resolved against the page's directory. Files
and directories starting with ``_`` or ``.`` are partials and are skipped.
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import posixpath
import re
import typing as typ
from pathlib import Path

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from ._constants import CONTENT_SUFFIXES

FRONT_MATTER_PATTERN = re.compile(
    r"\A---[ \t]*\r?\n(.*?)\r?\n---[ \t]*(?:\r?\n|\Z)", re.DOTALL
)
HEADING_PATTERN = re.compile(r"^#[ \t]+(.+?)[ \t#]*$", re.MULTILINE)
NUMBER_PREFIX_PATTERN = re.compile(r"^\d+[-_.]+(?=.)")


class ContentError(ValueError):
    """Raised when documentation sources are malformed or collide."""


@dc.dataclass(frozen=True, slots=True)
class ContentDoc:
    """A single documentation page discovered on disk."""

    doc_id: str
    source: str
    slug: str
    title: str
    sidebar_label: str | None
    body: str

    @property
    def label(self) -> str:
        """Return the label shown for this page in navigation."""
        return self.sidebar_label or self.title


@dc.dataclass(slots=True)
class ContentIndex:
    """Documentation pages keyed by document id."""

    root: Path
    docs: dict[str, ContentDoc] = dc.field(default_factory=dict)

    def __contains__(self, doc_id: object) -> bool:
        return doc_id in self.docs

    def __iter__(self) -> cabc.Iterator[ContentDoc]:
        return iter(self.docs[key] for key in sorted(self.docs))

    def __len__(self) -> int:
        return len(self.docs)

    def get(self, doc_id: str) -> ContentDoc | None:
        """Return the page registered under ``doc_id`` or None."""
        return self.docs.get(doc_id)

    def by_source(self, source: str) -> ContentDoc | None:
        """Return the page whose POSIX source path equals ``source``."""
        for doc in self.docs.values():
            if doc.source == source:
                return doc
        return None


def discover_content(docs_dir: Path) -> ContentIndex:
    """Scan ``docs_dir`` and return an index of every documentation page.

    Parameters
    ----------
    docs_dir : Path
        Root directory of the documentation sources.

    Returns
    -------
    ContentIndex
        Pages keyed by document id.

    Raises
    ------
    FileNotFoundError
        If ``docs_dir`` does not exist.
    ContentError
        If front matter cannot be parsed, or two pages share an id or slug.
    """
    if not docs_dir.is_dir():
        msg = f"Docs directory '{docs_dir}' not found."
        raise FileNotFoundError(msg)

    index = ContentIndex(root=docs_dir)
    slugs: dict[str, str] = {}
    for path in _iter_sources(docs_dir):
        doc = _load_doc(path, docs_dir)
        existing = index.docs.get(doc.doc_id)
        if existing is not None:
            msg = (
                f"Document id '{doc.doc_id}' is declared by both "
                f"'{existing.source}' and '{doc.source}'."
            )
            raise ContentError(msg)
        if doc.slug in slugs:
            msg = (
                f"Slug '{doc.slug}' is used by both '{slugs[doc.slug]}' "
                f"and '{doc.doc_id}'."
            )
            raise ContentError(msg)
        index.docs[doc.doc_id] = doc
        slugs[doc.slug] = doc.doc_id
    return index


def _iter_sources(docs_dir: Path) -> list[Path]:
    files: list[Path] = []
    for path in docs_dir.rglob("*"):
        if not path.is_file() or path.suffix.lower() not in CONTENT_SUFFIXES:
            continue
        rel_parts = path.relative_to(docs_dir).parts
        if any(part.startswith(("_", ".")) for part in rel_parts):
            continue
        files.append(path)
    return sorted(files, key=lambda item: item.relative_to(docs_dir).as_posix())


def _load_doc(path: Path, docs_dir: Path) -> ContentDoc:
    source = path.relative_to(docs_dir).as_posix()
    text = path.read_text(encoding="utf-8")
    front_matter, body = split_front_matter(text, source=source)

    directory = [_strip_number_prefix(part) for part in Path(source).parent.parts]
    name = _strip_number_prefix(path.stem)
    custom_id = front_matter.get("id")
    if custom_id is not None:
        name = str(custom_id).strip()
        if not name or "/" in name:
            msg = f"Front matter 'id' in '{source}' must be a non-empty name without '/'."
            raise ContentError(msg)
    doc_id = "/".join([*directory, name])

    slug = _resolve_slug(front_matter.get("slug"), directory, doc_id)
    title = _optional(front_matter.get("title")) or _first_heading(body) or name
    return ContentDoc(
        doc_id=doc_id,
        source=source,
        slug=slug,
        title=title,
        sidebar_label=_optional(front_matter.get("sidebar_label")),
        body=body,
    )


def split_front_matter(
    text: str, *, source: str = "<string>"
) -> tuple[dict[str, typ.Any], str]:
    """Split a leading ``---`` YAML block from ``text``.

    Returns the parsed front matter (empty when absent) and the remaining
    markdown body.
    """
    match = FRONT_MATTER_PATTERN.match(text)
    if not match:
        return {}, text
    loader = YAML(typ="safe")
    loader.version = (1, 2)
    try:
        loaded = loader.load(match.group(1)) or {}
    except YAMLError as exc:
        msg = f"Invalid front matter in '{source}': {exc}"
        raise ContentError(msg) from exc
    if not isinstance(loaded, dict):
        msg = f"Front matter in '{source}' must be a mapping."
        raise ContentError(msg)
    return dict(loaded), text[match.end() :]


def _resolve_slug(value: object, directory: list[str], doc_id: str) -> str:
    raw = _optional(value)
    if raw is None:
        return _normalize_slug(f"/{doc_id}")
    if raw.startswith("/"):
        return _normalize_slug(raw)
    return _normalize_slug(posixpath.join("/", *directory, raw))


def _normalize_slug(slug: str) -> str:
    normalized = posixpath.normpath(slug)
    if normalized.startswith("//"):
        normalized = "/" + normalized.lstrip("/")
    return normalized if normalized != "." else "/"


def _strip_number_prefix(segment: str) -> str:
    return NUMBER_PREFIX_PATTERN.sub("", segment)


def _first_heading(body: str) -> str | None:
    match = HEADING_PATTERN.search(body)
    return match.group(1).strip() if match else None


def _optional(value: object) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


__all__ = [
    "ContentDoc",
    "ContentError",
    "ContentIndex",
    "discover_content",
    "split_front_matter",
]
