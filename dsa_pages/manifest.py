"""Write the generated route manifest and sidebar state to disk.

:class:`ManifestWriter` renders ``routes.js`` (the module imported by the
framework's client-side router) from the ``routes.js.jinja`` template and
writes ``routes.json`` and ``sidebars.json`` alongside it for tooling. All
three files are pure functions of their inputs: keys are emitted in a fixed
order and no timestamps are embedded, so rebuilding unchanged sources
reproduces them byte for byte.

>>> from pathlib import Path
>>> from dsa_pages.manifest import ManifestWriter
>>> writer = ManifestWriter(Path(".docusaurus"))  # doctest: +SKIP
>>> writer.write(route_table, sidebar_state, base_url="/")  # doctest: +SKIP
[PosixPath('.docusaurus/routes.js'), ...]
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import msgspec.json as msgspec_json
from jinja2 import Environment, FileSystemLoader, select_autoescape

from ._constants import ROUTES_JS, ROUTES_JSON, SIDEBARS_JSON

if typ.TYPE_CHECKING:
    from .navigation import NavItem
    from .routes import RouteTable


class ManifestWriter:
    """Render route and sidebar manifests into an output directory."""

    def __init__(self, output_dir: Path, *, templates_dir: Path | None = None) -> None:
        """Initialize the writer.

        Parameters
        ----------
        output_dir : Path
            Directory receiving the generated files; created when missing.
        templates_dir : Path, optional
            Directory containing ``routes.js.jinja``. Defaults to the
            ``dsa_pages/templates`` directory when ``None``.
        """
        self.output_dir = output_dir
        self.templates_dir = templates_dir or Path(__file__).parent / "templates"
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["js_string"] = js_string
        self.template = self.env.get_template("routes.js.jinja")

    def render_routes_js(self, route_table: RouteTable) -> str:
        """Return the ``routes.js`` module source for ``route_table``."""
        source = self.template.render(routes=route_table.routes)
        return source if source.endswith("\n") else f"{source}\n"

    def write(
        self,
        route_table: RouteTable,
        sidebar_state: dict[str, list[NavItem]],
        *,
        base_url: str,
    ) -> list[Path]:
        """Write every manifest and return the paths in a stable order."""
        self.output_dir.mkdir(parents=True, exist_ok=True)
        routes_js = self.output_dir / ROUTES_JS
        routes_js.write_text(self.render_routes_js(route_table), encoding="utf-8")

        routes_json = self.output_dir / ROUTES_JSON
        routes_json.write_bytes(
            encode_json({"baseUrl": base_url, "routes": route_table.to_list()})
        )

        sidebars_json = self.output_dir / SIDEBARS_JSON
        sidebars_json.write_bytes(encode_json(sidebar_state))
        return [routes_js, routes_json, sidebars_json]


def encode_json(payload: object) -> bytes:
    """Encode ``payload`` as indented JSON with sorted keys and a final newline."""
    encoded = msgspec_json.encode(payload, order="deterministic")
    return msgspec_json.format(encoded, indent=2) + b"\n"


def js_string(value: object) -> str:
    """Return ``value`` as a single-quoted JavaScript string literal.

    >>> js_string("/it's")
    "'/it\\\\'s'"
    """
    text = str(value)
    escaped = (
        text.replace("\\", "\\\\")
        .replace("'", "\\'")
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\u2028", "\\u2028")
        .replace("\u2029", "\\u2029")
    )
    return f"'{escaped}'"


__all__ = ["ManifestWriter", "encode_json", "js_string"]
