"""Unit tests for manifest rendering and writing."""

from __future__ import annotations

import json
import typing as typ

from dsa_pages._constants import ROUTES_JS, ROUTES_JSON, SIDEBARS_JSON
from dsa_pages.build import SiteBuilder
from dsa_pages.config import load_site_config
from dsa_pages.manifest import ManifestWriter, encode_json, js_string
from dsa_pages.routes import RouteEntry, RouteTable

if typ.TYPE_CHECKING:
    from pathlib import Path

    from conftest import SiteFactory


def test_routes_js_renders_nested_routes(tmp_path: Path) -> None:
    table = RouteTable(
        routes=[
            RouteEntry(
                path="/",
                component="@theme/DocsRoot",
                hash="abc",
                routes=[
                    RouteEntry(
                        path="/intro",
                        component="@theme/DocItem",
                        hash="f00",
                        exact=True,
                        sidebar="dsa",
                        doc_id="intro",
                    )
                ],
            ),
            RouteEntry(path="*", component="@theme/NotFound"),
        ]
    )
    source = ManifestWriter(tmp_path).render_routes_js(table)

    assert "import ComponentCreator from '@docusaurus/ComponentCreator';" in source
    assert "component: ComponentCreator('/', 'abc')," in source
    intro = source.index("path: '/intro',")
    assert source.index("exact: true,", intro) < source.index("sidebar: 'dsa',", intro)
    assert "docId" not in source
    assert "component: ComponentCreator('*')," in source
    assert source.endswith("];\n")


def test_write_emits_all_manifests(make_site: SiteFactory, tmp_path: Path) -> None:
    config = load_site_config(make_site(baseUrl="/markdown-web-app/"))
    written = SiteBuilder(config).run()

    output = tmp_path / "build"
    assert written == [output / ROUTES_JS, output / ROUTES_JSON, output / SIDEBARS_JSON]
    routes = json.loads((output / ROUTES_JSON).read_text(encoding="utf-8"))
    assert routes["baseUrl"] == "/markdown-web-app/"
    assert routes["routes"][-1] == {"component": "@theme/NotFound", "path": "*"}
    sidebars = json.loads((output / SIDEBARS_JSON).read_text(encoding="utf-8"))
    assert sidebars["dsa"][0]["docId"] == "intro"
    assert "'/markdown-web-app/intro'" in (output / ROUTES_JS).read_text(
        encoding="utf-8"
    )


def test_rebuild_is_byte_identical(make_site: SiteFactory, tmp_path: Path) -> None:
    config = load_site_config(make_site())
    builder = SiteBuilder(config)
    first = {path.name: path.read_bytes() for path in builder.run()}
    second = {path.name: path.read_bytes() for path in builder.run()}
    assert first == second


def test_output_dir_override(make_site: SiteFactory, tmp_path: Path) -> None:
    config = load_site_config(make_site())
    written = SiteBuilder(config, output_dir=tmp_path / "dist").run()
    assert all(path.parent == tmp_path / "dist" for path in written)


def test_encode_json_sorts_keys_and_ends_with_newline() -> None:
    encoded = encode_json({"b": 1, "a": {"d": None, "c": True}})
    assert encoded.endswith(b"\n")
    assert json.loads(encoded) == {"a": {"c": True, "d": None}, "b": 1}
    assert encoded.index(b'"a"') < encoded.index(b'"b"')


def test_js_string_escapes_quotes_and_separators() -> None:
    assert js_string("/it's") == "'/it\\'s'"
    assert js_string("a\\b\nc\u2028") == "'a\\\\b\\nc\\u2028'"


def _leaf_entries(routes: list[dict[str, object]]) -> list[dict[str, object]]:
    leaves: list[dict[str, object]] = []
    for route in routes:
        if route["component"] == "@theme/DocItem":
            leaves.append(route)
        leaves.extend(_leaf_entries(route.get("routes", [])))  # type: ignore[arg-type]
    return leaves


def test_routes_json_carries_edit_urls(make_site: SiteFactory, tmp_path: Path) -> None:
    presets = [
        [
            "classic",
            {
                "docs": {
                    "sidebarPath": "sidebars.yaml",
                    "path": "docs",
                    "editUrl": "https://github.com/Kalyxon/my-dsa-notes/tree/main",
                }
            },
        ]
    ]
    SiteBuilder(load_site_config(make_site(presets=presets))).run()

    routes = json.loads((tmp_path / "build" / ROUTES_JSON).read_text(encoding="utf-8"))
    edit_urls = {leaf["docId"]: leaf["editUrl"] for leaf in _leaf_entries(routes["routes"])}
    assert edit_urls["arrays"] == (
        "https://github.com/Kalyxon/my-dsa-notes/tree/main/docs/arrays.md"
    ), f"got {edit_urls!r}"
    assert len(edit_urls) == 3


def test_edit_url_is_omitted_when_unset(make_site: SiteFactory, tmp_path: Path) -> None:
    SiteBuilder(load_site_config(make_site())).run()
    routes = json.loads((tmp_path / "build" / ROUTES_JSON).read_text(encoding="utf-8"))
    assert all("editUrl" not in leaf for leaf in _leaf_entries(routes["routes"]))
