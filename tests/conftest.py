"""Shared fixtures that lay out a throwaway DSA Notes site under ``tmp_path``."""

from __future__ import annotations

import copy
import typing as typ

import pytest
from ruamel.yaml import YAML

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

DEFAULT_SIDEBARS: dict[str, list[typ.Any]] = {
    "dsa": [
        "intro",
        {
            "type": "category",
            "label": "Data Structures",
            "items": ["arrays", "linked-list"],
        },
    ]
}

DEFAULT_DOCS: dict[str, str] = {
    "intro.md": "---\ntitle: Introduction\n---\n\n# Introduction\n\nSee [Arrays](arrays.md).\n",
    "arrays.md": "# Arrays\n\nContiguous storage.\n",
    "linked-list.md": "# Linked List\n\nNodes and pointers.\n",
}


def site_payload(**overrides: typ.Any) -> dict[str, typ.Any]:
    """Return a minimal site.yaml mapping with ``overrides`` applied on top."""
    payload: dict[str, typ.Any] = {
        "title": "DSA Notes",
        "url": "https://example.invalid",
        "baseUrl": "/",
        "onBrokenLinks": "throw",
        "onBrokenMarkdownLinks": "warn",
        "presets": [
            [
                "classic",
                {
                    "docs": {
                        "sidebarPath": "sidebars.yaml",
                        "path": "docs",
                        "routeBasePath": "/",
                    },
                    "blog": False,
                },
            ]
        ],
        "themeConfig": {
            "navbar": {
                "title": "DSA Notes",
                "items": [{"to": "/intro", "label": "Home", "position": "left"}],
            }
        },
        "outputDir": "build",
    }
    payload.update(overrides)
    return payload


class SiteFactory(typ.Protocol):
    def __call__(
        self,
        *,
        sidebars: cabc.Mapping[str, typ.Any] | None = None,
        docs: cabc.Mapping[str, str] | None = None,
        **config: typ.Any,
    ) -> Path: ...


def _dump(data: object, path: Path) -> None:
    yaml = YAML(typ="safe")
    yaml.default_flow_style = False
    with path.open("w", encoding="utf-8") as handle:
        yaml.dump(data, handle)


@pytest.fixture
def make_site(tmp_path: Path) -> SiteFactory:
    """Return a factory writing site.yaml, sidebars.yaml, and docs; yields the config path."""

    def _make(
        *,
        sidebars: cabc.Mapping[str, typ.Any] | None = None,
        docs: cabc.Mapping[str, str] | None = None,
        **config: typ.Any,
    ) -> Path:
        config_path = tmp_path / "site.yaml"
        _dump(site_payload(**config), config_path)
        _dump(
            copy.deepcopy(dict(sidebars if sidebars is not None else DEFAULT_SIDEBARS)),
            tmp_path / "sidebars.yaml",
        )
        docs_dir = tmp_path / "docs"
        docs_dir.mkdir(exist_ok=True)
        for name, text in (docs if docs is not None else DEFAULT_DOCS).items():
            target = docs_dir / name
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(text, encoding="utf-8")
        return config_path

    return _make
