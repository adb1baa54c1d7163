"""Unit tests for broken-link detection."""

from __future__ import annotations

import logging
import typing as typ

import pytest

from dsa_pages.build import SiteBuilder
from dsa_pages.config import LinkPolicy, NavbarConfig, NavbarItemConfig, load_site_config
from dsa_pages.links import (
    BrokenLinkError,
    BrokenMarkdownLinkError,
    LinkReporter,
    check_navbar_links,
    collect_markdown_links,
)

if typ.TYPE_CHECKING:
    from conftest import SiteFactory


def test_collect_markdown_links_skips_code() -> None:
    text = (
        "See [Arrays](arrays.md) and <https://example.invalid>.\n\n"
        "```python\n# [not a link](ignored.md)\n```\n\n"
        "| Topic | Page |\n| --- | --- |\n| Graphs | [Graphs](graphs.md#bfs) |\n"
    )
    assert collect_markdown_links(text) == [
        "arrays.md",
        "https://example.invalid",
        "graphs.md#bfs",
    ]


def _navbar(*targets: str) -> NavbarConfig:
    items = [
        NavbarItemConfig(label=f"Item {index}", to=target)
        for index, target in enumerate(targets)
    ]
    return NavbarConfig(title="DSA Notes", items=items)


@pytest.mark.parametrize(
    ("base_url", "target"),
    [
        ("/", "/intro"),
        ("/", "/intro/"),
        ("/markdown-web-app/", "/intro"),
        ("/markdown-web-app/", "/markdown-web-app/intro"),
    ],
)
def test_navbar_target_matching_a_route_passes(base_url: str, target: str) -> None:
    prefix = base_url.rstrip("/")
    reporter = LinkReporter()
    check_navbar_links(
        _navbar(target),
        base_url=base_url,
        route_paths={f"{prefix}/intro", f"{prefix}/arrays"},
        reporter=reporter,
    )
    assert reporter.warnings == []


def test_navbar_target_without_route_throws() -> None:
    with pytest.raises(BrokenLinkError, match="no page exists at '/heaps'"):
        check_navbar_links(
            _navbar("/heaps"),
            base_url="/",
            route_paths={"/intro"},
            reporter=LinkReporter(),
        )


def test_external_navbar_items_are_not_checked() -> None:
    navbar = NavbarConfig(
        items=[NavbarItemConfig(label="GitHub", href="https://github.com/Kalyxon")]
    )
    reporter = LinkReporter()
    check_navbar_links(navbar, base_url="/", route_paths=set(), reporter=reporter)
    assert reporter.warnings == []


def test_broken_navbar_link_warns_under_warn_policy(
    make_site: SiteFactory, caplog: pytest.LogCaptureFixture
) -> None:
    theme = {"navbar": {"items": [{"to": "/heaps", "label": "Heaps"}]}}
    config = load_site_config(make_site(themeConfig=theme, onBrokenLinks="warn"))
    with caplog.at_level(logging.WARNING, logger="dsa_pages.links"):
        result = SiteBuilder(config).build()
    assert any("Heaps" in warning for warning in result.warnings)
    assert "/heaps" in caplog.text


def test_broken_markdown_link_warns_by_default(
    make_site: SiteFactory, caplog: pytest.LogCaptureFixture
) -> None:
    docs = {
        "intro.md": "# Intro\n\nSee [Heaps](heaps.md).\n",
        "arrays.md": "# Arrays\n",
        "linked-list.md": "# Linked List\n",
    }
    config = load_site_config(make_site(docs=docs))
    with caplog.at_level(logging.WARNING, logger="dsa_pages.links"):
        result = SiteBuilder(config).build()

    assert result.warnings == [
        "Page 'intro.md' links to 'heaps.md', which does not resolve to a "
        "documentation file."
    ]
    assert "heaps.md" in caplog.text
    assert len(result.route_table.leaf_routes()) == 3


def test_broken_markdown_link_throws_when_configured(make_site: SiteFactory) -> None:
    docs = {
        "intro.md": "[Heaps](./structures/heaps.md)\n",
        "arrays.md": "# Arrays\n",
        "linked-list.md": "# Linked List\n",
    }
    config = load_site_config(make_site(docs=docs, onBrokenMarkdownLinks="throw"))
    with pytest.raises(BrokenMarkdownLinkError, match="structures/heaps.md"):
        SiteBuilder(config).build()


def test_markdown_links_resolve_relative_to_the_page(make_site: SiteFactory) -> None:
    docs = {
        "intro.md": "[Search](algorithms/search.md)\n",
        "algorithms/search.md": "[Back](../intro.md) [Sort](sort.mdx)\n",
        "algorithms/sort.mdx": "[Top](/intro.md)\n",
        "arrays.md": "# Arrays\n",
        "linked-list.md": "# Linked List\n",
    }
    config = load_site_config(make_site(docs=docs, onBrokenMarkdownLinks="throw"))
    result = SiteBuilder(config).build()
    assert result.warnings == []


def test_ignore_policy_records_nothing(caplog: pytest.LogCaptureFixture) -> None:
    reporter = LinkReporter(
        on_broken_links=LinkPolicy.IGNORE, on_broken_markdown_links=LinkPolicy.IGNORE
    )
    with caplog.at_level(logging.WARNING, logger="dsa_pages.links"):
        reporter.broken_link("gone")
        reporter.broken_markdown_link("also gone")
    assert reporter.warnings == []
    assert caplog.records == []
