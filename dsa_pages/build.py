"""High-level orchestration of a site structure build.

:class:`SiteBuilder` consumes a :class:`~dsa_pages.config.SiteConfig`, loads
the sidebar file and documentation sources it points at, validates them,
derives the route table and sidebar UI state, and (via :meth:`SiteBuilder.run`)
writes the manifests into the configured output directory.

The pipeline is:

1. load the sidebars and reject duplicated document ids;
2. discover the documentation pages;
3. derive the route table, reporting sidebar references without a page;
4. check navbar ``to`` targets against the generated routes;
5. check relative markdown links between pages;
6. derive the sidebar UI state.

Broken links are handled according to ``onBrokenLinks`` and
``onBrokenMarkdownLinks``; tolerated problems are collected on
:attr:`BuildResult.warnings`.

Example
-------
>>> from pathlib import Path
>>> from dsa_pages.config import load_site_config
>>> from dsa_pages.build import SiteBuilder
>>> config = load_site_config(Path("config/site.yaml"))  # doctest: +SKIP
>>> SiteBuilder(config).run()  # doctest: +SKIP
[PosixPath('.docusaurus/routes.js'), ...]
"""

from __future__ import annotations

import dataclasses as dc
import logging
import typing as typ

from .content import discover_content
from .links import LinkReporter, check_markdown_links, check_navbar_links
from .manifest import ManifestWriter
from .navigation import build_sidebar_state
from .routes import RouteTableBuilder
from .sidebars import load_sidebars

if typ.TYPE_CHECKING:
    from pathlib import Path

    from .config import SiteConfig
    from .content import ContentIndex
    from .navigation import NavItem
    from .routes import RouteTable
    from .sidebars import SidebarsConfig

logger = logging.getLogger(__name__)


@dc.dataclass(slots=True)
class BuildResult:
    """Everything a build derives, before anything is written."""

    route_table: RouteTable
    sidebar_state: dict[str, list[NavItem]]
    sidebars: SidebarsConfig
    content: ContentIndex
    warnings: list[str]


class SiteBuilder:
    """Validate site structure and produce its manifests."""

    def __init__(self, site_config: SiteConfig, *, output_dir: Path | None = None) -> None:
        """Initialize the builder.

        Parameters
        ----------
        site_config : SiteConfig
            Parsed site configuration (see
            :func:`dsa_pages.config.load_site_config`).
        output_dir : Path, optional
            Override for the manifest output directory; defaults to the
            configured ``outputDir``.
        """
        self.site_config = site_config
        self.output_dir = output_dir or site_config.output_dir

    def build(self) -> BuildResult:
        """Run every validation step and return the derived structures.

        Raises
        ------
        SidebarError
            If the sidebar file is malformed or repeats a document id.
        ContentError
            If documentation sources are malformed or collide.
        SiteBuildError
            If a broken link is found under the ``throw`` policy, two pages
            share a path, or the home sidebar has no page.
        """
        docs = self.site_config.docs
        reporter = LinkReporter(
            on_broken_links=self.site_config.on_broken_links,
            on_broken_markdown_links=self.site_config.on_broken_markdown_links,
        )

        sidebars = load_sidebars(docs.sidebar_path)
        sidebars.validate_unique()
        content = discover_content(docs.path)
        logger.debug(
            "Loaded %d sidebar(s) and %d page(s)", len(sidebars.sidebars), len(content)
        )

        route_table = RouteTableBuilder(
            self.site_config, sidebars, content, reporter
        ).build()
        check_navbar_links(
            self.site_config.theme.navbar,
            base_url=self.site_config.base_url,
            route_paths=route_table.paths(),
            reporter=reporter,
        )
        check_markdown_links(content, reporter)
        sidebar_state = build_sidebar_state(sidebars, content, route_table)
        return BuildResult(
            route_table=route_table,
            sidebar_state=sidebar_state,
            sidebars=sidebars,
            content=content,
            warnings=list(reporter.warnings),
        )

    def run(self) -> list[Path]:
        """Build and write the manifests, returning the written paths."""
        return self.write(self.build())

    def write(self, result: BuildResult) -> list[Path]:
        """Write the manifests for an earlier :meth:`build` result."""
        writer = ManifestWriter(self.output_dir)
        return writer.write(
            result.route_table,
            result.sidebar_state,
            base_url=self.site_config.base_url,
        )


__all__ = ["BuildResult", "SiteBuilder"]
