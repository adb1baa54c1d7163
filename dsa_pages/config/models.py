"""Typed dataclasses describing DSA Notes site configuration structures."""

from __future__ import annotations

import dataclasses as dc
import enum
from pathlib import Path


class SiteConfigError(ValueError):
    """Raised when the site configuration is invalid or incomplete."""


class DocumentShapeError(TypeError):
    """Raised when a YAML document does not have the expected top-level shape."""


class LinkPolicy(enum.StrEnum):
    """How the build reacts to a broken link."""

    THROW = "throw"
    WARN = "warn"
    IGNORE = "ignore"


@dc.dataclass(slots=True)
class DocsPresetConfig:
    """Options of the documentation plugin bundled in the classic preset."""

    sidebar_path: Path
    path: Path
    route_base_path: str = "/"
    edit_url: str | None = None
    home_sidebar: str | None = None

    def edit_url_for(self, source: str) -> str | None:
        """Return the edit link for a page at docs-relative ``source``.

        The link is ``editUrl`` followed by the docs directory name and the
        page's source path, or None when no ``editUrl`` is configured.

        >>> docs = DocsPresetConfig(
        ...     sidebar_path=Path("sidebars.yaml"),
        ...     path=Path("docs"),
        ...     edit_url="https://github.com/Kalyxon/my-dsa-notes/tree/main/",
        ... )
        >>> docs.edit_url_for("graphs/bfs.md")
        'https://github.com/Kalyxon/my-dsa-notes/tree/main/docs/graphs/bfs.md'
        """
        if self.edit_url is None:
            return None
        return f"{self.edit_url}{self.path.name}/{source}"


@dc.dataclass(slots=True)
class PresetConfig:
    """A named preset entry from the ``presets`` list.

    ``blog`` and ``custom_css`` are validated and kept for the theme build;
    the route manifests do not depend on them.
    """

    name: str
    docs: DocsPresetConfig | None
    blog: bool = False
    custom_css: str | None = None


@dc.dataclass(slots=True)
class ColorModeConfig:
    """Initial colour mode and switcher behaviour."""

    default_mode: str = "light"
    disable_switch: bool = False
    respect_prefers_color_scheme: bool = False


@dc.dataclass(slots=True)
class LogoConfig:
    """Navbar logo metadata."""

    src: str
    alt: str | None = None
    href: str | None = None


@dc.dataclass(slots=True)
class NavbarItemConfig:
    """A single navbar link.

    Exactly one of ``to`` (an internal route) or ``href`` (an external URL) is
    set.
    """

    label: str
    to: str | None = None
    href: str | None = None
    position: str = "left"


@dc.dataclass(slots=True)
class NavbarConfig:
    """Navbar title, logo, and ordered link items."""

    title: str | None = None
    logo: LogoConfig | None = None
    items: list[NavbarItemConfig] = dc.field(default_factory=list)
    hide_on_scroll: bool = False


@dc.dataclass(slots=True)
class FooterConfig:
    """Footer style and copyright template.

    Rendered by the theme, not by the route build; the template is parsed
    here so a malformed footer fails validation early.
    """

    style: str = "light"
    copyright: str | None = None

    def render_copyright(self, year: int) -> str | None:
        """Return the copyright line with ``{year}`` substituted."""
        if self.copyright is None:
            return None
        return self.copyright.replace("{year}", str(year))


@dc.dataclass(slots=True)
class PrismConfig:
    """Code highlighting themes and extra language tags."""

    theme: str | None = None
    dark_theme: str | None = None
    additional_languages: tuple[str, ...] = ()


@dc.dataclass(slots=True)
class ThemeConfig:
    """The ``themeConfig`` block."""

    color_mode: ColorModeConfig = dc.field(default_factory=ColorModeConfig)
    navbar: NavbarConfig = dc.field(default_factory=NavbarConfig)
    footer: FooterConfig = dc.field(default_factory=FooterConfig)
    prism: PrismConfig = dc.field(default_factory=PrismConfig)


@dc.dataclass(slots=True)
class SiteConfig:
    """A fully resolved site configuration for one deployment environment."""

    title: str
    url: str
    base_url: str
    tagline: str | None = None
    on_broken_links: LinkPolicy = LinkPolicy.THROW
    on_broken_markdown_links: LinkPolicy = LinkPolicy.WARN
    favicon: str | None = None
    organization_name: str | None = None
    project_name: str | None = None
    presets: list[PresetConfig] = dc.field(default_factory=list)
    theme: ThemeConfig = dc.field(default_factory=ThemeConfig)
    output_dir: Path = Path(".docusaurus")
    debug: bool = True
    environment: str | None = None

    @property
    def docs(self) -> DocsPresetConfig:
        """Return the docs options of the first preset that provides them."""
        for preset in self.presets:
            if preset.docs is not None:
                return preset.docs
        msg = "No preset configures the docs plugin."
        raise SiteConfigError(msg)


__all__ = [
    "ColorModeConfig",
    "DocsPresetConfig",
    "FooterConfig",
    "LinkPolicy",
    "LogoConfig",
    "NavbarConfig",
    "NavbarItemConfig",
    "PresetConfig",
    "PrismConfig",
    "SiteConfig",
    "SiteConfigError",
    "ThemeConfig",
]
