"""Load site configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from .helpers import (
    COLOR_MODES,
    NAVBAR_POSITIONS,
    _bool_option,
    _deep_merge,
    _mapping,
    _normalize_base_url,
    _normalize_languages,
    _normalize_route_base_path,
    _optional_str,
    _parse_policy,
    _require_str,
)
from .models import (
    ColorModeConfig,
    DocsPresetConfig,
    DocumentShapeError,
    FooterConfig,
    LinkPolicy,
    LogoConfig,
    NavbarConfig,
    NavbarItemConfig,
    PresetConfig,
    PrismConfig,
    SiteConfig,
    SiteConfigError,
    ThemeConfig,
)

DEFAULT_SIDEBAR_PATH = "sidebars.yaml"
DEFAULT_DOCS_PATH = "docs"


def load_site_config(path: Path, *, environment: str | None = None) -> SiteConfig:
    """Load the YAML configuration describing the documentation site.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML site configuration (for example,
        ``config/site.yaml``).
    environment : str, optional
        Name of an entry under the top-level ``environments`` mapping whose
        values are deep-merged over the base document before parsing. Use it
        to describe deployment-specific values such as ``baseUrl`` or
        ``organizationName`` without copying the whole file.

    Returns
    -------
    SiteConfig
        Parsed configuration with relative paths resolved against the
        directory holding ``path``.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    DocumentShapeError
        If the top-level YAML structure is not a mapping.
    SiteConfigError
        If required fields are missing, values are out of range, or the
        requested environment is not defined.

    Examples
    --------
    >>> from pathlib import Path
    >>> from dsa_pages.config import load_site_config
    >>> config = load_site_config(Path("config/site.yaml"))  # doctest: +SKIP
    >>> config.base_url  # doctest: +SKIP
    '/'
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise DocumentShapeError(msg)
    raw: dict[str, typ.Any] = dict(loaded)
    environments = _mapping(raw.pop("environments", None), "environments")
    if environment is not None:
        if environment not in environments:
            available = ", ".join(sorted(environments)) or "none"
            msg = f"Unknown environment '{environment}'. Known environments: {available}"
            raise SiteConfigError(msg)
        override = _mapping(environments[environment], f"environments.{environment}")
        raw = _deep_merge(raw, override)

    return _build_site_config(raw, root=path.parent, environment=environment)


def _build_site_config(
    raw: typ.Mapping[str, typ.Any], *, root: Path, environment: str | None
) -> SiteConfig:
    """Build a SiteConfig from a merged raw mapping."""
    presets_raw = raw.get("presets") or []
    if not isinstance(presets_raw, list):
        msg = f"presets must be a list of preset entries, got {presets_raw!r}."
        raise SiteConfigError(msg)
    presets = [
        _build_preset(entry, root=root, index=index)
        for index, entry in enumerate(presets_raw)
    ]
    if not any(preset.docs for preset in presets):
        msg = "No preset configures the docs plugin."
        raise SiteConfigError(msg)

    return SiteConfig(
        title=_require_str(raw, "title", "Site config"),
        url=_require_str(raw, "url", "Site config").rstrip("/"),
        base_url=_normalize_base_url(raw.get("baseUrl")),
        tagline=_optional_str(raw.get("tagline")),
        on_broken_links=_parse_policy(
            raw.get("onBrokenLinks"), LinkPolicy.THROW, "onBrokenLinks"
        ),
        on_broken_markdown_links=_parse_policy(
            raw.get("onBrokenMarkdownLinks"), LinkPolicy.WARN, "onBrokenMarkdownLinks"
        ),
        favicon=_optional_str(raw.get("favicon")),
        organization_name=_optional_str(raw.get("organizationName")),
        project_name=_optional_str(raw.get("projectName")),
        presets=presets,
        theme=_build_theme_config(_mapping(raw.get("themeConfig"), "themeConfig")),
        output_dir=root / str(raw.get("outputDir") or ".docusaurus"),
        debug=_bool_option(raw, "debug", True, "Site config"),
        environment=environment,
    )


def _build_preset(entry: object, *, root: Path, index: int) -> PresetConfig:
    """Build a PresetConfig from a ``[name, options]`` pair or bare name."""
    where = f"presets[{index}]"
    match entry:
        case str() as name:
            options: typ.Mapping[str, typ.Any] = {}
        case [str() as name]:
            options = {}
        case [str() as name, options_raw]:
            options = _mapping(options_raw, where)
        case _:
            msg = f"{where} must be a preset name or a [name, options] pair."
            raise SiteConfigError(msg)

    docs_raw = options.get("docs", {})
    docs = None
    if docs_raw is not False:
        docs = _build_docs_options(
            _mapping(docs_raw, f"{where}.docs"), root=root, where=f"{where}.docs"
        )
    blog_raw = options.get("blog", False)
    theme = _mapping(options.get("theme"), f"{where}.theme")
    return PresetConfig(
        name=name,
        docs=docs,
        blog=blog_raw is not False,
        custom_css=_optional_str(theme.get("customCss")),
    )


def _build_docs_options(
    payload: typ.Mapping[str, typ.Any], *, root: Path, where: str
) -> DocsPresetConfig:
    if payload.get("sidebarPath") is False:
        msg = f"{where}.sidebarPath cannot be disabled; a sidebar file is required."
        raise SiteConfigError(msg)
    sidebar_path = payload.get("sidebarPath") or DEFAULT_SIDEBAR_PATH
    docs_path = payload.get("path") or DEFAULT_DOCS_PATH
    edit_url = _optional_str(payload.get("editUrl"))
    if edit_url and not edit_url.endswith("/"):
        edit_url = f"{edit_url}/"
    home_sidebar = _optional_str(payload.get("homeSidebar"))
    return DocsPresetConfig(
        sidebar_path=root / str(sidebar_path),
        path=root / str(docs_path),
        route_base_path=_normalize_route_base_path(payload.get("routeBasePath")),
        edit_url=edit_url,
        home_sidebar=home_sidebar,
    )


def _build_theme_config(payload: typ.Mapping[str, typ.Any]) -> ThemeConfig:
    """Build the themeConfig block from its mapping."""
    return ThemeConfig(
        color_mode=_build_color_mode(_mapping(payload.get("colorMode"), "colorMode")),
        navbar=_build_navbar(_mapping(payload.get("navbar"), "navbar")),
        footer=_build_footer(_mapping(payload.get("footer"), "footer")),
        prism=_build_prism(_mapping(payload.get("prism"), "prism")),
    )


def _build_color_mode(payload: typ.Mapping[str, typ.Any]) -> ColorModeConfig:
    base = ColorModeConfig()
    default_mode = _optional_str(payload.get("defaultMode")) or base.default_mode
    if default_mode not in COLOR_MODES:
        msg = f"colorMode.defaultMode must be light or dark, got {default_mode!r}."
        raise SiteConfigError(msg)
    return ColorModeConfig(
        default_mode=default_mode,
        disable_switch=_bool_option(
            payload, "disableSwitch", base.disable_switch, "colorMode"
        ),
        respect_prefers_color_scheme=_bool_option(
            payload,
            "respectPrefersColorScheme",
            base.respect_prefers_color_scheme,
            "colorMode",
        ),
    )


def _build_navbar(payload: typ.Mapping[str, typ.Any]) -> NavbarConfig:
    logo_raw = _mapping(payload.get("logo"), "navbar.logo")
    logo = None
    if logo_raw:
        logo = LogoConfig(
            src=_require_str(logo_raw, "src", "navbar.logo"),
            alt=_optional_str(logo_raw.get("alt")),
            href=_optional_str(logo_raw.get("href")),
        )
    items = [
        _build_navbar_item(_mapping(item, f"navbar.items[{index}]"), index)
        for index, item in enumerate(payload.get("items") or [])
    ]
    return NavbarConfig(
        title=_optional_str(payload.get("title")),
        logo=logo,
        items=items,
        hide_on_scroll=_bool_option(payload, "hideOnScroll", False, "navbar"),
    )


def _build_navbar_item(payload: typ.Mapping[str, typ.Any], index: int) -> NavbarItemConfig:
    where = f"navbar.items[{index}]"
    to = _optional_str(payload.get("to"))
    href = _optional_str(payload.get("href"))
    if (to is None) == (href is None):
        msg = f"{where} must define exactly one of 'to' or 'href'."
        raise SiteConfigError(msg)
    position = _optional_str(payload.get("position")) or "left"
    if position not in NAVBAR_POSITIONS:
        msg = f"{where}.position must be left or right, got {position!r}."
        raise SiteConfigError(msg)
    return NavbarItemConfig(
        label=_require_str(payload, "label", where),
        to=to,
        href=href,
        position=position,
    )


def _build_footer(payload: typ.Mapping[str, typ.Any]) -> FooterConfig:
    return FooterConfig(
        style=_optional_str(payload.get("style")) or "light",
        copyright=_optional_str(payload.get("copyright")),
    )


def _build_prism(payload: typ.Mapping[str, typ.Any]) -> PrismConfig:
    return PrismConfig(
        theme=_optional_str(payload.get("theme")),
        dark_theme=_optional_str(payload.get("darkTheme")),
        additional_languages=_normalize_languages(payload.get("additionalLanguages")),
    )


__all__ = ["load_site_config"]
