"""Load and validate the DSA Notes site configuration.

This subpackage parses the project's ``site.yaml`` file, applies the
deployment environment overrides it declares, resolves sidebar, docs, and
output paths relative to the file, and produces typed dataclasses
(:class:`SiteConfig`, :class:`DocsPresetConfig`, :class:`ThemeConfig`, ...)
that the route generator consumes. The primary entry point is
:func:`load_site_config`.

Examples
--------
>>> from pathlib import Path
>>> from dsa_pages.config import load_site_config
>>> site = load_site_config(Path("config/site.yaml"))  # doctest: +SKIP
>>> site.docs.route_base_path  # doctest: +SKIP
'/'
"""

from .loader import load_site_config
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

__all__ = [
    "ColorModeConfig",
    "DocsPresetConfig",
    "DocumentShapeError",
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
    "load_site_config",
]
