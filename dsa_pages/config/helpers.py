"""Utility helpers shared by the site configuration loader."""

from __future__ import annotations

import logging
import typing as typ

from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

from .models import LinkPolicy, SiteConfigError

logger = logging.getLogger(__name__)

COLOR_MODES = frozenset({"light", "dark"})
NAVBAR_POSITIONS = frozenset({"left", "right"})


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _require_str(payload: typ.Mapping[str, typ.Any], key: str, where: str) -> str:
    """Return a required non-empty string field or raise SiteConfigError."""
    value = _optional_str(payload.get(key))
    if value is None:
        msg = f"{where} is missing required '{key}'."
        raise SiteConfigError(msg)
    return value


def _bool_option(
    payload: typ.Mapping[str, typ.Any], key: str, default: bool, where: str
) -> bool:
    """Return a boolean option, rejecting non-boolean YAML values."""
    value = payload.get(key, default)
    if not isinstance(value, bool):
        msg = f"{where}.{key} must be a boolean, got {value!r}."
        raise SiteConfigError(msg)
    return value


def _mapping(value: object, where: str) -> typ.Mapping[str, typ.Any]:
    """Return ``value`` as a mapping, treating None as empty."""
    if value is None:
        return {}
    if not isinstance(value, dict):
        msg = f"{where} must be a mapping."
        raise SiteConfigError(msg)
    return value


def _normalize_base_url(value: object | None) -> str:
    """Return a base URL with exactly one leading and trailing slash."""
    text = _optional_str(value) or "/"
    trimmed = text.strip("/")
    if not trimmed:
        return "/"
    return f"/{trimmed}/"


def _normalize_route_base_path(value: object | None) -> str:
    """Return a route base path with a leading slash and no trailing slash."""
    text = _optional_str(value) or "/"
    trimmed = text.strip("/")
    if not trimmed:
        return "/"
    return f"/{trimmed}"


def _parse_policy(value: object | None, default: LinkPolicy, key: str) -> LinkPolicy:
    """Parse a throw/warn/ignore policy value."""
    if value is None:
        return default
    try:
        return LinkPolicy(str(value).strip().lower())
    except ValueError as exc:
        allowed = ", ".join(policy.value for policy in LinkPolicy)
        msg = f"{key} must be one of {allowed}; got {value!r}."
        raise SiteConfigError(msg) from exc


def _normalize_languages(value: object | None) -> tuple[str, ...]:
    """Return language tags lowercased, de-duplicated, in authored order."""
    if value is None:
        return ()
    if isinstance(value, str):
        value = value.split()
    if not isinstance(value, list):
        msg = "themeConfig.prism.additionalLanguages must be a list."
        raise SiteConfigError(msg)
    seen: dict[str, None] = {}
    for item in value:
        text = _optional_str(item)
        if text:
            seen.setdefault(text.lower(), None)
    languages = tuple(seen)
    for language in languages:
        if not _is_known_language(language):
            logger.warning("Unknown syntax highlighting language %r", language)
    return languages


def _is_known_language(language: str) -> bool:
    """Return True when Pygments has a lexer registered under ``language``."""
    try:
        get_lexer_by_name(language)
    except ClassNotFound:
        return False
    return True


def _deep_merge(
    base: typ.Mapping[str, typ.Any], override: typ.Mapping[str, typ.Any]
) -> dict[str, typ.Any]:
    """Merge ``override`` onto ``base``; nested mappings merge, lists replace."""
    result: dict[str, typ.Any] = dict(base)
    for key, value in override.items():
        current = result.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            result[key] = _deep_merge(current, value)
        else:
            result[key] = value
    return result


__all__ = [
    "COLOR_MODES",
    "NAVBAR_POSITIONS",
    "_bool_option",
    "_deep_merge",
    "_is_known_language",
    "_mapping",
    "_normalize_base_url",
    "_normalize_languages",
    "_normalize_route_base_path",
    "_optional_str",
    "_parse_policy",
    "_require_str",
]
