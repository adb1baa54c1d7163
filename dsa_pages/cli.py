"""Cyclopts CLI entrypoint for validating and building the DSA Notes site structure.

The ``dsa-pages`` console script defined here loads ``config/site.yaml``,
checks the sidebars, documentation sources, and links it references, and
writes the route manifests consumed by the static-site framework. Typical
usage is ``dsa-pages build`` locally or in CI before invoking the framework's
own build, and ``dsa-pages check`` as a fast pre-commit gate.

Examples
--------
Build manifests for the default configuration:

>>> from dsa_pages.cli import main
>>> main()  # doctest: +SKIP

Build for the GitHub Pages deployment into a custom directory:

>>> from dsa_pages.cli import app
>>> app(
...     ["build", "--environment", "github-pages", "--output-dir", "dist"]
... )  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter
from ruamel.yaml.error import YAMLError

from .build import BuildResult, SiteBuilder
from .config import DocumentShapeError, SiteConfigError, load_site_config
from .content import ContentError
from .links import SiteBuildError
from .sidebars import SidebarError

DEFAULT_CONFIG = Path("config/site.yaml")

BUILD_ERRORS = (
    FileNotFoundError,
    DocumentShapeError,
    YAMLError,
    SiteConfigError,
    SidebarError,
    ContentError,
    SiteBuildError,
)

app = App(name="dsa-pages", config=cyclopts.config.Env("INPUT_", command=False))  # type: ignore[unknown-argument]

ConfigOption = typ.Annotated[
    Path, Parameter(help="Path to site config", env_var="INPUT_CONFIG")
]
EnvironmentOption = typ.Annotated[
    str | None,
    Parameter(
        help="Deployment environment declared under 'environments'",
        env_var="INPUT_ENVIRONMENT",
    ),
]
VerboseOption = typ.Annotated[bool, Parameter(help="Log debug details")]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _configure_logging(*, verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
        force=True,
    )


def _fail(exc: Exception) -> typ.NoReturn:
    print(f"error: {exc}", file=sys.stderr)
    raise SystemExit(1) from exc


def _build(
    config: Path, environment: str | None, output_dir: Path | None = None
) -> tuple[SiteBuilder, BuildResult]:
    try:
        site_config = load_site_config(config, environment=environment)
        builder = SiteBuilder(site_config, output_dir=output_dir)
        return builder, builder.build()
    except BUILD_ERRORS as exc:
        _fail(exc)


@app.command(help="Validate the site structure and write the route manifests.")
def build(
    *,
    config: ConfigOption = DEFAULT_CONFIG,
    environment: EnvironmentOption = None,
    output_dir: typ.Annotated[
        Path | None,
        Parameter(help="Override the manifest folder", env_var="INPUT_OUTPUT_DIR"),
    ] = None,
    verbose: VerboseOption = False,
) -> None:
    """Build the route manifests for the requested site configuration.

    Parameters
    ----------
    config : Path, optional
        Path to the ``site.yaml`` configuration file (overridable via
        ``INPUT_CONFIG``).
    environment : str or None, optional
        Name of the deployment environment whose overrides apply.
    output_dir : Path or None, optional
        Directory receiving ``routes.js``, ``routes.json``, and
        ``sidebars.json``; defaults to the configured ``outputDir``.
    verbose : bool, optional
        Emit debug logging.

    Returns
    -------
    None
        Writes the manifests and prints each written path.

    Raises
    ------
    SystemExit
        With status 1 when the configuration or site structure is invalid.
    """
    _configure_logging(verbose=verbose)
    builder, result = _build(config, environment, output_dir)
    for path in builder.write(result):
        print(f"wrote {_format_path(path)}")


@app.command(help="Validate the site structure without writing anything.")
def check(
    *,
    config: ConfigOption = DEFAULT_CONFIG,
    environment: EnvironmentOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Validate sidebars, content, and links and report tolerated problems."""
    _configure_logging(verbose=verbose)
    _, result = _build(config, environment)
    leaves = len(result.route_table.leaf_routes())
    print(f"ok: {leaves} page route(s), {len(result.warnings)} warning(s)")


@app.command(help="List the page routes the site would serve.")
def routes(
    *,
    config: ConfigOption = DEFAULT_CONFIG,
    environment: EnvironmentOption = None,
) -> None:
    """Print ``<path>\\t<doc id>\\t<sidebar>`` for every page route."""
    _configure_logging(verbose=False)
    _, result = _build(config, environment)
    for route in result.route_table.leaf_routes():
        print(f"{route.path}\t{route.doc_id}\t{route.sidebar}")


def main() -> None:
    """Invoke the Cyclopts application that powers the `dsa-pages` console command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
