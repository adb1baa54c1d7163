"""Site structure tooling for the DSA Notes documentation site.

This package validates the hand-authored sidebar tree against the
documentation sources and derives the route manifests the static-site
framework serves, exposed through the ``dsa-pages`` CLI.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from dsa_pages import main
>>> main()  # doctest: +SKIP
>>> from dsa_pages import app
>>> app.name[0]  # doctest: +SKIP
'dsa-pages'
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
