"""Common literal values used across dsa_pages.

These constants keep manifest filenames, framework component names, and the
debug route table centralized so the route generator, manifest writer, and
tests import the same values without drifting. Intended for internal use
within the dsa_pages package.

Examples
--------
>>> from dsa_pages import _constants
>>> _constants.ROUTES_JS
'routes.js'
>>> _constants.DEBUG_ROUTE_PREFIX.endswith("/debug")
True
"""

ROUTES_JS = "routes.js"
ROUTES_JSON = "routes.json"
SIDEBARS_JSON = "sidebars.json"

CATCH_ALL_PATH = "*"
DEBUG_ROUTE_PREFIX = "__docusaurus/debug"
DEBUG_ROUTE_SUFFIXES = (
    "",
    "/config",
    "/content",
    "/globalData",
    "/metadata",
    "/registry",
    "/routes",
)

DEBUG_COMPONENT = "@theme/DebugPage"
LANDING_COMPONENT = "@theme/DocLanding"
DOCS_ROOT_COMPONENT = "@theme/DocsRoot"
DOC_VERSION_ROOT_COMPONENT = "@theme/DocVersionRoot"
DOC_ROOT_COMPONENT = "@theme/DocRoot"
DOC_ITEM_COMPONENT = "@theme/DocItem"
NOT_FOUND_COMPONENT = "@theme/NotFound"

CONTENT_SUFFIXES = (".md", ".mdx")
MAX_SIDEBAR_DEPTH = 32
