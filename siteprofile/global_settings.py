from __future__ import annotations

from typing import Any, Optional, Sequence

# Default settings

# Root directory used to resolve relative path in settings
# Default if None: the directory where the settings file is found
PROJECT_ROOT: Optional[str] = None

# Time zone used for blog post dates
# (None defaults to UTC)
TIMEZONE: Optional[str] = None

# Layout applied to pages that no PAGE_RULES entry matches
LAYOUT: str = "layout"

# Per-page layout changes, as a sequence of (pattern, layout) pairs.
#
# Patterns are globs matched against the site path (``*`` also matches
# ``/``), or regular expressions if they start with ``^`` or end with ``$``.
# A layout of None renders the page without a layout.
#
# When more than one pattern matches, the last one wins.
PAGE_RULES: Sequence[tuple[str, Optional[str]]] = [
    ("/*.xml", None),
    ("/*.json", None),
    ("/*.txt", None),
    # With alternative layout
    # ("/path/to/file.html", "otherlayout"),
    ("/feed.xml", None),
]

# Blog configuration. Any key left out takes the default shown commented out.
BLOG: dict[str, Any] = {
    # Prefix added to all links, template references and source paths
    # "prefix": "",
    # "permalink": "/{year}/{month}/{day}/{title}.html",
    # Matcher for blog source files
    # "sources": "{year}-{month}-{day}-{title}.html",
    # "taglink": "tags/{tag}.html",
    # "summary_separator": "READMORE",
    # "summary_length": 250,
    # "year_link": "/{year}.html",
    # "month_link": "/{year}/{month}.html",
    # "day_link": "/{year}/{month}/{day}.html",
    # "default_extension": ".markdown",
    "layout": "article",
    "tag_template": "tag.html",
    "calendar_template": "calendar.html",
    # Enable pagination
    # "paginate": True,
    # "per_page": 10,
    # "page_link": "page/{num}",
}

# Markdown engine and its options
MARKDOWN_ENGINE: str = "markdown"
MARKDOWN: dict[str, Any] = {
    "fenced_code_blocks": True,
    "smartypants": True,
}

# Syntax highlighting of code blocks
SYNTAX: dict[str, Any] = {
    "engine": "pygments",
    "css_class": "highlight",
    "line_numbers": False,
    "guess_lang": False,
}

# Engine used for .org sources. It is only passed on to the site generator.
ORG_ENGINE: Optional[str] = "org_ruby"

# Name of the external pipeline building front-end assets
BUNDLER_NAME: str = "webpack"

# Bundler configuration file, available as {BUNDLER_CONFIG} in the commands
BUNDLER_CONFIG: str = "./webpack.config.js"

# Command lines used to run the bundler, by build mode. Each is expanded with
# str.format, and all settings are available for expansion.
BUNDLER_COMMANDS: dict[str, str] = {
    "production": (
        "env NODE_ENV=production npx webpack -p --config {BUNDLER_CONFIG}"
        " --progress --color --display-error-details --bail"),
    "development": (
        "env NODE_ENV=development npx webpack -d --watch --config {BUNDLER_CONFIG}"
        " --color --display-error-details"),
}

# Directory where the bundler writes its output, relative to PROJECT_ROOT
BUNDLER_SOURCE: str = ".tmp/dist"

# How often to look for new bundler output, in milliseconds
BUNDLER_LATENCY_MS: int = 1000

# PostCSS plugins, in order, as (name, options) pairs
POSTCSS_PLUGINS: dict[str, Sequence[tuple[str, dict[str, Any]]]] = {
    "development": [
        ("postcss-import", {}),
        ("tailwindcss", {}),
        ("autoprefixer", {}),
    ],
    "production": [
        ("postcss-import", {}),
        ("tailwindcss", {}),
        ("autoprefixer", {}),
        ("cssnano", {}),
    ],
}

# Plugins activated in each build environment, as plugin name -> parameters
ENVIRONMENTS: dict[str, dict[str, dict[str, Any]]] = {
    "development": {
        # Reload the browser automatically whenever files change
        "livereload": {},
        "disqus": {"shortname": "guillaume-testing-disqus"},
    },
    "build": {
        "minify_css": {},
        "minify_javascript": {},
        "disqus": {"shortname": "tech-thoughts-guillaume"},
    },
}
