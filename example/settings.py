# Time zone used for blog post dates
TIMEZONE = "Europe/Rome"

# Layout used for pages without a more specific rule
# LAYOUT = "layout"

# Per-page layout changes. The last matching rule wins
PAGE_RULES = [
    ("/*.xml", None),
    ("/*.json", None),
    ("/*.txt", None),
    ("/feed.xml", None),
    ("/about.html", "page"),
]

BLOG = {
    "layout": "article",
    "tag_template": "tag.html",
    "calendar_template": "calendar.html",
    "paginate": True,
    "per_page": 10,
}

# Directory where webpack writes its output
BUNDLER_SOURCE = ".tmp/dist"

ENVIRONMENTS = {
    "development": {
        "livereload": {"port": 35729},
        "disqus": {"shortname": "example-testing"},
    },
    "build": {
        "minify_css": {},
        "minify_javascript": {},
        "disqus": {"shortname": "example"},
    },
}
