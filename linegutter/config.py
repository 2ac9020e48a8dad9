"""Configuration constants for LineGutter."""

import os

# Class attribute of the gutter container. Blog stylesheets key off this name.
GUTTER_CLASS = os.getenv("LINEGUTTER_GUTTER_CLASS", "line-number")

# Static site generator used to scaffold new posts (invoked as `<bin> new <path>`)
HUGO_BIN = os.getenv("LINEGUTTER_HUGO_BIN", "hugo")

# Content section new posts are created in
POST_SECTION = os.getenv("LINEGUTTER_POST_SECTION", "posts")

# Files treated as rendered pages when walking a site directory
HTML_SUFFIXES = (".html", ".htm")

# Report written by `linegutter site --report`
REPORT_NAME = "linegutter.json"
SCHEMA_VERSION = 1
