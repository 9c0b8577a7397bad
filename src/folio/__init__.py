"""Folio - portfolio site with a front-matter content index and structured Markdown rendering."""

__version__ = "0.1.0"
