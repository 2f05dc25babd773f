"""Presentation layer: HTTP API, schemas, middleware and Markdown reports."""
