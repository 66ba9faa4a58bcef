"""Core rendering pipeline: registry, expressions, markup and rendering."""
