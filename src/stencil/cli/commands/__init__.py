"""Top-level stencil commands (auto-discovered)."""
