"""Infrastructure layer: tree-sitter parsing, parse cache, logging."""
