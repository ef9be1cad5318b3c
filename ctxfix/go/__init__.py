"""Go source collaborators: tree-sitter parsing, type rendering, printing."""
