"""CLI commands for ctxfix."""
