"""Output formatting for CLI results (Rich tables, JSON, quiet ids)."""
