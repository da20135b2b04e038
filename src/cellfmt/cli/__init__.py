"""Command-line interface for cellfmt."""
