"""cellfmt: build and preview spreadsheet custom format codes."""

__version__ = "0.1.0"
