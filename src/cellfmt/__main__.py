"""Run the cellfmt CLI.

Usage:
    python -m cellfmt number --decimals 2
"""

from cellfmt.cli.app import main

if __name__ == "__main__":
    main()
