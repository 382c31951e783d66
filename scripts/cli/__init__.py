"""
Beth Yw? command-line interface.

Imports the selected datasets from a directory, applies the area, measure
and year filters, and prints the resulting areas as tables or JSON.

Entry point: python -m scripts.cli
"""

from scripts.cli.main import main, run

__all__ = ["main", "run"]
