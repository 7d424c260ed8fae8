"""`python -m dataset_advisor` runs the same Typer app as the `dataset-advisor` script."""

from __future__ import annotations

from .cli import app

if __name__ == "__main__":
    app(prog_name="dataset-advisor")
