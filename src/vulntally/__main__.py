"""Allow ``python -m vulntally``."""

from vulntally.cli import app

app()
