"""Allow ``python -m dirprint``."""

from .cli import app

app()
