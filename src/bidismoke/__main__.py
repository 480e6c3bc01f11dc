"""Allow running as ``python -m bidismoke``."""

from bidismoke.cli.main import app

app()
