"""Allow ``python -m case7``."""

from .adapters.inbound.cli.commands import app

app()
