"""ASGI entrypoint for the daily journal API."""

from daily_journal.api.app import create_app
from daily_journal.containers import build_container

app = create_app(build_container())
