"""ASGI application built from environment settings."""

from eventface.api.app import create_app
from eventface.config import Settings
from eventface.containers import build_container

settings = Settings()
app = create_app(build_container(settings))
