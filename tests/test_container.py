"""Tests for container wiring."""

import asyncio

import pytest

from eventface.config import Settings
from eventface.containers import build_container
from eventface.errors import ConfigurationError


def test_build_container_creates_services(settings: Settings) -> None:
    container = build_container(settings)
    assert container.upload_service is not None
    assert container.lifecycle_service.processing_service.delay_seconds == 0
    assert container.retention_service.retention_days == 7
    asyncio.run(container.close_resources())


def test_build_container_rejects_blank_credentials(settings: Settings) -> None:
    blank = settings.model_copy(update={"admin_token": "  "})

    with pytest.raises(ConfigurationError, match="admin_token"):
        build_container(blank)


def test_build_container_bounds_storage_uploads(
    settings: Settings, monkeypatch: pytest.MonkeyPatch
) -> None:
    captured: dict[str, object] = {}

    def fake_create_client(url: str, key: str, options: object = None) -> object:
        captured["url"] = url
        captured["options"] = options
        return object()

    monkeypatch.setattr("eventface.containers.create_client", fake_create_client)
    configured = settings.model_copy(update={"upload_timeout_seconds": 7})

    container = build_container(configured)

    assert captured["url"] == "https://example.supabase.co"
    assert getattr(captured["options"], "storage_client_timeout") == 7
    asyncio.run(container.close_resources())
