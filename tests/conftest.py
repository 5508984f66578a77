"""Shared fixtures for the notifier test suite."""

from unittest.mock import AsyncMock

import pytest

from src.notifications.models import NotifierConfig

SITE_URL = "https://community.preciousplastic.com"
WEBHOOK_URL = "https://discord.com/api/webhooks/123/secret"


@pytest.fixture
def site_url() -> str:
    return SITE_URL


@pytest.fixture
def webhook_url() -> str:
    return WEBHOOK_URL


@pytest.fixture
def config() -> NotifierConfig:
    """Handler configuration with a webhook configured."""
    return NotifierConfig(webhook_url=WEBHOOK_URL, site_url=SITE_URL)


@pytest.fixture
def send_message() -> AsyncMock:
    """Stand-in for the webhook sender."""
    return AsyncMock(return_value=None)
