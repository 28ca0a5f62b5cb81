"""Shared fixtures for the digest pipeline tests."""

from typing import List

import pytest

from cyber_digest.models import Source
from cyber_digest.utils.settings import Settings


@pytest.fixture
def settings() -> Settings:
    return Settings(
        gemini_api_key="test-key",
        gemini_model="gemini-test",
        webhook_url="https://hooks.example.com/catch/1/abc",
        fetch_workers=1,
    )


@pytest.fixture
def sources() -> List[Source]:
    return [
        Source(name="Alpha", url="https://alpha.example.com/feed"),
        Source(name="Bravo", url="https://bravo.example.com/feed"),
        Source(name="Charlie", url="https://charlie.example.com/feed"),
    ]
