"""
Pytest configuration for Spots backend tests.

Sets up test environment and global fixtures.
"""
import asyncio
import os
from typing import List, Optional

import pytest

# Disable config validation during tests
# This allows tests to run without requiring real environment variables
os.environ["VALIDATE_CONFIG"] = "false"

# Set test environment variables (no provider key: degraded mode by default)
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ["GOOGLE_API_KEY"] = ""
os.environ["CRON_SECRET"] = "test-cron-secret"
os.environ["SUPABASE_URL"] = ""
os.environ["SUPABASE_SECRET_KEY"] = ""

from spots_backend.agents.recommendation.types import PromptPair  # noqa: E402
from spots_backend.config import settings  # noqa: E402
from spots_backend.services.generation_transport import GenerationTransport  # noqa: E402

LIVE_TEST_KEY = "test-live-google-api-key"


class FakeTransport(GenerationTransport):
    """
    In-memory GenerationTransport.

    Yields `chunks` in order. When `error` is set it is raised just before
    yielding chunk number `fail_at` (0 = before any output).
    """

    mode = "fake"

    def __init__(self, chunks=(), error: Optional[Exception] = None, fail_at: Optional[int] = None):
        self.chunks: List[str] = list(chunks)
        self.error = error
        self.fail_at = fail_at if fail_at is not None else (len(self.chunks) if error else None)
        self.prompts: List[PromptPair] = []
        self.yielded = 0
        self.closed = False

    @property
    def calls(self) -> int:
        return len(self.prompts)

    def generate(self, prompt: PromptPair):
        self.prompts.append(prompt)
        return self._run()

    async def _run(self):
        try:
            for index, chunk in enumerate(self.chunks):
                if self.error is not None and index == self.fail_at:
                    raise self.error
                self.yielded += 1
                yield chunk
                await asyncio.sleep(0)
            if self.error is not None and self.fail_at >= len(self.chunks):
                raise self.error
        finally:
            self.closed = True


@pytest.fixture(autouse=True)
def degraded_mode(monkeypatch):
    """Every test starts without a live provider key."""
    monkeypatch.setattr(settings, "GOOGLE_API_KEY", "")
    monkeypatch.setattr(settings, "CRON_SECRET", "test-cron-secret")


@pytest.fixture
def live_mode(monkeypatch):
    """Pretend a real Gemini key is configured (no client is created)."""
    monkeypatch.setattr(settings, "GOOGLE_API_KEY", LIVE_TEST_KEY)


@pytest.fixture
def fake_transport_factory():
    return FakeTransport
