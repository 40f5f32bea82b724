"""
Shared test fixtures for the Promptdeck test suite.

Provides real settings files on disk, a sample matcher payload and fake
collaborators (matcher, pointer source, notifier) that record calls.
"""

import pytest
import toml


@pytest.fixture
def tmp_settings(tmp_path):
    """Create a real settings TOML file with all sections."""
    settings_path = tmp_path / "settings.toml"
    data = {
        "matcher": {"base_url": "http://matcher.test", "endpoint": "/v1/search", "timeout_s": 3.0},
        "notifications": {"duration_ms": 4000},
        "panels": {"search_width": 800},
        "logging": {"level": "DEBUG"},
    }
    settings_path.write_text(toml.dumps(data))
    return settings_path


@pytest.fixture
def sample_payload():
    """Matcher JSON body covering every category."""
    return {
        "template": [
            {
                "name": "Cold email",
                "role": "Sales",
                "tags": ["email", "outreach"],
                "description": "Introduce a product to a new lead",
                "score": 0.93521,
            },
        ],
        "vault": [
            {"name": "Q3 newsletter", "generatedContent": "Dear readers...", "score": 0.5},
        ],
        "initial-prompt": [
            {"name": "Draft", "initialPrompt": "Write an email"},
        ],
        "refined-prompt": [],
        "content": [
            {"name": "Blog intro", "generatedContent": "Once upon a time"},
        ],
    }


class FakeMatcher:
    """Async matcher returning a canned response or raising."""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.queries = []

    async def search(self, query):
        self.queries.append(query)
        if self.error is not None:
            raise self.error
        return self.response


class FakePointerSource:
    """Pointer source that counts subscriptions and emits on demand."""

    def __init__(self):
        self.handlers = {}
        self.connects = 0
        self.disconnects = 0
        self._next_id = 0

    def connect(self, handler):
        self._next_id += 1
        self.handlers[self._next_id] = handler
        self.connects += 1
        return self._next_id

    def disconnect(self, handler_id):
        del self.handlers[handler_id]
        self.disconnects += 1

    def press(self, target):
        for handler in list(self.handlers.values()):
            handler(target)


@pytest.fixture
def fake_pointer():
    return FakePointerSource()


@pytest.fixture
def make_matcher():
    return FakeMatcher
