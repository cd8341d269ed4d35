"""Shared test fixtures."""

import asyncio
from typing import Any

import pytest
from fastapi.testclient import TestClient

from incident_bot.app import app
from incident_bot.config import Settings
from incident_bot.slack.client import ChatClients

TEST_SECRET = "test-verification-token"
CHANNEL_ID = "C0INCIDENT"
CHANNEL_NAME = "incident-2024-03-07-4821"


class FakeChatClient:
    """In-memory ChatClient that records every send() and returns scripted bodies.

    ``responses`` maps an operation to a body dict, an exception instance, a
    callable taking the fields, or a list consumed one item per call.
    ``delays`` maps an operation to seconds to sleep before answering.
    """

    def __init__(
        self,
        responses: dict[str, Any] | None = None,
        delays: dict[str, float] | None = None,
    ) -> None:
        self.responses = responses or {}
        self.delays = delays or {}
        self.calls: list[tuple[str, dict]] = []
        self.completed: list[str] = []

    async def send(self, operation: str, fields: dict[str, Any]) -> dict[str, Any]:
        self.calls.append((operation, dict(fields)))
        if operation in self.delays:
            await asyncio.sleep(self.delays[operation])

        response = self.responses.get(operation, {"ok": True})
        if isinstance(response, list):
            response = response.pop(0) if len(response) > 1 else response[0]
        if callable(response):
            response = response(fields)
        self.completed.append(operation)
        if isinstance(response, BaseException):
            raise response
        return response

    @property
    def operations(self) -> list[str]:
        return [op for op, _ in self.calls]

    def calls_to(self, operation: str) -> list[dict]:
        return [fields for op, fields in self.calls if op == operation]


def make_settings(**overrides: Any) -> Settings:
    """Settings isolated from the local .env file."""
    values: dict[str, Any] = {
        "slack_verification_token": TEST_SECRET,
        "slack_bot_token": "xoxb-test",
        "slack_user_token": "xoxp-test",
        "roster_strategy": "static",
        "incident_roster": "U_ROSTER1,U_ROSTER2",
        "incident_doc_url": "https://docs.example.com/incident",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture(scope="session")
def client() -> TestClient:
    """Create a TestClient for the FastAPI app."""
    return TestClient(app)


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def bot() -> FakeChatClient:
    return FakeChatClient(
        {"conversations.create": {"ok": True, "channel": {"id": CHANNEL_ID, "name": CHANNEL_NAME}}}
    )


@pytest.fixture
def user() -> FakeChatClient:
    return FakeChatClient(
        {"conversations.create": {"ok": True, "channel": {"id": CHANNEL_ID, "name": CHANNEL_NAME}}}
    )


@pytest.fixture
def clients(bot: FakeChatClient, user: FakeChatClient) -> ChatClients:
    return ChatClients(bot=bot, user=user)


@pytest.fixture
def settings_factory():
    """Return ``make_settings`` so tests can build settings with overrides."""
    return make_settings


@pytest.fixture
def fake_chat():
    """Return the FakeChatClient class for tests that script their own responses."""
    return FakeChatClient
