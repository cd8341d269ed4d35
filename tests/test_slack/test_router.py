"""Integration tests for the /slack/commands and /slack/interactions endpoints.

Background tasks run inside the TestClient before ``post`` returns, so the
fake chat clients show every outbound call the request caused.
"""

import json
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from incident_bot.app import app

SECRET = "test-verification-token"


@pytest.fixture
def app_client(settings, clients):
    """TestClient with settings and chat clients injected through the lifespan."""
    with (
        patch("incident_bot.app.get_settings", return_value=settings),
        patch("incident_bot.app.build_chat_clients", return_value=clients),
        patch("incident_bot.app.configure_logging"),
    ):
        with TestClient(app) as client:
            yield client


def _submission(token: str = SECRET, **submission: object) -> dict:
    fields = {"commander": "U1", "comms": "U2", "title": "API latency", "description": ""}
    fields.update(submission)
    return {
        "type": "dialog_submission",
        "callback_id": "submit-incident",
        "token": token,
        "user": {"id": "U1"},
        "submission": fields,
    }


# -- Slash command --


def test_command_acks_empty_and_opens_dialog(app_client: TestClient, bot, user):
    response = app_client.post(
        "/slack/commands",
        data={"token": SECRET, "trigger_id": "T1.2", "user_id": "U1", "command": "/incident"},
    )
    assert response.status_code == 200
    assert response.content == b""
    assert bot.operations == ["dialog.open"]
    assert user.calls == []


@pytest.mark.parametrize("form", [{"token": "wrong", "trigger_id": "T1"}, {"trigger_id": "T1"}])
def test_command_bad_token_is_401_without_calls(app_client: TestClient, bot, user, form: dict):
    response = app_client.post("/slack/commands", data=form)
    assert response.status_code == 401
    assert bot.calls == []
    assert user.calls == []


# -- Interactions --


def test_submission_acks_and_provisions(app_client: TestClient, bot):
    response = app_client.post(
        "/slack/interactions", data={"payload": json.dumps(_submission())}
    )
    assert response.status_code == 200
    assert response.content == b""
    assert bot.operations.count("conversations.create") == 1
    summary = [f for f in bot.calls_to("chat.postMessage") if "blocks" in f]
    assert len(summary) == 1


def test_submission_bad_token_is_401_without_calls(app_client: TestClient, bot, user):
    response = app_client.post(
        "/slack/interactions", data={"payload": json.dumps(_submission(token="forged"))}
    )
    assert response.status_code == 401
    assert bot.calls == []
    assert user.calls == []


def test_submission_malformed_payload_is_400(app_client: TestClient, bot):
    response = app_client.post("/slack/interactions", data={"payload": "{not json"})
    assert response.status_code == 400
    assert bot.calls == []


def test_submission_missing_payload_is_400(app_client: TestClient):
    response = app_client.post("/slack/interactions", data={"token": SECRET})
    assert response.status_code == 400


@pytest.mark.parametrize("path", ["/slack/commands", "/slack/interactions"])
def test_non_utf8_body_is_400_without_calls(app_client: TestClient, bot, user, path: str):
    response = app_client.post(
        path,
        content=b"token=\xff\xfe&trigger_id=T1",
        headers={"Content-Type": "application/x-www-form-urlencoded"},
    )
    assert response.status_code == 400
    assert bot.calls == []
    assert user.calls == []
