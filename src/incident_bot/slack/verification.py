"""Shared-secret webhook verification and FastAPI dependencies."""

import hmac
import json
import logging
from collections.abc import Mapping
from urllib.parse import parse_qs

from fastapi import HTTPException, Request

from incident_bot.config import Settings
from incident_bot.errors import Unauthorized

logger = logging.getLogger(__name__)


def verify_webhook(body: Mapping | None, secret: str) -> None:
    """Raise Unauthorized unless ``body["token"]`` matches the configured secret.

    An empty configured secret rejects everything.
    """
    if not body or not secret:
        raise Unauthorized()
    token = body.get("token")
    if not isinstance(token, str) or not hmac.compare_digest(token.encode(), secret.encode()):
        raise Unauthorized()


def parse_form_body(raw_body: bytes) -> dict[str, str]:
    """Decode an application/x-www-form-urlencoded body, first value per key."""
    form = parse_qs(raw_body.decode("utf-8"), keep_blank_values=True)
    return {key: values[0] for key, values in form.items()}


def _settings(request: Request) -> Settings:
    return request.app.state.settings


async def _read_form(request: Request) -> dict[str, str]:
    try:
        return parse_form_body(await request.body())
    except UnicodeDecodeError as exc:
        raise HTTPException(status_code=400, detail="Request body is not valid UTF-8") from exc


async def verified_command(request: Request) -> dict[str, str]:
    """Parse and verify a slash-command delivery.

    Raises HTTPException(400) for an undecodable body and 401 before anything
    else happens when the token is wrong.
    """
    form = await _read_form(request)
    try:
        verify_webhook(form, _settings(request).slack_verification_token)
    except Unauthorized as exc:
        logger.warning("Rejected slash command: %s", exc)
        raise HTTPException(status_code=exc.status_code, detail=str(exc)) from exc
    return form


async def verified_interaction(request: Request) -> dict:
    """Parse the JSON ``payload`` field of an interaction delivery and verify it.

    Raises HTTPException(400) for an unreadable payload, 401 for a bad token.
    """
    form = await _read_form(request)
    try:
        payload = json.loads(form.get("payload", ""))
    except json.JSONDecodeError as exc:
        raise HTTPException(status_code=400, detail="Missing or malformed payload") from exc
    if not isinstance(payload, dict):
        raise HTTPException(status_code=400, detail="Missing or malformed payload")

    try:
        verify_webhook(payload, _settings(request).slack_verification_token)
    except Unauthorized as exc:
        logger.warning("Rejected interaction: %s", exc)
        raise HTTPException(status_code=exc.status_code, detail=str(exc)) from exc
    return payload
