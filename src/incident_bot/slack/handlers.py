"""Slash-command and dialog-submission handling.

Both webhooks are acknowledged with an empty 200 before any outbound call;
the real work runs as a FastAPI background task and reports only through logs.
"""

import logging

from fastapi import BackgroundTasks, HTTPException

from incident_bot.config import Settings
from incident_bot.errors import ChatTransportError
from incident_bot.incident.orchestrator import declare_incident
from incident_bot.models.incident import IncidentRequest
from incident_bot.models.results import StageResult
from incident_bot.slack.client import ChatClient, ChatClients
from incident_bot.slack.forms import INCIDENT_CALLBACK_ID, build_incident_dialog, encode_dialog

logger = logging.getLogger(__name__)

SUBMISSION_TYPE = "dialog_submission"


async def open_incident_dialog(client: ChatClient, trigger_id: str, user_id: str) -> StageResult:
    """Open the incident dialog for the user who ran the slash command."""
    try:
        body = await client.send(
            "dialog.open",
            {"trigger_id": trigger_id, "dialog": encode_dialog(build_incident_dialog(user_id))},
        )
    except ChatTransportError as exc:
        logger.error("Opening incident dialog for %s failed: %s", user_id, exc)
        return StageResult.failure("dialog", str(exc), target=user_id)

    if body.get("ok"):
        logger.info("Opened incident dialog for %s", user_id)
        return StageResult.success("dialog", "Incident dialog opened", target=user_id)
    logger.error("Opening incident dialog for %s failed: %s", user_id, body.get("error"))
    return StageResult.failure(
        "dialog", f"Opening the incident dialog failed. Reason: {body.get('error')}", target=user_id
    )


def handle_slash_command(
    form: dict[str, str],
    clients: ChatClients,
    background_tasks: BackgroundTasks,
) -> None:
    """Schedule the dialog for a verified slash command."""
    trigger_id = form.get("trigger_id", "")
    user_id = form.get("user_id", "")
    if not trigger_id:
        raise HTTPException(status_code=400, detail="Missing trigger_id")

    background_tasks.add_task(open_incident_dialog, clients.bot, trigger_id, user_id)


def handle_interaction(
    payload: dict,
    settings: Settings,
    clients: ChatClients,
    background_tasks: BackgroundTasks,
) -> None:
    """Schedule incident provisioning for a verified dialog submission.

    Interactions other than the incident dialog are acknowledged and ignored.
    """
    if payload.get("type") != SUBMISSION_TYPE or payload.get("callback_id") != INCIDENT_CALLBACK_ID:
        logger.info(
            "Ignoring interaction type=%s callback_id=%s",
            payload.get("type"),
            payload.get("callback_id"),
        )
        return

    try:
        request = IncidentRequest.from_submission(payload)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    logger.info("Incident '%s' declared by %s", request.title, request.reporter_id)
    background_tasks.add_task(declare_incident, request, settings, clients)
