"""Slack webhook routes: /incident slash command and dialog submissions."""

from fastapi import APIRouter, BackgroundTasks, Depends, Request, Response

from incident_bot.slack.handlers import handle_interaction, handle_slash_command
from incident_bot.slack.verification import verified_command, verified_interaction

router = APIRouter(prefix="/slack", tags=["slack"])


@router.post("/commands")
async def slack_command(
    request: Request,
    background_tasks: BackgroundTasks,
    form: dict = Depends(verified_command),
) -> Response:
    """Receive the ``/incident`` slash command and open the declaration dialog."""
    handle_slash_command(form, request.app.state.chat_clients, background_tasks)
    return Response(status_code=200)


@router.post("/interactions")
async def slack_interaction(
    request: Request,
    background_tasks: BackgroundTasks,
    payload: dict = Depends(verified_interaction),
) -> Response:
    """Receive the submitted dialog and provision the incident in the background."""
    handle_interaction(
        payload,
        request.app.state.settings,
        request.app.state.chat_clients,
        background_tasks,
    )
    return Response(status_code=200)
