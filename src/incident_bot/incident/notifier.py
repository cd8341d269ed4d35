"""Direct-message notifications for the assigned incident roles."""

import logging
from enum import Enum

from incident_bot.models.results import StageResult
from incident_bot.slack.client import ChatClient

logger = logging.getLogger(__name__)


class Role(str, Enum):
    """Incident roles that receive a direct notification."""

    COMMANDER = "commander"
    COMMUNICATIONS = "communications"


def should_notify(user_id: str | None, reporter_id: str) -> bool:
    """The reporter already knows; blank assignments have nobody to tell."""
    return bool(user_id) and user_id != reporter_id


def build_role_notification(channel_id: str, role: Role) -> str:
    return (
        f"You have been declared the incident {role.value} for <#{channel_id}>. "
        "I've already invited you to the channel, but you should get involved ASAP."
    )


async def notify_role(client: ChatClient, channel_id: str, user_id: str, role: Role) -> StageResult:
    """Send the role notification as a DM to ``user_id``."""
    stage = f"notify_{role.value}"
    body = await client.send(
        "chat.postMessage",
        {"channel": user_id, "text": build_role_notification(channel_id, role)},
    )
    if body.get("ok"):
        return StageResult.success(
            stage, f"Notification message was successfully delivered to <@{user_id}>", target=user_id
        )
    return StageResult.failure(
        stage,
        f"Notification message could not be delivered to <@{user_id}>. Reason: {body.get('error')}",
        target=user_id,
    )
