"""Incident channel naming and creation."""

import logging
import random
from datetime import date

from incident_bot.errors import ChannelCreationError, ChatTransportError
from incident_bot.models.incident import Channel
from incident_bot.slack.client import ChatClient

logger = logging.getLogger(__name__)

CHANNEL_PREFIX = "incident"


def generate_channel_name(today: date | None = None, rng: random.Random | None = None) -> str:
    """Return ``incident-YYYY-MM-DD-NNNN`` for the local date.

    The 4-digit suffix separates same-day incidents; collisions are not checked.
    """
    today = today or date.today()
    suffix = (rng or random).randint(1000, 9999)
    return f"{CHANNEL_PREFIX}-{today.isoformat()}-{suffix}"


async def create_incident_channel(
    client: ChatClient,
    *,
    private: bool = False,
    name: str | None = None,
) -> Channel:
    """Create the incident channel.

    Raises ChannelCreationError when the API answers ``ok: false`` and
    ChatTransportError when the reply carries no channel id. Transport
    errors from the client propagate unchanged.
    """
    name = name or generate_channel_name()
    body = await client.send("conversations.create", {"name": name, "is_private": private})
    if not body.get("ok"):
        raise ChannelCreationError(body.get("error", "unknown_error"))

    info = body.get("channel")
    if not isinstance(info, dict) or not info.get("id"):
        raise ChatTransportError("conversations.create", "response has no channel id")
    channel = Channel(id=info["id"], name=info.get("name") or name)
    logger.info("Created incident channel %s (%s)", channel.name, channel.id)
    return channel
