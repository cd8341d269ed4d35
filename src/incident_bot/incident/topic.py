"""Channel topic for a new incident."""

from incident_bot.models.results import StageResult
from incident_bot.slack.client import ChatClient

STAGE = "topic"


def build_topic(commander_id: str, comms_id: str | None, doc_url: str) -> str:
    topic = f"Commander: <@{commander_id}>"
    if comms_id:
        topic += f" Comms: <@{comms_id}>"
    if doc_url:
        topic += f" Incident Doc: {doc_url}"
    return topic


def applied_topic(body: dict, requested: str) -> str:
    """Topic as stored by the API (``channel.topic.value``), else the one sent."""
    channel = body.get("channel")
    if isinstance(channel, dict) and isinstance(channel.get("topic"), dict):
        return channel["topic"].get("value") or requested
    return requested


async def set_channel_topic(
    client: ChatClient,
    channel_id: str,
    commander_id: str,
    comms_id: str | None,
    doc_url: str,
) -> StageResult:
    """Set the topic; ``ok: false`` becomes a failed result carrying the API error."""
    topic = build_topic(commander_id, comms_id, doc_url)
    body = await client.send("conversations.setTopic", {"channel": channel_id, "topic": topic})
    if body.get("ok"):
        return StageResult.success(STAGE, f"The channel topic was set to {applied_topic(body, topic)}")
    return StageResult.failure(STAGE, f"Setting the channel topic failed. Reason: {body.get('error')}")
