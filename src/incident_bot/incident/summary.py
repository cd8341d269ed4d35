"""Block Kit summary message posted into a new incident channel."""

import json
from datetime import datetime

from incident_bot.models.incident import Channel, IncidentRequest
from incident_bot.models.results import StageResult
from incident_bot.slack.client import ChatClient

STAGE = "summary"
FALLBACK_TEXT = ":rotating_light: An Incident has been declared!"
REMINDER_TEXT = ":bangbang: *Remember to Update the StatusPage* :bangbang:"


def _section(text: str) -> dict:
    return {"type": "section", "text": {"type": "mrkdwn", "text": text}}


def _fields(*texts: str) -> dict:
    return {"type": "section", "fields": [{"type": "mrkdwn", "text": t} for t in texts]}


def format_slack_date(moment: datetime) -> str:
    """Render ``moment`` with Slack's date token so clients show local time."""
    epoch = round(moment.timestamp())
    return f"<!date^{epoch}^{{date_short}} at {{time_secs}}|{epoch}>"


def build_summary_blocks(
    request: IncidentRequest,
    channel_name: str,
    channel_id: str,
    *,
    started_at: datetime,
    reminder: bool = True,
) -> list[dict]:
    """Build the summary blocks in display order.

    The description block is appended last, and only when a description was given.
    """
    comms = f"<@{request.comms_id}>" if request.comms_id else "unassigned"

    blocks = [_section(f"*[{channel_name}] An Incident has been opened by <@{request.reporter_id}>*")]
    if reminder:
        blocks.append(_section(REMINDER_TEXT))
    blocks.extend(
        [
            _fields(f"*Commander*\n<@{request.commander_id}>\n", f"*Communications*\n{comms}\n"),
            _fields(f"*Channel*\n<#{channel_id}>\n", f"*Title*\n{request.title}\n"),
            _fields(f"*Incident started*\n{format_slack_date(started_at)}"),
        ]
    )
    if request.description and request.description.strip():
        blocks.append(_section(f"*Description*\n{request.description}"))
    return blocks


async def post_summary(
    client: ChatClient,
    request: IncidentRequest,
    channel: Channel,
    *,
    reminder: bool = True,
    started_at: datetime | None = None,
) -> StageResult:
    """Post the summary once; ``ok: false`` becomes a failed result."""
    blocks = build_summary_blocks(
        request,
        channel.name,
        channel.id,
        started_at=started_at or datetime.now().astimezone(),
        reminder=reminder,
    )
    body = await client.send(
        "chat.postMessage",
        {"channel": channel.id, "text": FALLBACK_TEXT, "blocks": json.dumps(blocks)},
    )
    if body.get("ok"):
        return StageResult.success(STAGE, "Incident details message sent to the incident channel")
    return StageResult.failure(
        STAGE, f"Incident details message failed to send. Reason: {body.get('error')}"
    )
