"""Incident declaration flow: channel, members/topic/notifications, summary.

Channel creation is the only fatal stage. Invites, topic and role
notifications run concurrently and are settled before the summary is
posted; their failures are recorded on the outcome and never interrupt
sibling or downstream stages.
"""

import asyncio
import logging
from collections.abc import Awaitable

from incident_bot.config import Settings
from incident_bot.errors import ChannelCreationError, ChatTransportError
from incident_bot.incident.channels import create_incident_channel
from incident_bot.incident.membership import provision_members
from incident_bot.incident.notifier import Role, notify_role, should_notify
from incident_bot.incident.summary import post_summary
from incident_bot.incident.topic import set_channel_topic
from incident_bot.models.incident import IncidentRequest
from incident_bot.models.results import IncidentOutcome, IncidentState, StageResult
from incident_bot.slack.client import ChatClients

logger = logging.getLogger(__name__)


def _to_results(stage: str, settled: object) -> list[StageResult]:
    """Normalise a settled stage (result, list of results or exception)."""
    if isinstance(settled, BaseException):
        logger.warning("Stage %s raised: %s", stage, settled)
        return [StageResult.failure(stage, f"{stage} failed: {settled}")]
    if isinstance(settled, list):
        return settled
    return [settled]


async def declare_incident(
    request: IncidentRequest,
    settings: Settings,
    clients: ChatClients,
) -> IncidentOutcome:
    """Provision the channel for an already-verified incident declaration.

    Topic and summary go through the token that created the channel, which is
    always a member of it. Role DMs always come from the bot.
    """
    outcome = IncidentOutcome(state=IncidentState.VERIFIED)
    provisioner = clients.provisioner(settings)

    # Stage 1: channel (fatal)
    try:
        channel = await create_incident_channel(provisioner, private=settings.channel_private)
    except (ChannelCreationError, ChatTransportError) as exc:
        outcome.state = IncidentState.FAILED
        outcome.error = str(exc)
        logger.error(
            "Incident declared by %s aborted: %s",
            request.reporter_id,
            exc,
            extra={"incident_state": outcome.state.value},
        )
        return outcome
    outcome.channel = channel
    outcome.state = IncidentState.CHANNEL_CREATED

    # Stage 2: members, topic, notifications (concurrent, non-fatal)
    stages: list[tuple[str, Awaitable]] = [
        ("invite", provision_members(provisioner, clients.bot, settings, channel.id, request)),
        (
            "topic",
            set_channel_topic(
                provisioner,
                channel.id,
                request.commander_id,
                request.comms_id,
                settings.incident_doc_url,
            ),
        ),
    ]
    if should_notify(request.commander_id, request.reporter_id):
        stages.append(
            ("notify_commander", notify_role(clients.bot, channel.id, request.commander_id, Role.COMMANDER))
        )
    if should_notify(request.comms_id, request.reporter_id):
        stages.append(
            ("notify_communications", notify_role(clients.bot, channel.id, request.comms_id, Role.COMMUNICATIONS))
        )

    settled = await asyncio.gather(*[coro for _, coro in stages], return_exceptions=True)
    for (stage, _), result in zip(stages, settled):
        outcome.results.extend(_to_results(stage, result))
    outcome.state = IncidentState.PROVISIONED
    logger.info("Channel setup phase completed for %s", channel.name)

    # Stage 3: summary, strictly after stage 2 has settled
    try:
        outcome.summary = await post_summary(
            provisioner, request, channel, reminder=settings.statuspage_reminder
        )
    except Exception as exc:
        logger.warning("Summary post raised: %s", exc, exc_info=True)
        outcome.summary = StageResult.failure("summary", f"summary failed: {exc}")
    outcome.state = IncidentState.SUMMARIZED

    outcome.state = IncidentState.DONE
    log = logger.warning if outcome.failures else logger.info
    log(
        "Incident channel %s is set up (%d failed stages)",
        channel.name,
        len(outcome.failures),
        extra={
            "incident_state": outcome.state.value,
            "channel_id": channel.id,
            "results": [r.model_dump() for r in outcome.results],
            "summary": outcome.summary.model_dump(),
        },
    )
    return outcome
