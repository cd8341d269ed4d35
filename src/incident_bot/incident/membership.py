"""Incident channel membership: roster lookup, member set, invitations.

The base roster comes from static configuration, a user group lookup, or
both (``ROSTER_STRATEGY``). The commander and communications lead are
appended when missing. Invites go out as one batched call or one call per
user (``INVITE_MODE``); per-user invites settle independently.
"""

import asyncio
import logging

from incident_bot.config import Settings
from incident_bot.errors import ChatTransportError
from incident_bot.models.incident import IncidentRequest
from incident_bot.models.results import StageResult
from incident_bot.slack.client import ChatClient

logger = logging.getLogger(__name__)

STAGE = "invite"


def static_roster(settings: Settings) -> list[str]:
    return settings.roster_user_ids


async def lookup_group_roster(client: ChatClient, settings: Settings) -> list[str]:
    """Fetch members of the configured user group.

    Looks the group up by id when INCIDENT_GROUP_ID is set, otherwise by
    name or handle via the full group listing. Any failure yields an empty
    roster.
    """
    try:
        if settings.incident_group_id:
            body = await client.send(
                "usergroups.users.list",
                {"usergroup": settings.incident_group_id, "include_disabled": False},
            )
            if body.get("ok"):
                return list(body.get("users") or [])
        elif settings.incident_group_name:
            body = await client.send(
                "usergroups.list", {"include_users": True, "include_disabled": False}
            )
            if body.get("ok"):
                for group in body.get("usergroups") or []:
                    if settings.incident_group_name in (group.get("name"), group.get("handle")):
                        return list(group.get("users") or group.get("user_ids") or [])
                logger.warning("User group %r not found", settings.incident_group_name)
                return []
        else:
            logger.warning("Group roster requested but no group id or name is configured")
            return []
    except ChatTransportError as exc:
        logger.warning("Group roster lookup failed: %s", exc)
        return []

    logger.warning("Group roster lookup failed: %s", body.get("error", "unknown_error"))
    return []


async def resolve_roster(client: ChatClient, settings: Settings) -> list[str]:
    """Base roster for the configured strategy (static, group, or both)."""
    roster: list[str] = []
    if settings.roster_strategy in ("static", "both"):
        roster.extend(static_roster(settings))
    if settings.roster_strategy in ("group", "both"):
        roster.extend(await lookup_group_roster(client, settings))
    return list(dict.fromkeys(roster))


def build_membership(
    roster: list[str],
    request: IncidentRequest,
    *,
    exclude_reporter: bool = False,
) -> list[str]:
    """Ordered distinct user ids to invite: roster, then commander, then comms."""
    members = [*roster, request.commander_id]
    if request.comms_id:
        members.append(request.comms_id)
    members = [uid for uid in dict.fromkeys(members) if uid]
    if exclude_reporter:
        members = [uid for uid in members if uid != request.reporter_id]
    return members


async def _invite_one(client: ChatClient, channel_id: str, user_id: str) -> StageResult:
    body = await client.send("conversations.invite", {"channel": channel_id, "users": user_id})
    if body.get("ok"):
        return StageResult.success(STAGE, f"Invited <@{user_id}>", target=user_id)
    return StageResult.failure(
        STAGE, f"Could not invite <@{user_id}>. Reason: {body.get('error')}", target=user_id
    )


async def invite_members(
    client: ChatClient,
    channel_id: str,
    user_ids: list[str],
    *,
    mode: str = "batch",
) -> list[StageResult]:
    """Invite ``user_ids`` to the channel.

    ``batch`` sends one call and yields one result. ``individual`` sends one
    call per user concurrently and yields one result per user; a failed
    invite never stops the others.
    """
    if not user_ids:
        return [StageResult.success(STAGE, "No users to invite")]

    if mode == "batch":
        body = await client.send(
            "conversations.invite", {"channel": channel_id, "users": user_ids}
        )
        if body.get("ok"):
            return [StageResult.success(STAGE, f"Invited {len(user_ids)} users to the channel")]
        return [
            StageResult.failure(
                STAGE, f"Inviting users to the channel failed. Reason: {body.get('error')}"
            )
        ]

    outcomes = await asyncio.gather(
        *[_invite_one(client, channel_id, uid) for uid in user_ids],
        return_exceptions=True,
    )
    results: list[StageResult] = []
    for user_id, outcome in zip(user_ids, outcomes):
        if isinstance(outcome, BaseException):
            logger.warning("Invite for %s raised: %s", user_id, outcome)
            results.append(
                StageResult.failure(STAGE, f"Could not invite <@{user_id}>: {outcome}", target=user_id)
            )
        else:
            results.append(outcome)
    return results


async def provision_members(
    client: ChatClient,
    lookup_client: ChatClient,
    settings: Settings,
    channel_id: str,
    request: IncidentRequest,
) -> list[StageResult]:
    """Resolve the roster with ``lookup_client``, then invite with ``client``."""
    roster = await resolve_roster(lookup_client, settings)
    # Per-user invites reject the reporter as a self-invite, so drop them up front
    members = build_membership(
        roster, request, exclude_reporter=settings.invite_mode == "individual"
    )
    logger.info("Inviting %d users to %s", len(members), channel_id)
    return await invite_members(client, channel_id, members, mode=settings.invite_mode)
