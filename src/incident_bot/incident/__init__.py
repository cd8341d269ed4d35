"""Incident provisioning: channel, membership, topic, notifications, summary."""

from incident_bot.incident.channels import create_incident_channel, generate_channel_name
from incident_bot.incident.membership import (
    build_membership,
    invite_members,
    provision_members,
    resolve_roster,
)
from incident_bot.incident.notifier import Role, notify_role, should_notify
from incident_bot.incident.orchestrator import declare_incident
from incident_bot.incident.summary import build_summary_blocks, post_summary
from incident_bot.incident.topic import build_topic, set_channel_topic

__all__ = [
    "build_membership",
    "build_summary_blocks",
    "build_topic",
    "create_incident_channel",
    "declare_incident",
    "generate_channel_name",
    "invite_members",
    "notify_role",
    "post_summary",
    "provision_members",
    "resolve_roster",
    "Role",
    "set_channel_topic",
    "should_notify",
]
