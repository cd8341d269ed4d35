"""Slack ingress and egress: chat API client, webhook verification, handlers."""

from incident_bot.slack.client import (
    ChatClient,
    ChatClients,
    SlackChatClient,
    build_chat_clients,
)
from incident_bot.slack.verification import verify_webhook

__all__ = [
    "build_chat_clients",
    "ChatClient",
    "ChatClients",
    "SlackChatClient",
    "verify_webhook",
]
