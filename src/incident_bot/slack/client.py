"""Chat API client: one form-encoded POST per operation, JSON body back.

``ChatClient`` is the only seam between incident logic and Slack. The
production implementation wraps slack_sdk's ``AsyncWebClient``; tests
substitute a fake that records calls.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Protocol

import aiohttp
from slack_sdk.errors import SlackApiError, SlackClientError
from slack_sdk.web.async_client import AsyncWebClient

from incident_bot.config import Settings
from incident_bot.errors import ChatTransportError

logger = logging.getLogger(__name__)


class ChatClient(Protocol):
    """Anything that can send one chat API operation and return its JSON body."""

    async def send(self, operation: str, fields: dict[str, Any]) -> dict[str, Any]: ...


def encode_fields(fields: dict[str, Any]) -> dict[str, str]:
    """Flatten field values into form-urlencoded strings.

    None values are dropped, booleans become ``true``/``false`` and
    lists/tuples are comma joined (the form the invite API expects).
    """
    encoded: dict[str, str] = {}
    for key, value in fields.items():
        if value is None:
            continue
        if isinstance(value, bool):
            encoded[key] = "true" if value else "false"
        elif isinstance(value, (list, tuple)):
            encoded[key] = ",".join(str(v) for v in value)
        else:
            encoded[key] = str(value)
    return encoded


class SlackChatClient:
    """ChatClient backed by slack_sdk's AsyncWebClient.

    Application-level failures (``ok: false``) are returned to the caller as
    the parsed body. Only transport problems raise ``ChatTransportError``.
    """

    def __init__(self, token: str, base_url: str, timeout: int = 30) -> None:
        self._web = AsyncWebClient(token=token, base_url=base_url, timeout=timeout)

    async def send(self, operation: str, fields: dict[str, Any]) -> dict[str, Any]:
        try:
            response = await self._web.api_call(operation, data=encode_fields(fields))
        except SlackApiError as exc:
            body = getattr(exc.response, "data", None)
            status = getattr(exc.response, "status_code", None)
            if status == 200 and isinstance(body, dict) and "ok" in body:
                return body
            raise ChatTransportError(operation, f"HTTP {status}: {exc}") from exc
        except (SlackClientError, aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise ChatTransportError(operation, str(exc) or type(exc).__name__) from exc

        if not isinstance(response.data, dict):
            raise ChatTransportError(operation, "Response body is not a JSON object")
        return response.data


@dataclass(frozen=True)
class ChatClients:
    """The two token scopes the bot works with."""

    bot: ChatClient
    user: ChatClient

    def provisioner(self, settings: Settings) -> ChatClient:
        """Client used for channel creation and invites."""
        return self.user if settings.provisioning_scope == "user" else self.bot


def build_chat_clients(settings: Settings) -> ChatClients:
    """Create production clients for both token scopes."""
    if not settings.slack_bot_token:
        logger.warning("SLACK_BOT_TOKEN is not configured")
    if settings.provisioning_scope == "user" and not settings.slack_user_token:
        logger.warning("PROVISIONING_SCOPE is 'user' but SLACK_USER_TOKEN is not configured")
    return ChatClients(
        bot=SlackChatClient(settings.slack_bot_token, settings.slack_api_url, settings.slack_timeout),
        user=SlackChatClient(settings.slack_user_token, settings.slack_api_url, settings.slack_timeout),
    )
