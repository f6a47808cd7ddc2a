"""
Webhook notification dispatcher for Battery Webhook.

Formats a message and POSTs it to a webhook URL, telling apart failures to
reach the service from rejections reported by the service.

Main components:
- WebhookTransport: JSON POST and response classification
- DiscordDispatcher: Discord payloads and Discord error decoding
- Notifier: Configured, logging entry point
- WebhookConfig: Configuration management

Example:
    from battery_webhook import DiscordPayload, send_to_discord

    outcome = send_to_discord(url, DiscordPayload(content="🔋 Battery at 20%"))
    if not outcome.ok:
        print(outcome.kind, outcome.error)
"""

from .config import EmbedColor, ServiceType, WebhookConfig
from .discord import (
    DiscordAPIError,
    DiscordDispatcher,
    DiscordEmbed,
    DiscordPayload,
    send_to_discord,
)
from .errors import (
    ErrorKind,
    Outcome,
    WebhookDecodeError,
    WebhookError,
    WebhookServiceError,
    WebhookSystemError,
)
from .notifier import Notifier
from .transport import WebhookTransport

__version__ = "1.0.0"
__all__ = [
    "DiscordAPIError",
    "DiscordDispatcher",
    "DiscordEmbed",
    "DiscordPayload",
    "EmbedColor",
    "ErrorKind",
    "Notifier",
    "Outcome",
    "ServiceType",
    "WebhookConfig",
    "WebhookDecodeError",
    "WebhookError",
    "WebhookServiceError",
    "WebhookSystemError",
    "WebhookTransport",
    "send_to_discord",
]
