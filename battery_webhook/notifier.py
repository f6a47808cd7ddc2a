"""
Configured entry point for sending notifications.

Resolves the webhook URL for a service from WebhookConfig, fills in the
configured identity defaults, dispatches the payload and logs the result.
"""

import logging
from typing import Dict, Optional

from battery_webhook.config import EmbedColor, ServiceType, WebhookConfig
from battery_webhook.discord import DiscordDispatcher, DiscordEmbed, DiscordPayload
from battery_webhook.errors import Outcome
from battery_webhook.transport import WebhookTransport

logger = logging.getLogger(__name__)


class Notifier:
    """Unified notification interface."""

    def __init__(
        self,
        config: Optional[WebhookConfig] = None,
        transport: Optional[WebhookTransport] = None,
    ):
        """
        Initialize the notifier.

        Args:
            config: Optional configuration. If not provided, reads the environment.
            transport: Optional transport. If not provided, one is built from config.

        Raises:
            ValueError: If the configuration is invalid
        """
        self.config = config or WebhookConfig.from_env()
        self.config.validate()
        self.transport = transport or WebhookTransport(timeout_seconds=self.config.timeout_seconds)
        self.dispatchers = {
            ServiceType.DISCORD: DiscordDispatcher(self.transport),
        }

        # Statistics
        self.stats = {"sent": 0, "failed": 0, "skipped": 0}

    def _prepare(self, service: ServiceType, payload: DiscordPayload) -> Optional[DiscordPayload]:
        """Return the payload to send, or None if sending should be skipped."""
        if not self.config.enabled:
            logger.debug("Notifications are disabled")
            self.stats["skipped"] += 1
            return None

        if not self.config.webhook_url_for(service):
            logger.warning(f"No webhook URL configured for {service.value}")
            self.stats["skipped"] += 1
            return None

        defaults = {}
        if "username" not in payload.model_fields_set and self.config.discord_username:
            defaults["username"] = self.config.discord_username
        if "avatar_url" not in payload.model_fields_set and self.config.discord_avatar_url:
            defaults["avatar_url"] = self.config.discord_avatar_url

        return payload.model_copy(update=defaults) if defaults else payload

    def _record(self, service: ServiceType, outcome: Outcome) -> Outcome:
        if outcome.ok:
            logger.debug(f"{service.value} notification sent successfully")
            self.stats["sent"] += 1
        else:
            logger.error(
                f"{service.value} notification failed ({outcome.kind.value}): {outcome.error}"
            )
            self.stats["failed"] += 1
        return outcome

    def send(
        self, payload: DiscordPayload, service: ServiceType = ServiceType.DISCORD
    ) -> Optional[Outcome]:
        """
        Send a payload to the configured webhook (synchronous).

        Args:
            payload: Message to send
            service: Target service

        Returns:
            Outcome of the delivery, or None if nothing was sent because
            notifications are disabled or no URL is configured
        """
        prepared = self._prepare(service, payload)
        if prepared is None:
            return None

        url = self.config.webhook_url_for(service)
        return self._record(service, self.dispatchers[service].send(url, prepared))

    async def send_async(
        self, payload: DiscordPayload, service: ServiceType = ServiceType.DISCORD
    ) -> Optional[Outcome]:
        """Send a payload to the configured webhook (asynchronous)."""
        prepared = self._prepare(service, payload)
        if prepared is None:
            return None

        url = self.config.webhook_url_for(service)
        return self._record(service, await self.dispatchers[service].send_async(url, prepared))

    def send_message(self, content: str) -> Optional[Outcome]:
        """
        Convenience method for plain text messages.

        Args:
            content: Message text

        Returns:
            Outcome of the delivery, or None if skipped
        """
        return self.send(DiscordPayload(content=content))

    def send_embed(
        self,
        title: str,
        description: Optional[str] = None,
        fields: Optional[Dict[str, str]] = None,
        color: EmbedColor = EmbedColor.INFO,
    ) -> Optional[Outcome]:
        """
        Convenience method for a single-embed message.

        Args:
            title: Embed title
            description: Optional description text
            fields: Optional dictionary of field name->value pairs
            color: Embed color

        Returns:
            Outcome of the delivery, or None if skipped
        """
        embed = DiscordEmbed(title=title, color=color.value)
        if description:
            embed = embed.model_copy(update={"description": description})
        for name, value in (fields or {}).items():
            embed = embed.add_field(name, str(value), inline=True)

        return self.send(DiscordPayload(embeds=[embed]))

    def get_stats(self) -> Dict[str, int]:
        """
        Get notification statistics.

        Returns:
            Dictionary with statistics
        """
        return self.stats.copy()

    def reset_stats(self) -> None:
        """Reset notification statistics."""
        self.stats = {"sent": 0, "failed": 0, "skipped": 0}
