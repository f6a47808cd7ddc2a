"""
Configuration management for webhook notifications.

Handles environment variables, the catalog of supported services, and embed
colors. Only the Notifier reads this; the transport and dispatchers receive
an already-resolved URL.
"""

import os
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ServiceType(Enum):
    """Services a notification can be delivered to."""

    DISCORD = "discord"


class EmbedColor(Enum):
    """Color codes for Discord embeds."""

    INFO = 3447003  # Blue
    SUCCESS = 3066993  # Green
    WARNING = 16776960  # Yellow
    ERROR = 15158332  # Red


def _get_bool_env(key: str, default: bool = False) -> bool:
    """Parse boolean environment variable."""
    value = os.getenv(key, str(default)).lower()
    return value in ("true", "1", "yes", "on")


def _get_optional_env(key: str) -> Optional[str]:
    value = os.getenv(key, "").strip()
    return value or None


@dataclass
class WebhookConfig:
    """Configuration for webhook notifications.

    Attributes:
        enabled: Master switch for sending
        discord_webhook_url: Discord webhook URL
        discord_username: Default username override for Discord messages
        discord_avatar_url: Default avatar override for Discord messages
        timeout_seconds: Total request timeout, None for the HTTP client default
    """

    enabled: bool = True
    discord_webhook_url: Optional[str] = None
    discord_username: Optional[str] = None
    discord_avatar_url: Optional[str] = None
    timeout_seconds: Optional[float] = None

    @classmethod
    def from_env(cls) -> "WebhookConfig":
        """Create configuration from environment variables.

        Environment variables:
            NOTIFICATION_ENABLED: Enable sending (default: true)
            DISCORD_WEBHOOK_URL: Discord webhook URL (default: unset)
            DISCORD_USERNAME: Username override (default: unset)
            DISCORD_AVATAR_URL: Avatar override (default: unset)
            WEBHOOK_TIMEOUT: Request timeout in seconds (default: client default)

        Returns:
            WebhookConfig instance with values from environment

        Raises:
            ValueError: If WEBHOOK_TIMEOUT is not a number
        """
        timeout = _get_optional_env("WEBHOOK_TIMEOUT")
        return cls(
            enabled=_get_bool_env("NOTIFICATION_ENABLED", True),
            discord_webhook_url=_get_optional_env("DISCORD_WEBHOOK_URL"),
            discord_username=_get_optional_env("DISCORD_USERNAME"),
            discord_avatar_url=_get_optional_env("DISCORD_AVATAR_URL"),
            timeout_seconds=float(timeout) if timeout is not None else None,
        )

    def validate(self) -> None:
        """Validate configuration values.

        Raises:
            ValueError: If configuration is invalid
        """
        if self.timeout_seconds is not None and self.timeout_seconds <= 0:
            raise ValueError(f"timeout_seconds must be > 0, got {self.timeout_seconds}")

    def webhook_url_for(self, service: ServiceType) -> Optional[str]:
        """Get the configured webhook URL for a service."""
        urls = {
            ServiceType.DISCORD: self.discord_webhook_url,
        }
        return urls.get(service)

    def __repr__(self) -> str:
        """String representation with the webhook URL masked."""
        return (
            f"WebhookConfig("
            f"enabled={self.enabled}, "
            f"discord_webhook_url={'***' if self.discord_webhook_url else None}, "
            f"discord_username={self.discord_username!r}, "
            f"discord_avatar_url={self.discord_avatar_url!r}, "
            f"timeout_seconds={self.timeout_seconds})"
        )
