"""Tests for the webhook configuration module."""

import os

import pytest

from battery_webhook.config import EmbedColor, ServiceType, WebhookConfig


class TestEmbedColor:
    """Test EmbedColor enum."""

    def test_color_values_are_integers(self):
        """Test that color values are valid integers."""
        for color in EmbedColor:
            assert isinstance(color.value, int)
            assert 0 <= color.value <= 16777215  # Valid RGB range


class TestWebhookConfig:
    """Test WebhookConfig class."""

    @pytest.fixture
    def clean_env(self):
        """Fixture to provide clean environment."""
        original_env = os.environ.copy()

        keys_to_clear = [
            k
            for k in os.environ.keys()
            if k.startswith(("DISCORD_", "NOTIFICATION_", "WEBHOOK_"))
        ]
        for key in keys_to_clear:
            os.environ.pop(key, None)

        yield

        os.environ.clear()
        os.environ.update(original_env)

    def test_default_configuration(self, clean_env):
        """Test default configuration values."""
        config = WebhookConfig.from_env()

        assert config.enabled is True
        assert config.discord_webhook_url is None
        assert config.discord_username is None
        assert config.discord_avatar_url is None
        assert config.timeout_seconds is None

    def test_values_from_env(self, clean_env):
        """Test values are loaded from environment."""
        os.environ["DISCORD_WEBHOOK_URL"] = " https://discord.com/api/webhooks/1/abc\n"
        os.environ["DISCORD_USERNAME"] = "Battery Bot"
        os.environ["DISCORD_AVATAR_URL"] = "https://example.com/avatar.png"
        os.environ["WEBHOOK_TIMEOUT"] = "2.5"

        config = WebhookConfig.from_env()

        assert config.discord_webhook_url == "https://discord.com/api/webhooks/1/abc"
        assert config.discord_username == "Battery Bot"
        assert config.discord_avatar_url == "https://example.com/avatar.png"
        assert config.timeout_seconds == 2.5

    def test_boolean_env_parsing(self, clean_env):
        """Test boolean environment variable parsing."""
        test_cases = [
            ("true", True),
            ("1", True),
            ("yes", True),
            ("on", True),
            ("false", False),
            ("0", False),
            ("off", False),
        ]

        for value, expected in test_cases:
            os.environ["NOTIFICATION_ENABLED"] = value
            config = WebhookConfig.from_env()
            assert config.enabled == expected, f"Failed for value: {value}"

    def test_invalid_timeout_env(self, clean_env):
        """Test that a non-numeric timeout is rejected."""
        os.environ["WEBHOOK_TIMEOUT"] = "soon"

        with pytest.raises(ValueError):
            WebhookConfig.from_env()

    def test_validate(self):
        """Test validation of the timeout."""
        WebhookConfig(timeout_seconds=1).validate()
        WebhookConfig().validate()

        with pytest.raises(ValueError, match="timeout_seconds"):
            WebhookConfig(timeout_seconds=0).validate()

    def test_webhook_url_for(self):
        """Test resolving the URL of a service."""
        config = WebhookConfig(discord_webhook_url="https://discord.com/api/webhooks/1/a")

        assert config.webhook_url_for(ServiceType.DISCORD) == "https://discord.com/api/webhooks/1/a"

    def test_repr_masks_url(self):
        """Test that the webhook URL, which embeds a token, is not printed."""
        config = WebhookConfig(discord_webhook_url="https://discord.com/api/webhooks/1/secret")

        assert "secret" not in repr(config)
        assert "***" in repr(config)
