"""
Discord webhook payloads and dispatcher.

Builds Discord webhook messages (content, embeds, fields, author, footer)
and delivers them through WebhookTransport. Discord reports failures as a
JSON object such as {"code": 50006, "message": "Cannot send an empty message"};
the dispatcher decodes that object into a DiscordAPIError.

Example:
    from battery_webhook.discord import DiscordEmbed, DiscordPayload, send_to_discord

    embed = DiscordEmbed(title="Battery", description="42% remaining")
    outcome = send_to_discord(url, DiscordPayload(content="Status", embeds=[embed]))
    outcome.raise_for_error()
"""

import logging
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, ValidationError

from battery_webhook.errors import (
    Outcome,
    WebhookDecodeError,
    WebhookError,
    WebhookServiceError,
)
from battery_webhook.transport import WebhookTransport

logger = logging.getLogger(__name__)


class DiscordAuthor(BaseModel):
    """Author block of an embed."""

    name: Optional[str] = None
    url: Optional[str] = None
    icon_url: Optional[str] = None


class DiscordFooter(BaseModel):
    """Footer block of an embed."""

    text: Optional[str] = None
    icon_url: Optional[str] = None


class DiscordThumbnail(BaseModel):
    """Thumbnail image of an embed."""

    url: Optional[str] = None


class DiscordEmbedField(BaseModel):
    """Name/value field of an embed."""

    name: Optional[str] = None
    value: Optional[str] = None
    inline: Optional[bool] = None


class DiscordEmbed(BaseModel):
    """
    Discord embed.

    The builder methods return a new embed so that an embed already handed
    to a payload is never changed behind the caller's back.
    """

    author: Optional[DiscordAuthor] = None
    footer: Optional[DiscordFooter] = None
    title: Optional[str] = None
    description: Optional[str] = None
    url: Optional[str] = None
    color: Optional[int] = None
    timestamp: Optional[str] = None
    thumbnail: Optional[DiscordThumbnail] = None
    fields: Optional[List[DiscordEmbedField]] = None

    def add_field(self, name: str, value: str, inline: bool = False) -> "DiscordEmbed":
        """
        Add a field to the embed.

        Args:
            name: Field name
            value: Field value
            inline: Whether to display inline

        Returns:
            New embed with the field appended
        """
        fields = list(self.fields or [])
        fields.append(DiscordEmbedField(name=name, value=value, inline=inline))
        return self.model_copy(update={"fields": fields})

    def set_author(
        self, name: str, url: Optional[str] = None, icon_url: Optional[str] = None
    ) -> "DiscordEmbed":
        """
        Set embed author.

        Args:
            name: Author name
            url: Optional author URL
            icon_url: Optional author icon URL

        Returns:
            New embed with the author set
        """
        author = DiscordAuthor(name=name)
        if url:
            author.url = url
        if icon_url:
            author.icon_url = icon_url
        return self.model_copy(update={"author": author})

    def set_footer(self, text: str, icon_url: Optional[str] = None) -> "DiscordEmbed":
        """
        Set embed footer.

        Args:
            text: Footer text
            icon_url: Optional footer icon URL

        Returns:
            New embed with the footer set
        """
        footer = DiscordFooter(text=text)
        if icon_url:
            footer.icon_url = icon_url
        return self.model_copy(update={"footer": footer})

    def set_thumbnail(self, url: str) -> "DiscordEmbed":
        """
        Set embed thumbnail.

        Args:
            url: Image URL

        Returns:
            New embed with the thumbnail set
        """
        return self.model_copy(update={"thumbnail": DiscordThumbnail(url=url)})


class DiscordPayload(BaseModel):
    """
    Complete Discord webhook message.

    Discord needs at least content or one embed. username and avatar_url
    override the webhook's configured identity.
    """

    content: Optional[str] = None
    username: Optional[str] = None
    avatar_url: Optional[str] = None
    tts: Optional[bool] = None
    embeds: Optional[List[DiscordEmbed]] = None


class DiscordErrorBody(BaseModel):
    """Error object returned by Discord when it rejects a webhook call."""

    model_config = ConfigDict(strict=True)

    code: int
    message: str


class DiscordAPIError(WebhookServiceError):
    """Discord rejected the message; carries the decoded error body."""

    def __init__(
        self,
        error: DiscordErrorBody,
        body: str,
        raw: Optional[bytes] = None,
        status: Optional[int] = None,
    ):
        super().__init__(body, raw=raw, status=status)
        self.error = error

    @property
    def code(self) -> int:
        return self.error.code

    @property
    def message(self) -> str:
        return self.error.message

    def __str__(self) -> str:
        return f"Discord error {self.code}: {self.message}"


def decode_discord_error(error: WebhookServiceError) -> WebhookError:
    """
    Decode a service error into Discord's error schema.

    Returns:
        DiscordAPIError when the body matches, WebhookDecodeError otherwise
    """
    try:
        decoded = DiscordErrorBody.model_validate_json(error.body)
    except ValidationError as e:
        return WebhookDecodeError(error.body, reason=str(e))
    return DiscordAPIError(decoded, error.body, raw=error.raw, status=error.status)


class DiscordDispatcher:
    """Sends DiscordPayloads and maps rejections to Discord errors."""

    def __init__(self, transport: Optional[WebhookTransport] = None):
        """
        Initialize the dispatcher.

        Args:
            transport: Transport to send through. Defaults to a new WebhookTransport.
        """
        self.transport = transport or WebhookTransport()

    def send(self, url: str, payload: DiscordPayload) -> Outcome:
        """
        Send a payload to a Discord webhook, blocking until it completes.

        Args:
            url: Discord webhook URL
            payload: Message to send

        Returns:
            Success, or a failure carrying WebhookSystemError, DiscordAPIError
            or WebhookDecodeError
        """
        return self._reinterpret(self.transport.post(url, payload))

    async def send_async(self, url: str, payload: DiscordPayload) -> Outcome:
        """
        Send a payload to a Discord webhook (asynchronous).

        Args:
            url: Discord webhook URL
            payload: Message to send

        Returns:
            Same outcomes as send
        """
        return self._reinterpret(await self.transport.post_async(url, payload))

    def _reinterpret(self, outcome: Outcome) -> Outcome:
        if not isinstance(outcome.error, WebhookServiceError):
            return outcome

        error = decode_discord_error(outcome.error)
        if isinstance(error, DiscordAPIError):
            logger.warning(f"Discord rejected webhook message: {error}")
        else:
            logger.error(f"Unrecognized Discord error response: {error.body}")
        return Outcome.failure(error)


def send_to_discord(
    url: str, payload: DiscordPayload, timeout_seconds: Optional[float] = None
) -> Outcome:
    """Send one payload to a Discord webhook with a fresh transport."""
    return DiscordDispatcher(WebhookTransport(timeout_seconds=timeout_seconds)).send(url, payload)
