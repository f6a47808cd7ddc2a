"""
JSON-over-HTTP transport for webhook delivery.

Performs exactly one POST per call and classifies the response by the shape
of its body:

- a JSON object body means the service rejected the request, whatever the
  HTTP status code says (Discord answers 200/4xx with an error object)
- an empty, non-JSON, or non-object JSON body means success, even for a
  non-2xx status

The status code is never used to decide. Services that report success with a
JSON object body will be misclassified and need their own predicate.
"""

import asyncio
import ipaddress
import json
import re
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Mapping, Optional

import aiohttp
from pydantic import BaseModel
from yarl import URL

from battery_webhook.errors import Outcome, WebhookServiceError, WebhookSystemError

JSON_HEADERS = {"content-type": "application/json"}

_HOST_LABEL = r"[A-Za-z0-9_](?:[A-Za-z0-9_-]{0,61}[A-Za-z0-9_])?"
HOSTNAME_RE = re.compile(rf"^{_HOST_LABEL}(?:\.{_HOST_LABEL})*\.?$")


def _is_valid_host(host: str) -> bool:
    try:
        ipaddress.ip_address(host)
        return True
    except ValueError:
        return bool(HOSTNAME_RE.match(host))


def parse_url(url: str) -> URL:
    """
    Parse a webhook URL after stripping surrounding whitespace.

    Args:
        url: Webhook URL as entered by the user

    Returns:
        Parsed absolute URL

    Raises:
        WebhookSystemError: If the URL is not an absolute http(s) URL with a
            valid hostname or IP address
    """
    cleaned = url.strip() if isinstance(url, str) else ""
    try:
        parsed = URL(cleaned)
    except (TypeError, ValueError) as e:
        raise WebhookSystemError(f"invalid URL: {cleaned!r} ({e})") from e

    if not parsed.is_absolute() or parsed.scheme not in ("http", "https") or not parsed.host:
        raise WebhookSystemError(f"invalid URL: {cleaned!r}")
    if not _is_valid_host(parsed.raw_host):
        raise WebhookSystemError(f"invalid URL: {cleaned!r} (bad host {parsed.raw_host!r})")
    return parsed


def encode_payload(payload: Any) -> bytes:
    """
    Serialize a payload to UTF-8 JSON without touching the payload itself.

    Pydantic models are dumped with exclude_unset, so fields the caller never
    set are left out while fields explicitly set to None become null.

    Raises:
        WebhookSystemError: If the payload cannot be encoded as a JSON object
    """
    if isinstance(payload, BaseModel):
        data = payload.model_dump(mode="json", exclude_unset=True)
    elif hasattr(payload, "to_dict"):
        data = payload.to_dict()
    else:
        data = payload

    if not isinstance(data, Mapping):
        raise WebhookSystemError(
            f"payload must encode to a JSON object, got {type(data).__name__}"
        )

    try:
        return json.dumps(dict(data), allow_nan=False).encode("utf-8")
    except (TypeError, ValueError, RecursionError) as e:
        raise WebhookSystemError(f"could not encode payload: {e}") from e


def classify_response(raw: bytes, status: Optional[int] = None) -> Optional[WebhookServiceError]:
    """
    Classify a response body.

    Args:
        raw: Response body bytes
        status: HTTP status, attached to the error but not consulted

    Returns:
        A WebhookServiceError if the body is a JSON object, None otherwise
    """
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError:
        return None

    try:
        parsed = json.loads(text)
    except ValueError:
        return None
    except RecursionError:
        # Too deeply nested to parse; the outermost bracket decides.
        is_object = text.lstrip().startswith("{")
    else:
        is_object = isinstance(parsed, dict)

    if is_object:
        return WebhookServiceError(text, raw=bytes(raw), status=status)
    return None


class WebhookTransport:
    """Sends JSON payloads to webhook URLs."""

    def __init__(self, timeout_seconds: Optional[float] = None):
        """
        Initialize the transport.

        Args:
            timeout_seconds: Total request timeout. None keeps aiohttp's default.
        """
        self.timeout_seconds = timeout_seconds

    def _client_timeout(self) -> Optional[aiohttp.ClientTimeout]:
        if self.timeout_seconds is None:
            return None
        return aiohttp.ClientTimeout(total=self.timeout_seconds)

    async def post_async(self, url: str, payload: Any) -> Outcome:
        """
        POST a payload and classify the response.

        Args:
            url: Webhook URL, surrounding whitespace allowed
            payload: Pydantic model, object with to_dict(), or mapping

        Returns:
            Outcome of the delivery
        """
        try:
            target = parse_url(url)
            body = encode_payload(payload)
        except WebhookSystemError as e:
            return Outcome.failure(e)

        session_kwargs = {}
        timeout = self._client_timeout()
        if timeout is not None:
            session_kwargs["timeout"] = timeout

        try:
            async with aiohttp.ClientSession(**session_kwargs) as session:
                async with session.post(target, data=body, headers=JSON_HEADERS) as response:
                    raw = await response.read()
                    status = response.status
        except asyncio.TimeoutError:
            return Outcome.failure(WebhookSystemError("request timed out"))
        except aiohttp.ClientError as e:
            return Outcome.failure(WebhookSystemError(str(e) or type(e).__name__))
        except OSError as e:
            return Outcome.failure(WebhookSystemError(str(e) or type(e).__name__))

        rejection = classify_response(raw, status)
        if rejection is not None:
            return Outcome.failure(rejection)
        return Outcome.success()

    def post(self, url: str, payload: Any) -> Outcome:
        """
        Blocking form of post_async.

        Runs the request on a private event loop. When called from a thread
        that is already running a loop, the request runs on a worker thread
        and this call blocks until it finishes.
        """
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            return self._run(url, payload)

        with ThreadPoolExecutor(max_workers=1) as executor:
            return executor.submit(self._run, url, payload).result()

    def _run(self, url: str, payload: Any) -> Outcome:
        try:
            return asyncio.run(self.post_async(url, payload))
        except asyncio.CancelledError:
            return Outcome.failure(WebhookSystemError("request was cancelled"))
