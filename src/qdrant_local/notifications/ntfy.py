"""Push notifications over ntfy.

Messages are POSTed as the request body to ``<server>/<topic>``; everything
else travels in headers (Title, Tags, Priority, Click, Actions).
"""

from __future__ import annotations

import base64
import json
import logging
import os
from collections.abc import Sequence
from http.client import HTTPException
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from qdrant_local.core.constants import NTFY_ENDPOINT_ENV_VARS
from qdrant_local.core.exceptions import NotificationError
from qdrant_local.core.schemas import NtfyAction, PushResult

logger = logging.getLogger(__name__)


def resolve_ntfy_endpoint(endpoint: str | None = None, topic: str | None = None) -> str | None:
    """Resolve the URL to POST to.

    The explicit endpoint wins over the environment. When a topic is given it
    is appended to the endpoint.
    """
    configured = endpoint
    if not configured:
        for var in NTFY_ENDPOINT_ENV_VARS:
            configured = os.environ.get(var)
            if configured:
                break

    if not configured:
        return None

    if topic:
        return f"{configured.rstrip('/')}/{topic}"
    return configured


def build_auth_header(
    access_token: str | None = None,
    username: str | None = None,
    password: str | None = None,
) -> str | None:
    """Bearer token if present, otherwise basic auth if both parts are present."""
    if access_token:
        return f"Bearer {access_token}"
    if username and password:
        credentials = base64.b64encode(f"{username}:{password}".encode()).decode("ascii")
        return f"Basic {credentials}"
    return None


def build_headers(
    title: str | None = None,
    tags: Sequence[str] | None = None,
    priority: int | None = None,
    click: str | None = None,
    actions: Sequence[NtfyAction] | None = None,
    authorization: str | None = None,
) -> dict[str, str]:
    """Translate notification options into ntfy request headers."""
    headers: dict[str, str] = {}
    if authorization:
        headers["Authorization"] = authorization
    if title:
        headers["Title"] = title
    if tags:
        headers["Tags"] = ",".join(tags)
    if priority is not None:
        headers["Priority"] = str(priority)
    if click:
        headers["Click"] = click
    if actions:
        headers["Actions"] = ";".join(a.to_header_value() for a in actions)
    return headers


def _parse_message_id(body: str) -> str | None:
    try:
        parsed = json.loads(body)
    except json.JSONDecodeError:
        return None
    if isinstance(parsed, dict) and isinstance(parsed.get("id"), str):
        return parsed["id"]
    return None


def send_push_notification(
    message: str,
    *,
    endpoint: str | None = None,
    topic: str | None = None,
    title: str | None = None,
    tags: Sequence[str] | None = None,
    priority: int | None = None,
    click: str | None = None,
    actions: Sequence[NtfyAction] | None = None,
    access_token: str | None = None,
    username: str | None = None,
    password: str | None = None,
    timeout: float = 10.0,
) -> PushResult:
    """Publish a message to an ntfy topic.

    Args:
        message: Notification body (required)
        endpoint: ntfy server or topic URL; falls back to the environment
        topic: Topic appended to the endpoint
        title: Notification title
        tags: Emoji/tag shortcodes
        priority: 1 (min) to 5 (max)
        click: URL opened when the notification is tapped
        actions: Action buttons
        access_token: Bearer token
        username: Basic auth user (used only without a token)
        password: Basic auth password
        timeout: Request timeout in seconds

    Returns:
        PushResult with the HTTP status and the message id when the server
        returned one.

    Raises:
        NotificationError: If the message or endpoint is missing, the server
            is unreachable, or it answers with a non-success status
    """
    if not message:
        raise NotificationError("ntfy notification message is required")

    url = resolve_ntfy_endpoint(endpoint, topic)
    if not url:
        raise NotificationError(
            "ntfy endpoint is required. Provide endpoint or set "
            f"{' or '.join(NTFY_ENDPOINT_ENV_VARS)}."
        )

    headers = build_headers(
        title=title,
        tags=tags,
        priority=priority,
        click=click,
        actions=actions,
        authorization=build_auth_header(access_token, username, password),
    )
    request = Request(url, data=message.encode("utf-8"), headers=headers, method="POST")
    logger.debug(f"Publishing ntfy notification to {url}")

    try:
        with urlopen(request, timeout=timeout) as response:
            status = response.status
            body = response.read().decode("utf-8", errors="replace")
    except HTTPError as e:
        detail = e.read().decode("utf-8", errors="replace").strip() if e.fp else ""
        suffix = f": {detail}" if detail else ""
        raise NotificationError(
            f"ntfy notification failed with {e.code} {e.reason}{suffix}"
        ) from e
    except (URLError, HTTPException, OSError) as e:
        raise NotificationError(f"ntfy notification failed: {e}") from e

    return PushResult(ok=200 <= status < 300, status=status, id=_parse_message_id(body))
