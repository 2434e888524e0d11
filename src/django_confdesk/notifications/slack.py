"""Minimal Slack Web API client for posting notifications."""

import json
import logging
from typing import Any

import httpx

from django_confdesk.settings import get_config

logger = logging.getLogger(__name__)

SlackBlock = dict[str, Any]


def post_slack_message(message: dict[str, Any], channel: str | None = None, force_slack: bool = False) -> None:
    """Post a message payload to Slack via ``chat.postMessage``.

    In development mode the payload is logged instead of sent, unless
    *force_slack* is set. A missing bot token is logged and the message is
    dropped.

    Args:
        message: Slack message payload, typically ``{"blocks": [...]}``.
        channel: Target channel. Falls back to the configured default channel.
        force_slack: Send even when development mode is enabled.

    Raises:
        RuntimeError: If Slack rejects the request or cannot be reached.
    """
    config = get_config().slack

    if config.development_mode and not force_slack:
        logger.info("Slack notification (development mode): %s", json.dumps(message, indent=2, ensure_ascii=False))
        return

    if not config.bot_token:
        logger.warning("SLACK_BOT_TOKEN is not configured")
        return

    payload = {**message, "channel": channel or config.default_channel}
    url = f"{config.api_url.rstrip('/')}/chat.postMessage"
    try:
        response = httpx.post(
            url,
            json=payload,
            headers={
                "Authorization": f"Bearer {config.bot_token}",
                "Content-Type": "application/json; charset=utf-8",
            },
            timeout=config.timeout,
        )
    except httpx.RequestError as exc:
        msg = f"Slack API connection error: {exc}"
        raise RuntimeError(msg) from exc

    if not response.is_success:
        msg = f"Slack API HTTP {response.status_code}: {response.reason_phrase}"
        raise RuntimeError(msg)

    result = response.json()
    if not result.get("ok"):
        msg = f"Slack API error: {result.get('error', 'unknown_error')}"
        raise RuntimeError(msg)

    logger.info("Posted Slack message to %s", payload["channel"])
