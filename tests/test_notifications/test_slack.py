"""Tests for the Slack Web API client."""

import logging
from unittest.mock import patch

import httpx
import pytest
from django.test import override_settings

from django_confdesk.notifications.slack import post_slack_message

SLACK_SETTINGS = {
    "slack": {
        "bot_token": "xoxb-test",
        "default_channel": "#general-sales",
        "development_mode": False,
    }
}
MESSAGE = {"blocks": [{"type": "divider"}]}


def _response(status_code=200, payload=None):
    request = httpx.Request("POST", "https://slack.com/api/chat.postMessage")
    return httpx.Response(status_code, json=payload if payload is not None else {"ok": True}, request=request)


@patch("django_confdesk.notifications.slack.httpx.post")
def test_development_mode_logs_instead_of_posting(mock_post, caplog):
    with caplog.at_level(logging.INFO, logger="django_confdesk.notifications.slack"):
        post_slack_message(MESSAGE)

    mock_post.assert_not_called()
    assert "development mode" in caplog.text
    assert '"divider"' in caplog.text


@override_settings(DJANGO_CONFDESK={"slack": {"development_mode": False}})
@patch("django_confdesk.notifications.slack.httpx.post")
def test_missing_token_drops_message(mock_post, caplog):
    with caplog.at_level(logging.WARNING, logger="django_confdesk.notifications.slack"):
        post_slack_message(MESSAGE)

    mock_post.assert_not_called()
    assert "SLACK_BOT_TOKEN is not configured" in caplog.text


@override_settings(DJANGO_CONFDESK=SLACK_SETTINGS)
@patch("django_confdesk.notifications.slack.httpx.post")
def test_posts_to_default_channel(mock_post):
    mock_post.return_value = _response()

    post_slack_message(MESSAGE)

    mock_post.assert_called_once_with(
        "https://slack.com/api/chat.postMessage",
        json={"blocks": [{"type": "divider"}], "channel": "#general-sales"},
        headers={
            "Authorization": "Bearer xoxb-test",
            "Content-Type": "application/json; charset=utf-8",
        },
        timeout=10,
    )


@override_settings(DJANGO_CONFDESK=SLACK_SETTINGS)
@patch("django_confdesk.notifications.slack.httpx.post")
def test_explicit_channel_wins(mock_post):
    mock_post.return_value = _response()

    post_slack_message(MESSAGE, channel="#cnd-sales")

    assert mock_post.call_args.kwargs["json"]["channel"] == "#cnd-sales"


@override_settings(DJANGO_CONFDESK={"slack": {**SLACK_SETTINGS["slack"], "development_mode": True}})
@patch("django_confdesk.notifications.slack.httpx.post")
def test_force_slack_overrides_development_mode(mock_post):
    mock_post.return_value = _response()

    post_slack_message(MESSAGE, force_slack=True)

    mock_post.assert_called_once()


@override_settings(DJANGO_CONFDESK=SLACK_SETTINGS)
@patch("django_confdesk.notifications.slack.httpx.post")
def test_http_error(mock_post):
    mock_post.return_value = _response(status_code=500, payload={})

    with pytest.raises(RuntimeError, match="Slack API HTTP 500: Internal Server Error"):
        post_slack_message(MESSAGE)


@override_settings(DJANGO_CONFDESK=SLACK_SETTINGS)
@patch("django_confdesk.notifications.slack.httpx.post")
def test_slack_error_payload(mock_post):
    mock_post.return_value = _response(payload={"ok": False, "error": "channel_not_found"})

    with pytest.raises(RuntimeError, match="Slack API error: channel_not_found"):
        post_slack_message(MESSAGE)


@override_settings(DJANGO_CONFDESK=SLACK_SETTINGS)
@patch("django_confdesk.notifications.slack.httpx.post")
def test_connection_error(mock_post):
    mock_post.side_effect = httpx.ConnectTimeout("timed out")

    with pytest.raises(RuntimeError, match="Slack API connection error: timed out"):
        post_slack_message(MESSAGE)
