"""Typed configuration for django-confdesk.

Reads a single ``DJANGO_CONFDESK`` dict from Django settings and exposes it as
composed, frozen dataclasses with sensible defaults.

Usage::

    from django_confdesk.settings import get_config

    config = get_config()
    config.slack.bot_token
    config.checkin.api_url
    config.currency
"""

import functools
from collections.abc import Mapping
from dataclasses import dataclass, field

from django.conf import settings
from django.test.signals import setting_changed

DEFAULT_SPONSOR_TIER_TICKET_ALLOCATION: dict[str, int] = {
    "Pod": 2,
    "Service": 3,
    "Ingress": 5,
}


@dataclass(frozen=True, slots=True)
class SlackConfig:
    """Slack Web API configuration for sales notifications."""

    bot_token: str | None = None
    api_url: str = "https://slack.com/api"
    default_channel: str = "#sales"
    development_mode: bool = False
    timeout: int = 10


@dataclass(frozen=True, slots=True)
class CheckinConfig:
    """Checkin.no GraphQL API configuration."""

    api_url: str = "https://api.checkin.no/graphql"
    api_key: str | None = None
    api_secret: str | None = None
    batch_size: int = 1000
    timeout: int = 30


@dataclass(frozen=True, slots=True)
class SalesUpdateConfig:
    """Periodic sales update and target analysis configuration.

    ``on_track_tolerance`` is measured in percentage points: sales within this
    many points below the target are still considered on track.
    """

    cron_secret: str | None = None
    on_track_tolerance: float = 5.0
    target_interval_days: int = 7
    sponsor_tier_ticket_allocation: Mapping[str, int] = field(
        default_factory=lambda: dict(DEFAULT_SPONSOR_TIER_TICKET_ALLOCATION)
    )


@dataclass(frozen=True, slots=True)
class FeaturesConfig:
    """Feature toggles for enabling/disabling django-confdesk modules.

    All features are enabled by default. Set to ``False`` in
    ``DJANGO_CONFDESK['features']`` to disable.
    """

    tickets_enabled: bool = True
    sponsors_enabled: bool = True
    proposals_enabled: bool = True
    sales_update_enabled: bool = True
    manage_ui_enabled: bool = True


@dataclass(frozen=True, slots=True)
class ConfdeskConfig:
    """Top-level django-confdesk configuration."""

    slack: SlackConfig = field(default_factory=SlackConfig)
    checkin: CheckinConfig = field(default_factory=CheckinConfig)
    sales_update: SalesUpdateConfig = field(default_factory=SalesUpdateConfig)
    features: FeaturesConfig = field(default_factory=FeaturesConfig)
    currency: str = "NOK"


def _section(raw_data: dict[str, object], name: str) -> dict[str, object]:
    """Pop a nested section from the raw settings dict, enforcing a mapping."""
    data = raw_data.pop(name, {})
    if not isinstance(data, Mapping):
        msg = f"DJANGO_CONFDESK['{name}'] must be a mapping (dict-like object)"
        raise TypeError(msg)
    return dict(data)


@functools.lru_cache(maxsize=1)
def get_config() -> ConfdeskConfig:
    """Build and return the confdesk configuration.

    Reads ``settings.DJANGO_CONFDESK`` (a plain dict) and returns a frozen
    :class:`ConfdeskConfig`.  The result is cached; the cache is cleared
    automatically when Django's ``setting_changed`` signal fires (e.g. inside
    ``override_settings``).
    """
    raw = getattr(settings, "DJANGO_CONFDESK", {})
    if not isinstance(raw, Mapping):
        msg = "DJANGO_CONFDESK must be a mapping (dict-like object)"
        raise TypeError(msg)
    raw_data = dict(raw)

    slack_data = _section(raw_data, "slack")
    checkin_data = _section(raw_data, "checkin")
    sales_update_data = _section(raw_data, "sales_update")
    features_data = _section(raw_data, "features")

    config = ConfdeskConfig(
        slack=SlackConfig(**slack_data),
        checkin=CheckinConfig(**checkin_data),
        sales_update=SalesUpdateConfig(**sales_update_data),
        features=FeaturesConfig(**features_data),
        **raw_data,
    )
    _validate_confdesk_config(config)
    return config


def _validate_confdesk_config(config: ConfdeskConfig) -> None:
    """Validate high-impact configuration values with clear error messages."""
    if not isinstance(config.currency, str) or not config.currency.strip():
        msg = "DJANGO_CONFDESK['currency'] must be a non-empty string"
        raise ValueError(msg)
    if not isinstance(config.slack.development_mode, bool):
        msg = "DJANGO_CONFDESK['slack']['development_mode'] must be a boolean"
        raise TypeError(msg)
    if not isinstance(config.checkin.batch_size, int) or config.checkin.batch_size <= 0:
        msg = "DJANGO_CONFDESK['checkin']['batch_size'] must be a positive integer"
        raise ValueError(msg)
    if not isinstance(config.checkin.timeout, (int, float)) or config.checkin.timeout <= 0:
        msg = "DJANGO_CONFDESK['checkin']['timeout'] must be a positive number"
        raise ValueError(msg)

    sales_update = config.sales_update
    if not isinstance(sales_update.target_interval_days, int) or sales_update.target_interval_days <= 0:
        msg = "DJANGO_CONFDESK['sales_update']['target_interval_days'] must be a positive integer"
        raise ValueError(msg)
    tolerance = sales_update.on_track_tolerance
    if not isinstance(tolerance, (int, float)) or tolerance < 0:
        msg = "DJANGO_CONFDESK['sales_update']['on_track_tolerance'] must be a non-negative number"
        raise ValueError(msg)
    allocation = sales_update.sponsor_tier_ticket_allocation
    if not isinstance(allocation, Mapping):
        msg = "DJANGO_CONFDESK['sales_update']['sponsor_tier_ticket_allocation'] must be a mapping"
        raise TypeError(msg)
    for tier, tickets in allocation.items():
        if not isinstance(tickets, int) or tickets < 0:
            msg = (
                "DJANGO_CONFDESK['sales_update']['sponsor_tier_ticket_allocation'] "
                f"value for {tier!r} must be a non-negative integer"
            )
            raise ValueError(msg)


def _clear_config_cache(*, setting: str, **kwargs: object) -> None:  # noqa: ARG001
    """Clear the cached config when Django settings change during tests."""
    if setting == "DJANGO_CONFDESK":
        get_config.cache_clear()


setting_changed.connect(_clear_config_cache, dispatch_uid="django_confdesk.settings.clear_config_cache")
