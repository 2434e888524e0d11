"""TOML loader for conference bootstrap files.

Reads and validates a conference TOML file (see ``conference.example.toml``)
describing a conference, its ticket sales target with milestones, and its
sponsor tiers, so that they can be created from the command line.
"""

import re
import tomllib
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Any

from django_confdesk.tickets.targets import TargetCurve

_REQUIRED_CONFERENCE_FIELDS: set[str] = {"name", "start", "end"}
_REQUIRED_SALES_TARGET_FIELDS: set[str] = {"sales_start"}
_REQUIRED_MILESTONE_FIELDS: set[str] = {"date", "target_percentage", "label"}
_REQUIRED_TIER_FIELDS: set[str] = {"title"}

_SLUG_RE = re.compile(r"[^\w\s-]")
_WHITESPACE_RE = re.compile(r"[-\s]+")


def _slugify(value: str) -> str:
    """Lowercase *value* and join its words with hyphens."""
    value = _SLUG_RE.sub("", value.lower())
    return _WHITESPACE_RE.sub("-", value).strip("-")


def _validate_mapping(mapping: object, required: set[str], label: str) -> None:
    """Validate that *mapping* is a dict containing all *required* keys.

    Args:
        mapping: The value to validate.
        required: Set of required key names.
        label: Location of the value in the file, for error messages.

    Raises:
        TypeError: If *mapping* is not a dict.
        ValueError: If *mapping* is missing required keys.
    """
    if not isinstance(mapping, dict):
        msg = f"{label} must be a mapping, got {type(mapping).__name__}"
        raise TypeError(msg)
    missing = required - mapping.keys()
    if missing:
        msg = f"{label} is missing required fields: {', '.join(sorted(missing))}"
        raise ValueError(msg)


def _require_date(value: object, label: str) -> None:
    # tomllib parses bare dates to ``date`` and datetimes to ``datetime``.
    if not isinstance(value, date) or hasattr(value, "hour"):
        msg = f"{label} must be a TOML date (YYYY-MM-DD)"
        raise ValueError(msg)


def _validate_sponsor_tiers(conf: dict[str, Any]) -> None:
    tiers = conf.get("sponsor_tiers")
    if tiers is None:
        return
    if not isinstance(tiers, list):
        msg = "conference.sponsor_tiers must be a list"
        raise ValueError(msg)

    seen: set[str] = set()
    for idx, tier in enumerate(tiers):
        label = f"conference.sponsor_tiers[{idx}]"
        _validate_mapping(tier, _REQUIRED_TIER_FIELDS, label)
        if "slug" not in tier:
            tier["slug"] = _slugify(tier["title"])
        slug = tier["slug"]
        if not isinstance(slug, str) or not slug:
            msg = f"{label}.slug must be a non-empty string"
            raise ValueError(msg)
        if slug in seen:
            msg = f"conference.sponsor_tiers has duplicate slug: {slug}"
            raise ValueError(msg)
        seen.add(slug)
        price = tier.get("price")
        if price is not None and (not isinstance(price, (int, Decimal)) or price < 0):
            msg = f"{label}.price must be a non-negative number"
            raise ValueError(msg)


def _validate_sales_target(conf: dict[str, Any]) -> None:
    target = conf.get("sales_target")
    if target is None:
        return
    _validate_mapping(target, _REQUIRED_SALES_TARGET_FIELDS, "conference.sales_target")
    _require_date(target["sales_start"], "conference.sales_target.sales_start")
    if target["sales_start"] > conf["start"]:
        msg = "conference.sales_target.sales_start must be on or before conference.start"
        raise ValueError(msg)

    curve = target.setdefault("curve", TargetCurve.LINEAR.value)
    if curve not in TargetCurve.values:
        msg = f"conference.sales_target.curve must be one of: {', '.join(TargetCurve.values)}"
        raise ValueError(msg)

    milestones = target.setdefault("milestones", [])
    if not isinstance(milestones, list):
        msg = "conference.sales_target.milestones must be a list"
        raise ValueError(msg)
    for idx, milestone in enumerate(milestones):
        label = f"conference.sales_target.milestones[{idx}]"
        _validate_mapping(milestone, _REQUIRED_MILESTONE_FIELDS, label)
        _require_date(milestone["date"], f"{label}.date")
        percentage = milestone["target_percentage"]
        if isinstance(percentage, bool) or not isinstance(percentage, (int, Decimal)) or not 0 <= percentage <= 100:
            msg = f"{label}.target_percentage must be a number between 0 and 100"
            raise ValueError(msg)


def load_conference_config(path: str | Path) -> dict[str, Any]:
    """Load and validate a conference TOML configuration file.

    Args:
        path: Filesystem path to the TOML file.

    Returns:
        The ``conference`` mapping from the parsed TOML, with native types
        (``datetime.date`` for dates, ``Decimal`` for prices). The conference
        and tier slugs are derived from their names when not given, and the
        sales target curve defaults to ``linear``.

    Raises:
        FileNotFoundError: If *path* does not exist.
        TypeError: If a table has the wrong shape.
        ValueError: If required keys are missing, values are invalid, or the
            file is not valid TOML.
    """
    path = Path(path)
    if not path.exists():
        msg = f"Conference config file not found: {path}"
        raise FileNotFoundError(msg)

    with path.open("rb") as fh:
        try:
            data: dict[str, Any] = tomllib.load(fh, parse_float=Decimal)
        except tomllib.TOMLDecodeError as exc:
            msg = f"Invalid TOML in {path}: {exc}"
            raise ValueError(msg) from exc

    if "conference" not in data:
        msg = "Missing required [conference] table in config file"
        raise ValueError(msg)

    conf = data["conference"]
    _validate_mapping(conf, _REQUIRED_CONFERENCE_FIELDS, "conference")
    _require_date(conf["start"], "conference.start")
    _require_date(conf["end"], "conference.end")
    if conf["end"] < conf["start"]:
        msg = "conference.end must be on or after conference.start"
        raise ValueError(msg)
    if "slug" not in conf:
        conf["slug"] = _slugify(conf["name"])

    capacity = conf.get("ticket_capacity", 0)
    if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity < 0:
        msg = "conference.ticket_capacity must be a non-negative integer"
        raise ValueError(msg)

    _validate_sales_target(conf)
    _validate_sponsor_tiers(conf)
    return conf
