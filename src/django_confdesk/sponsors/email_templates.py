"""Sponsor outreach email templating.

Templates use triple-brace placeholders (``{{{SPONSOR_NAME}}}``) that are
filled from the sponsor's CRM record and conference. Unknown placeholders are
left untouched so editors can spot them.
"""

import re
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING
from urllib.parse import urlparse

from django_confdesk.sponsors.models import SponsorStatus, TemplateCategory, TemplateLanguage

if TYPE_CHECKING:
    from django_confdesk.conference.models import Conference
    from django_confdesk.sponsors.models import SponsorEmailTemplate, SponsorForConference

TEMPLATE_VARIABLE_DESCRIPTIONS: dict[str, str] = {
    "CONTACT_NAMES": 'Recipient names (e.g. "Yves and Petter")',
    "SPONSOR_NAME": "Company name of the sponsor",
    "ORG_NAME": 'Organizer name (e.g. "Cloud Native Bergen")',
    "CONFERENCE_TITLE": "Full conference title",
    "CONFERENCE_DATE": "Conference date (DD/MM-YY)",
    "CONFERENCE_YEAR": 'Conference year (e.g. "2026")',
    "CONFERENCE_CITY": "Conference city",
    "CONFERENCE_URL": "Conference website URL",
    "SPONSOR_PAGE_URL": "Sponsor page URL",
    "PROSPECTUS_URL": "Sponsor prospectus/deck URL",
    "SENDER_NAME": "Name of the person sending the email",
    "TIER_NAME": "Sponsor tier name (if assigned)",
}

_VARIABLE_RE = re.compile(r"\{\{\{(\w+)\}\}\}")


@dataclass(frozen=True, slots=True)
class RenderedEmail:
    """A template with all known placeholders filled in."""

    subject: str
    body: str


def process_template_variables(text: str, variables: Mapping[str, str]) -> str:
    """Replace ``{{{VAR}}}`` placeholders with values from *variables*."""
    for key, value in variables.items():
        text = text.replace(f"{{{{{{{key}}}}}}}", value)
    return text


def extract_variables_from_text(text: str) -> list[str]:
    """Return the placeholder names used in *text*, deduplicated in order."""
    return list(dict.fromkeys(_VARIABLE_RE.findall(text)))


def find_unsupported_variables(supported: Mapping[str, str], *sources: str) -> list[str]:
    """Return placeholder names in *sources* that are not in *supported*."""
    found: dict[str, None] = {}
    for source in sources:
        for name in extract_variables_from_text(source):
            if name not in supported:
                found[name] = None
    return list(found)


def build_template_variables(  # noqa: PLR0913
    *,
    sponsor_name: str,
    conference: "Conference",
    contact_names: str = "",
    sender_name: str = "",
    tier_name: str = "",
) -> dict[str, str]:
    """Build the placeholder values for a sponsor email.

    ``SPONSOR_NAME`` and ``CONFERENCE_TITLE`` are always present; the other
    variables are only set when the underlying data exists.
    """
    variables: dict[str, str] = {
        "SPONSOR_NAME": sponsor_name,
        "CONFERENCE_TITLE": conference.name,
    }
    if contact_names:
        variables["CONTACT_NAMES"] = contact_names
    if conference.organizer:
        variables["ORG_NAME"] = conference.organizer
    if conference.start_date:
        start = conference.start_date
        variables["CONFERENCE_DATE"] = f"{start:%d}/{start:%m}-{start:%y}"
        variables["CONFERENCE_YEAR"] = f"{start:%Y}"
    if conference.city:
        variables["CONFERENCE_CITY"] = conference.city
    if conference.domain:
        variables["CONFERENCE_URL"] = f"https://{conference.domain}"
        variables["SPONSOR_PAGE_URL"] = f"https://{conference.domain}/sponsor"
    if conference.prospectus_url:
        variables["PROSPECTUS_URL"] = conference.prospectus_url
    if sender_name:
        variables["SENDER_NAME"] = sender_name
    if tier_name:
        variables["TIER_NAME"] = tier_name
    return variables


def suggest_template_category(tags: Sequence[str] = (), status: str = "") -> str:
    """Infer a template category from CRM tags, then pipeline status."""
    if "returning-sponsor" in tags:
        return TemplateCategory.RETURNING_SPONSOR
    if "cold-outreach" in tags:
        return TemplateCategory.COLD_OUTREACH
    if "needs-follow-up" in tags:
        return TemplateCategory.FOLLOW_UP
    if status in (SponsorStatus.CONTACTED, SponsorStatus.NEGOTIATING):
        return TemplateCategory.FOLLOW_UP
    return TemplateCategory.COLD_OUTREACH


def suggest_template_language(currency: str = "", org_number: str = "", website: str = "") -> str:
    """Infer the template language.

    A Norwegian organization number, NOK contracts, or a ``.no`` website
    suggest Norwegian; any other currency suggests English. Norwegian is the
    default.
    """
    if org_number:
        return TemplateLanguage.NORWEGIAN
    if currency:
        return TemplateLanguage.NORWEGIAN if currency == "NOK" else TemplateLanguage.ENGLISH
    if website:
        try:
            hostname = urlparse(website).hostname or ""
        except ValueError:
            hostname = ""
        if hostname.endswith(".no"):
            return TemplateLanguage.NORWEGIAN
    return TemplateLanguage.NORWEGIAN


def find_best_template(
    templates: Iterable["SponsorEmailTemplate"],
    category: str,
    language: str,
) -> "SponsorEmailTemplate | None":
    """Pick the template best matching *category* and *language*.

    Scoring is +4 for the category, +2 for the language and +1 for a default
    template. Ties go to the first template seen.
    """
    best = None
    best_score = -1
    for template in templates:
        score = 0
        if template.category == category:
            score += 4
        if template.language == language:
            score += 2
        if template.is_default:
            score += 1
        if score > best_score:
            best, best_score = template, score
    return best


def render_sponsor_email(
    template: "SponsorEmailTemplate",
    record: "SponsorForConference",
    sender_name: str = "",
) -> RenderedEmail:
    """Fill a template for a sponsor CRM record."""
    variables = build_template_variables(
        sponsor_name=record.sponsor.name,
        conference=record.conference,
        contact_names=record.contact_names,
        sender_name=sender_name,
        tier_name=record.tier.title if record.tier else "",
    )
    return RenderedEmail(
        subject=process_template_variables(template.subject, variables),
        body=process_template_variables(template.body, variables),
    )


def suggest_template_for_record(
    templates: Iterable["SponsorEmailTemplate"],
    record: "SponsorForConference",
) -> "SponsorEmailTemplate | None":
    """Choose a template for a CRM record from its tags, status and locale hints."""
    category = suggest_template_category(tags=record.tags or [], status=record.status)
    language = suggest_template_language(
        currency=record.contract_currency,
        org_number=record.sponsor.org_number,
        website=record.sponsor.website_url,
    )
    return find_best_template(templates, category, language)
