from datetime import date

import pytest

from django_confdesk.conference.models import Conference
from django_confdesk.sponsors.email_templates import (
    TEMPLATE_VARIABLE_DESCRIPTIONS,
    build_template_variables,
    extract_variables_from_text,
    find_best_template,
    find_unsupported_variables,
    process_template_variables,
    render_sponsor_email,
    suggest_template_category,
    suggest_template_for_record,
    suggest_template_language,
)
from django_confdesk.sponsors.models import (
    Sponsor,
    SponsorEmailTemplate,
    SponsorForConference,
    SponsorTier,
)


def _conference(**kwargs):
    defaults = {
        "name": "Cloud Native Day Bergen 2026",
        "slug": "cndb-2026",
        "organizer": "Cloud Native Bergen",
        "city": "Bergen",
        "domain": "cloudnativebergen.dev",
        "prospectus_url": "https://example.com/prospectus.pdf",
        "start_date": date(2026, 10, 27),
        "end_date": date(2026, 10, 28),
    }
    defaults.update(kwargs)
    return Conference(**defaults)


def test_process_template_variables_leaves_unknown_placeholders():
    text = "Hi {{{CONTACT_NAMES}}}, {{{SPONSOR_NAME}}} and {{{UNKNOWN}}}"

    result = process_template_variables(text, {"CONTACT_NAMES": "Kari", "SPONSOR_NAME": "Acme"})

    assert result == "Hi Kari, Acme and {{{UNKNOWN}}}"


def test_extract_variables_deduplicates_in_order():
    text = "{{{B}}} {{{A}}} {{{B}}} {{not_a_var}}"
    assert extract_variables_from_text(text) == ["B", "A"]


def test_find_unsupported_variables():
    unsupported = find_unsupported_variables(
        TEMPLATE_VARIABLE_DESCRIPTIONS,
        "{{{SPONSOR_NAME}}} {{{DISCOUNT}}}",
        "{{{DISCOUNT}}} {{{DEADLINE}}}",
    )
    assert unsupported == ["DISCOUNT", "DEADLINE"]


class TestBuildTemplateVariables:
    def test_full_conference(self):
        variables = build_template_variables(
            sponsor_name="Acme",
            conference=_conference(),
            contact_names="Kari and Ola",
            sender_name="Hans",
            tier_name="Ingress",
        )

        assert variables == {
            "SPONSOR_NAME": "Acme",
            "CONFERENCE_TITLE": "Cloud Native Day Bergen 2026",
            "CONTACT_NAMES": "Kari and Ola",
            "ORG_NAME": "Cloud Native Bergen",
            "CONFERENCE_DATE": "27/10-26",
            "CONFERENCE_YEAR": "2026",
            "CONFERENCE_CITY": "Bergen",
            "CONFERENCE_URL": "https://cloudnativebergen.dev",
            "SPONSOR_PAGE_URL": "https://cloudnativebergen.dev/sponsor",
            "PROSPECTUS_URL": "https://example.com/prospectus.pdf",
            "SENDER_NAME": "Hans",
            "TIER_NAME": "Ingress",
        }
        assert set(variables) <= set(TEMPLATE_VARIABLE_DESCRIPTIONS)

    def test_minimal_conference_omits_optional_values(self):
        conference = _conference(organizer="", city="", domain="", prospectus_url="")

        variables = build_template_variables(sponsor_name="Acme", conference=conference)

        assert set(variables) == {"SPONSOR_NAME", "CONFERENCE_TITLE", "CONFERENCE_DATE", "CONFERENCE_YEAR"}


@pytest.mark.parametrize(
    ("tags", "status", "expected"),
    [
        (["returning-sponsor", "cold-outreach"], "prospect", "returning-sponsor"),
        (["cold-outreach"], "negotiating", "cold-outreach"),
        (["needs-follow-up"], "prospect", "follow-up"),
        ([], "contacted", "follow-up"),
        ([], "negotiating", "follow-up"),
        ([], "prospect", "cold-outreach"),
        ([], "", "cold-outreach"),
    ],
)
def test_suggest_template_category(tags, status, expected):
    assert suggest_template_category(tags=tags, status=status) == expected


@pytest.mark.parametrize(
    ("kwargs", "expected"),
    [
        ({"org_number": "912345678", "currency": "EUR"}, "no"),
        ({"currency": "NOK"}, "no"),
        ({"currency": "EUR"}, "en"),
        ({"website": "https://acme.no/about"}, "no"),
        ({"website": "https://acme.com"}, "no"),
        ({}, "no"),
    ],
)
def test_suggest_template_language(kwargs, expected):
    assert suggest_template_language(**kwargs) == expected


def _template(title, category, language, is_default=False):
    return SponsorEmailTemplate(
        title=title,
        category=category,
        language=language,
        is_default=is_default,
        subject="s",
        body="b",
    )


class TestFindBestTemplate:
    def test_category_outweighs_language(self):
        english_cold = _template("a", "cold-outreach", "en")
        norwegian_follow_up = _template("b", "follow-up", "no", is_default=True)

        assert find_best_template([norwegian_follow_up, english_cold], "cold-outreach", "no") is english_cold

    def test_default_breaks_ties(self):
        plain = _template("a", "cold-outreach", "no")
        default = _template("b", "cold-outreach", "no", is_default=True)

        assert find_best_template([plain, default], "cold-outreach", "no") is default

    def test_first_wins_on_equal_score(self):
        first = _template("a", "custom", "en")
        second = _template("b", "custom", "en")

        assert find_best_template([first, second], "cold-outreach", "no") is first

    def test_no_templates(self):
        assert find_best_template([], "cold-outreach", "no") is None


@pytest.mark.django_db
class TestRecordHelpers:
    @pytest.fixture
    def record(self):
        conference = _conference()
        conference.save()
        tier = SponsorTier.objects.create(conference=conference, title="Ingress")
        return SponsorForConference.objects.create(
            sponsor=Sponsor.objects.create(name="Acme", website_url="https://acme.com"),
            conference=conference,
            tier=tier,
            status="contacted",
            contract_currency="EUR",
            contact_names="Kari",
        )

    def test_render_sponsor_email(self, record):
        template = SponsorEmailTemplate.objects.create(
            title="Follow-up",
            subject="{{{CONFERENCE_TITLE}}}: {{{SPONSOR_NAME}}}",
            body="Hi {{{CONTACT_NAMES}}}, the {{{TIER_NAME}}} package is still open. {{{SENDER_NAME}}}",
        )

        email = render_sponsor_email(template, record, sender_name="Hans")

        assert email.subject == "Cloud Native Day Bergen 2026: Acme"
        assert email.body == "Hi Kari, the Ingress package is still open. Hans"

    def test_suggest_template_for_record(self, record):
        cold = SponsorEmailTemplate.objects.create(
            title="Cold", category="cold-outreach", language="en", subject="s", body="b"
        )
        follow_up = SponsorEmailTemplate.objects.create(
            title="Follow-up EN", category="follow-up", language="en", subject="s", body="b"
        )

        assert suggest_template_for_record([cold, follow_up], record) == follow_up
