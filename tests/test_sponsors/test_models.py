"""Tests for sponsors models."""

from datetime import date
from decimal import Decimal

import pytest
from django.core.exceptions import ValidationError
from django.db import IntegrityError

from django_confdesk.conference.models import Conference
from django_confdesk.sponsors.models import (
    ContractStatus,
    InvoiceStatus,
    Sponsor,
    SponsorEmailTemplate,
    SponsorForConference,
    SponsorStatus,
    SponsorTier,
)


@pytest.fixture
def conference() -> Conference:
    return Conference.objects.create(
        name="SponsorCon",
        slug="sponsorcon",
        start_date=date(2027, 6, 1),
        end_date=date(2027, 6, 3),
    )


@pytest.fixture
def tier(conference: Conference) -> SponsorTier:
    return SponsorTier.objects.create(conference=conference, title="Ingress Partner", price=Decimal("100000.00"))


@pytest.fixture
def sponsor() -> Sponsor:
    return Sponsor.objects.create(name="Acme Corp")


@pytest.mark.django_db
class TestSponsorTier:
    def test_slug_generated_from_title(self, tier: SponsorTier) -> None:
        assert tier.slug == "ingress-partner"

    def test_explicit_slug_kept(self, conference: Conference) -> None:
        tier = SponsorTier.objects.create(conference=conference, title="Pod", slug="pods")
        assert tier.slug == "pods"

    def test_str(self, tier: SponsorTier) -> None:
        assert str(tier) == "Ingress Partner (sponsorcon)"

    def test_defaults(self, tier: SponsorTier) -> None:
        assert tier.tier_type == SponsorTier.TierType.STANDARD
        assert tier.currency == "NOK"
        assert tier.sold_out is False

    def test_slug_unique_per_conference(self, conference: Conference, tier: SponsorTier) -> None:
        with pytest.raises(IntegrityError):
            SponsorTier.objects.create(conference=conference, title="Ingress Partner")

    def test_ordering(self, conference: Conference) -> None:
        SponsorTier.objects.create(conference=conference, title="Pod", order=2)
        SponsorTier.objects.create(conference=conference, title="Service", order=1)
        SponsorTier.objects.create(conference=conference, title="Ingress", order=1)

        titles = list(SponsorTier.objects.values_list("title", flat=True))
        assert titles == ["Ingress", "Service", "Pod"]


@pytest.mark.django_db
class TestSponsor:
    def test_slug_generated_from_name(self, sponsor: Sponsor) -> None:
        assert sponsor.slug == "acme-corp"
        assert str(sponsor) == "Acme Corp"


@pytest.mark.django_db
class TestSponsorForConference:
    def test_defaults(self, conference: Conference, sponsor: Sponsor) -> None:
        record = SponsorForConference.objects.create(sponsor=sponsor, conference=conference)

        assert record.status == SponsorStatus.PROSPECT
        assert record.contract_status == ContractStatus.NONE
        assert record.invoice_status == InvoiceStatus.NOT_SENT
        assert record.contract_value is None
        assert record.tags == []
        assert str(record) == "Acme Corp (sponsorcon)"

    def test_one_record_per_conference(self, conference: Conference, sponsor: Sponsor) -> None:
        SponsorForConference.objects.create(sponsor=sponsor, conference=conference)
        with pytest.raises(IntegrityError):
            SponsorForConference.objects.create(sponsor=sponsor, conference=conference)

    def test_clean_rejects_tier_from_other_conference(self, sponsor: Sponsor, tier: SponsorTier) -> None:
        other = Conference.objects.create(
            name="Other",
            slug="other",
            start_date=date(2027, 9, 1),
            end_date=date(2027, 9, 2),
        )
        record = SponsorForConference(sponsor=sponsor, conference=other, tier=tier)

        with pytest.raises(ValidationError) as exc_info:
            record.clean()
        assert "tier" in exc_info.value.message_dict

    def test_clean_rejects_non_list_tags(self, conference: Conference, sponsor: Sponsor) -> None:
        record = SponsorForConference(sponsor=sponsor, conference=conference, tags="vip")

        with pytest.raises(ValidationError, match="list of strings"):
            record.clean()

    def test_tier_deletion_keeps_record(self, conference: Conference, sponsor: Sponsor, tier: SponsorTier) -> None:
        record = SponsorForConference.objects.create(sponsor=sponsor, conference=conference, tier=tier)
        tier.delete()

        record.refresh_from_db()
        assert record.tier is None


@pytest.mark.django_db
def test_email_template_slug_and_defaults() -> None:
    template = SponsorEmailTemplate.objects.create(title="Cold outreach (NO)", subject="Hei", body="...")

    assert template.slug == "cold-outreach-no"
    assert template.category == "custom"
    assert template.language == "no"
    assert str(template) == "Cold outreach (NO)"
