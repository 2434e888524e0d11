import datetime

import pytest
from django.core.exceptions import ValidationError

from django_confdesk.conference.models import Conference
from django_confdesk.tickets.models import SalesMilestone, SalesTarget
from django_confdesk.tickets.types import Milestone


@pytest.fixture
def conference(db):
    return Conference.objects.create(
        name="Cloud Native Day",
        slug="cnd-2026",
        start_date=datetime.date(2026, 10, 27),
        end_date=datetime.date(2026, 10, 28),
        ticket_capacity=400,
    )


@pytest.mark.django_db
class TestSalesTarget:
    def test_str(self, conference):
        target = SalesTarget.objects.create(conference=conference)
        assert str(target) == "Sales target (cnd-2026)"

    def test_defaults(self, conference):
        target = SalesTarget.objects.create(conference=conference)

        assert target.enabled is False
        assert target.target_curve == "linear"
        assert target.is_configured is False

    def test_is_configured_needs_enabled_and_start_date(self, conference):
        target = SalesTarget(conference=conference, enabled=True)
        assert target.is_configured is False

        target.sales_start_date = datetime.date(2026, 3, 1)
        assert target.is_configured is True

    def test_clean_rejects_start_after_conference(self, conference):
        target = SalesTarget(conference=conference, sales_start_date=datetime.date(2026, 11, 1))

        with pytest.raises(ValidationError) as exc_info:
            target.clean()
        assert "sales_start_date" in exc_info.value.message_dict

    def test_clean_accepts_start_on_conference_day(self, conference):
        SalesTarget(conference=conference, sales_start_date=datetime.date(2026, 10, 27)).clean()

    def test_to_config_includes_milestones_in_date_order(self, conference):
        target = SalesTarget.objects.create(
            conference=conference,
            enabled=True,
            sales_start_date=datetime.date(2026, 3, 1),
            target_curve="early_push",
        )
        SalesMilestone.objects.create(
            sales_target=target, date=datetime.date(2026, 8, 1), target_percentage=70, label="Schedule"
        )
        SalesMilestone.objects.create(
            sales_target=target, date=datetime.date(2026, 5, 1), target_percentage=30, label="Early bird"
        )

        config = target.to_config()

        assert config.enabled is True
        assert config.sales_start_date == datetime.date(2026, 3, 1)
        assert config.target_curve == "early_push"
        assert config.milestones == (
            Milestone(datetime.date(2026, 5, 1), 30.0, "Early bird"),
            Milestone(datetime.date(2026, 8, 1), 70.0, "Schedule"),
        )

    def test_to_config_requires_start_date(self, conference):
        target = SalesTarget.objects.create(conference=conference, enabled=True)

        with pytest.raises(ValueError, match="no sales start date"):
            target.to_config()

    def test_deleted_with_conference(self, conference):
        SalesTarget.objects.create(conference=conference)
        conference.delete()

        assert not SalesTarget.objects.exists()


@pytest.mark.django_db
def test_milestone_percentage_is_validated(conference):
    target = SalesTarget.objects.create(conference=conference)
    milestone = SalesMilestone(sales_target=target, date=datetime.date(2026, 5, 1), target_percentage=120, label="x")

    with pytest.raises(ValidationError):
        milestone.full_clean()

    assert str(SalesMilestone(date=datetime.date(2026, 5, 1), label="Early bird")) == "Early bird (2026-05-01)"
