"""Tests for the ticket sales processor."""

from datetime import date
from decimal import Decimal

import pytest

from django_confdesk.tickets.processor import TicketSalesProcessor
from django_confdesk.tickets.targets import TargetCurve
from django_confdesk.tickets.types import EventTicket, Milestone, SalesTargetConfig


def _ticket(ticket_id, order_id, amount, order_date="2026-01-05T10:00:00Z", category="Regular"):
    return EventTicket(
        id=ticket_id,
        order_id=order_id,
        category=category,
        sum=Decimal(amount) if amount is not None else None,
        order_date=order_date,
    )


def _config(start=date(2026, 1, 1), curve=TargetCurve.LINEAR, milestones=()):
    return SalesTargetConfig(enabled=True, sales_start_date=start, target_curve=curve, milestones=tuple(milestones))


def _processor(tickets=(), **kwargs):
    defaults = {
        "config": _config(),
        "capacity": 100,
        "conference_date": date(2026, 1, 29),
        "today": date(2026, 1, 16),
    }
    defaults.update(kwargs)
    return TicketSalesProcessor(list(tickets), **defaults)


class TestInit:
    def test_rejects_non_positive_interval(self):
        with pytest.raises(ValueError, match="interval_days"):
            _processor(interval_days=0)


class TestDailySales:
    def test_groups_by_order_day_and_dedupes_revenue(self):
        tickets = [
            _ticket(1, 10, "2000", "2026-01-05T09:00:00Z", "Early Bird"),
            _ticket(2, 10, "2000", "2026-01-05T09:00:00Z", "Early Bird"),
            _ticket(3, 11, "1500", "2026-01-05T17:30:00Z", "Student"),
            _ticket(4, 12, "1000", "2026-01-07T08:00:00Z"),
        ]

        daily = _processor(tickets).calculate_daily_sales()

        first = daily[date(2026, 1, 5)]
        assert first.paid_tickets == 3
        assert first.order_count == 2
        assert first.total_revenue == Decimal(3500)
        assert first.category_breakdown == {"Early Bird": 2, "Student": 1}
        assert daily[date(2026, 1, 7)].paid_tickets == 1

    def test_skips_tickets_without_order_date(self):
        tickets = [_ticket(1, 10, "1000", ""), _ticket(2, 11, "1000", "not-a-date")]

        assert _processor(tickets).calculate_daily_sales() == {}


class TestCumulativeProgression:
    def test_accumulates_in_date_order(self):
        tickets = [
            _ticket(1, 10, "1000", "2026-01-09T10:00:00Z", "Regular"),
            _ticket(2, 11, "500", "2026-01-02T10:00:00Z", "Student"),
            _ticket(3, 12, "1000", "2026-01-02T11:00:00Z", "Regular"),
        ]
        processor = _processor(tickets)

        progression = processor.calculate_cumulative_progression(processor.calculate_daily_sales())

        assert [p.date for p in progression] == [date(2026, 1, 2), date(2026, 1, 9)]
        assert [p.total_paid_tickets for p in progression] == [2, 3]
        assert progression[-1].total_revenue == Decimal(2500)
        assert progression[-1].total_orders == 3
        assert progression[-1].category_breakdown == {"Student": 1, "Regular": 2}


class TestTargetProgression:
    def test_linear_weekly_points(self):
        targets = _processor().calculate_target_progression()

        assert [t.date for t in targets] == [
            date(2026, 1, 1),
            date(2026, 1, 8),
            date(2026, 1, 15),
            date(2026, 1, 22),
            date(2026, 1, 29),
        ]
        assert [t.target_tickets for t in targets] == [0, 25, 50, 75, 100]
        assert targets[-1].target_percentage == 100.0

    def test_appends_final_point_when_not_on_interval(self):
        targets = _processor(conference_date=date(2026, 1, 20)).calculate_target_progression()

        assert [t.date for t in targets][-2:] == [date(2026, 1, 15), date(2026, 1, 20)]
        assert targets[-1].target_tickets == 100
        assert targets[-1].target_percentage == 100.0

    def test_rounds_target_tickets_half_up(self):
        targets = _processor(capacity=10).calculate_target_progression()

        # 25% of 10 is 2.5 and 75% is 7.5
        assert [t.target_tickets for t in targets] == [0, 3, 5, 8, 10]

    def test_start_on_conference_day_is_complete(self):
        targets = _processor(config=_config(start=date(2026, 1, 29))).calculate_target_progression()

        assert len(targets) == 1
        assert targets[0].target_percentage == 100.0
        assert targets[0].target_tickets == 100

    def test_marks_milestones_on_matching_days(self):
        config = _config(milestones=[Milestone(date(2026, 1, 15), 50, "Program live")])

        targets = _processor(config=config).calculate_target_progression()

        marked = [t for t in targets if t.is_milestone]
        assert [(t.date, t.milestone_label) for t in marked] == [(date(2026, 1, 15), "Program live")]

    def test_custom_interval(self):
        targets = _processor(interval_days=14).calculate_target_progression()

        assert [t.date for t in targets] == [date(2026, 1, 1), date(2026, 1, 15), date(2026, 1, 29)]


class TestCombineSalesData:
    def test_pairs_targets_with_latest_actual(self):
        tickets = [_ticket(1, 10, "1000", "2026-01-10T10:00:00Z"), _ticket(2, 11, "1000", "2026-01-16T10:00:00Z")]
        processor = _processor(tickets)
        actuals = processor.calculate_cumulative_progression(processor.calculate_daily_sales())

        combined = processor.combine_sales_data(processor.calculate_target_progression(), actuals)

        assert [(c.date, c.actual_tickets) for c in combined] == [
            (date(2026, 1, 1), 0),
            (date(2026, 1, 8), 0),
            (date(2026, 1, 15), 1),
            (date(2026, 1, 22), 2),
            (date(2026, 1, 29), 2),
        ]
        assert combined[0].revenue == Decimal(0)
        assert combined[2].revenue == Decimal(1000)


class TestStatistics:
    def test_counts_revenue_once_per_order_and_adds_free_allocations(self):
        tickets = [
            _ticket(1, 10, "2000", category="Early Bird"),
            _ticket(2, 10, "2000", category="Early Bird"),
            _ticket(3, 11, "1500", category="Student"),
        ]

        statistics = _processor(
            tickets,
            speaker_count=4,
            sponsor_tiers=["Pod", "Ingress", "Community"],
        ).calculate_statistics()

        assert statistics.total_paid_tickets == 3
        assert statistics.total_revenue == Decimal(3500)
        assert statistics.total_orders == 2
        assert statistics.average_ticket_price == Decimal(3500) / 3
        assert statistics.category_breakdown == {"Early Bird": 2, "Student": 1}
        assert statistics.sponsor_tickets == 7
        assert statistics.speaker_tickets == 4
        assert statistics.total_capacity_used == 14

    def test_custom_tier_allocation(self):
        processor = _processor(sponsor_tiers=["Gold", "Gold"], tier_allocation={"Gold": 4})

        assert processor.calculate_sponsor_tickets() == 8

    def test_empty(self):
        statistics = _processor().calculate_statistics()

        assert statistics.total_revenue == Decimal(0)
        assert statistics.average_ticket_price == Decimal(0)


class TestPerformance:
    def _run(self, paid, **kwargs):
        tickets = [_ticket(i, i, "1000") for i in range(paid)]
        return _processor(tickets, **kwargs).process().performance

    def test_behind_target(self):
        performance = self._run(40)

        assert performance.current_percentage == 40.0
        assert performance.target_percentage == 50.0
        assert performance.variance == -10.0
        assert performance.is_on_track is False

    def test_within_tolerance_is_on_track(self):
        performance = self._run(46)

        assert performance.variance == pytest.approx(-4.0)
        assert performance.is_on_track is True

    def test_custom_tolerance(self):
        assert self._run(46, on_track_tolerance=2.0).is_on_track is False

    def test_before_sales_start_target_is_zero(self):
        performance = self._run(1, today=date(2025, 12, 20))

        assert performance.target_percentage == 0.0
        assert performance.is_on_track is True

    def test_zero_capacity(self):
        performance = self._run(5, capacity=0)

        assert performance.current_percentage == 0.0

    def test_next_milestone(self):
        config = _config(
            milestones=[
                Milestone(date(2026, 1, 8), 25, "Early bird ends"),
                Milestone(date(2026, 1, 22), 75, "Speakers announced"),
            ]
        )

        milestone = self._run(10, config=config).next_milestone

        assert milestone is not None
        assert milestone.label == "Speakers announced"
        assert milestone.date == date(2026, 1, 22)
        assert milestone.days_away == 6

    def test_no_upcoming_milestone(self):
        assert self._run(10).next_milestone is None


class TestProcess:
    def test_result_serialises_to_json_types(self):
        tickets = [_ticket(1, 10, "1250.50", "2026-01-03T12:00:00Z")]

        result = _processor(tickets).process()
        data = result.as_dict()

        assert result.capacity == 100
        assert data["capacity"] == 100
        assert data["statistics"]["total_revenue"] == 1250.5
        assert data["progression"][0]["date"] == "2026-01-01"
        assert data["progression"][1]["actual_tickets"] == 1
        assert data["performance"]["next_milestone"] is None
