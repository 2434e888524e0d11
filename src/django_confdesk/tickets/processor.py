"""Ticket sales analysis against a configured target curve."""

import logging
import math
from collections import defaultdict
from collections.abc import Iterable, Mapping
from datetime import date, timedelta
from decimal import Decimal

from django.utils import timezone

from django_confdesk.settings import DEFAULT_SPONSOR_TIER_TICKET_ALLOCATION
from django_confdesk.tickets.targets import calculate_curve_value
from django_confdesk.tickets.types import (
    CombinedDataPoint,
    CumulativeSales,
    DailySales,
    EventTicket,
    NextMilestone,
    PerformanceMetrics,
    SalesTargetConfig,
    TargetPoint,
    TicketAnalysisResult,
    TicketStatistics,
)

logger = logging.getLogger(__name__)

SPONSOR_TIER_TICKET_ALLOCATION: Mapping[str, int] = DEFAULT_SPONSOR_TIER_TICKET_ALLOCATION


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


class TicketSalesProcessor:
    """Compute sales statistics, progression and target performance.

    Tickets are expected to be paid tickets only. The ``sum`` on each ticket
    is the total of its order, so revenue is counted once per ``order_id``.

    Args:
        tickets: Paid tickets to analyse.
        config: Sales target configuration (start date, curve, milestones).
        capacity: Total ticket capacity of the conference.
        conference_date: Conference start date; the target reaches 100% here.
        speaker_count: Number of confirmed speakers holding free tickets.
        sponsor_tiers: Tier titles of the conference's sponsors, one entry
            per sponsor.
        tier_allocation: Free tickets per sponsor tier title. Defaults to
            :data:`SPONSOR_TIER_TICKET_ALLOCATION`.
        today: Reference date for performance metrics. Defaults to the
            current local date.
        interval_days: Spacing between target points.
        on_track_tolerance: Percentage points below target that still count
            as on track.

    Example::

        result = TicketSalesProcessor(
            tickets,
            config,
            capacity=250,
            conference_date=date(2026, 10, 27),
            speaker_count=12,
        ).process()
        result.performance.is_on_track
    """

    def __init__(  # noqa: PLR0913
        self,
        tickets: Iterable[EventTicket],
        config: SalesTargetConfig,
        capacity: int,
        conference_date: date,
        speaker_count: int = 0,
        sponsor_tiers: Iterable[str] = (),
        tier_allocation: Mapping[str, int] | None = None,
        today: date | None = None,
        interval_days: int = 7,
        on_track_tolerance: float = 5.0,
    ) -> None:
        """Initialize the processor.

        Raises:
            ValueError: If ``interval_days`` is not positive.
        """
        if interval_days <= 0:
            msg = "interval_days must be a positive integer"
            raise ValueError(msg)
        self.tickets = list(tickets)
        self.config = config
        self.capacity = capacity
        self.conference_date = conference_date
        self.speaker_count = speaker_count
        self.sponsor_tiers = list(sponsor_tiers)
        self.tier_allocation = tier_allocation if tier_allocation is not None else SPONSOR_TIER_TICKET_ALLOCATION
        self.today = today or timezone.localdate()
        self.interval_days = interval_days
        self.on_track_tolerance = on_track_tolerance

    def process(self) -> TicketAnalysisResult:
        """Run the full analysis.

        Returns:
            Statistics, the combined actual-vs-target progression, and
            performance metrics relative to ``today``.
        """
        daily_sales = self.calculate_daily_sales()
        cumulative = self.calculate_cumulative_progression(daily_sales)
        targets = self.calculate_target_progression()
        statistics = self.calculate_statistics()
        performance = self.calculate_performance(targets, statistics)

        logger.debug(
            "Analysed %d tickets over %d sales days against %d target points",
            len(self.tickets),
            len(daily_sales),
            len(targets),
        )
        return TicketAnalysisResult(
            statistics=statistics,
            progression=self.combine_sales_data(targets, cumulative),
            performance=performance,
            capacity=self.capacity,
        )

    # ------------------------------------------------------------------
    # Actual sales
    # ------------------------------------------------------------------

    def calculate_daily_sales(self) -> dict[date, DailySales]:
        """Group tickets by order day.

        Tickets without an order date cannot be placed on the timeline and
        are left out of the progression (they still count in statistics).
        """
        grouped: dict[date, list[EventTicket]] = defaultdict(list)
        for ticket in self.tickets:
            day = ticket.order_day
            if day is not None:
                grouped[day].append(ticket)

        daily_sales: dict[date, DailySales] = {}
        for day, tickets in grouped.items():
            categories: dict[str, int] = defaultdict(int)
            seen_orders: set[int] = set()
            revenue = Decimal(0)
            for ticket in tickets:
                categories[ticket.category] += 1
                if ticket.order_id not in seen_orders:
                    revenue += ticket.sum or Decimal(0)
                    seen_orders.add(ticket.order_id)
            daily_sales[day] = DailySales(
                date=day,
                paid_tickets=len(tickets),
                total_revenue=revenue,
                category_breakdown=dict(categories),
                order_count=len(seen_orders),
            )
        return daily_sales

    def calculate_cumulative_progression(self, daily_sales: Mapping[date, DailySales]) -> list[CumulativeSales]:
        """Accumulate daily sales in date order."""
        progression: list[CumulativeSales] = []
        tickets = 0
        revenue = Decimal(0)
        orders = 0
        categories: dict[str, int] = defaultdict(int)

        for day in sorted(daily_sales):
            daily = daily_sales[day]
            tickets += daily.paid_tickets
            revenue += daily.total_revenue
            orders += daily.order_count
            for category, count in daily.category_breakdown.items():
                categories[category] += count

            progression.append(
                CumulativeSales(
                    date=day,
                    total_paid_tickets=tickets,
                    total_revenue=revenue,
                    category_breakdown=dict(categories),
                    total_orders=orders,
                )
            )
        return progression

    # ------------------------------------------------------------------
    # Targets
    # ------------------------------------------------------------------

    def _milestone_label(self, day: date) -> str | None:
        for milestone in self.config.milestones:
            if milestone.date == day:
                return milestone.label
        return None

    def _target_point(self, day: date, target_tickets: int, target_percentage: float) -> TargetPoint:
        label = self._milestone_label(day)
        return TargetPoint(
            date=day,
            target_tickets=target_tickets,
            target_percentage=target_percentage,
            is_milestone=label is not None,
            milestone_label=label,
        )

    def calculate_target_progression(self) -> list[TargetPoint]:
        """Generate target points from the sales start to the conference date.

        Points are spaced ``interval_days`` apart. A final point at 100% of
        capacity is always present on the conference date.
        """
        start = self.config.sales_start_date
        end = self.conference_date
        total_days = (end - start).days

        targets: list[TargetPoint] = []
        current = start
        while current <= end:
            elapsed = (current - start).days
            progress = min(elapsed / total_days, 1.0) if total_days > 0 else 1.0
            percentage = calculate_curve_value(progress, self.config.target_curve) * 100
            tickets = _round_half_up(percentage / 100 * self.capacity)
            targets.append(self._target_point(current, tickets, percentage))
            current += timedelta(days=self.interval_days)

        if not targets or targets[-1].date != end:
            targets.append(self._target_point(end, self.capacity, 100.0))
        return targets

    def combine_sales_data(
        self,
        targets: list[TargetPoint],
        actuals: list[CumulativeSales],
    ) -> list[CombinedDataPoint]:
        """Pair each target point with the latest actual on or before its date."""
        combined: list[CombinedDataPoint] = []
        for target in targets:
            latest: CumulativeSales | None = None
            for actual in actuals:
                if actual.date > target.date:
                    break
                latest = actual

            combined.append(
                CombinedDataPoint(
                    date=target.date,
                    actual_tickets=latest.total_paid_tickets if latest else 0,
                    target_tickets=target.target_tickets,
                    revenue=latest.total_revenue if latest else Decimal(0),
                    category_breakdown=dict(latest.category_breakdown) if latest else {},
                    is_milestone=target.is_milestone,
                    milestone_label=target.milestone_label,
                )
            )
        return combined

    # ------------------------------------------------------------------
    # Statistics and performance
    # ------------------------------------------------------------------

    def calculate_sponsor_tickets(self) -> int:
        """Sum the free ticket allocation of every sponsor's tier."""
        return sum(self.tier_allocation.get(tier, 0) for tier in self.sponsor_tiers)

    def calculate_statistics(self) -> TicketStatistics:
        """Aggregate totals over all paid tickets."""
        categories: dict[str, int] = defaultdict(int)
        seen_orders: set[int] = set()
        revenue = Decimal(0)
        for ticket in self.tickets:
            categories[ticket.category] += 1
            if ticket.order_id not in seen_orders:
                revenue += ticket.sum or Decimal(0)
                seen_orders.add(ticket.order_id)

        paid = len(self.tickets)
        sponsor_tickets = self.calculate_sponsor_tickets()
        average = revenue / paid if paid else Decimal(0)

        return TicketStatistics(
            total_paid_tickets=paid,
            total_revenue=revenue,
            total_orders=len(seen_orders),
            average_ticket_price=average,
            category_breakdown=dict(categories),
            sponsor_tickets=sponsor_tickets,
            speaker_tickets=self.speaker_count,
            total_capacity_used=paid + sponsor_tickets + self.speaker_count,
        )

    def calculate_performance(self, targets: list[TargetPoint], statistics: TicketStatistics) -> PerformanceMetrics:
        """Compare current sales to the target in effect today."""
        if self.capacity > 0:
            current_percentage = statistics.total_paid_tickets / self.capacity * 100
        else:
            current_percentage = 0.0

        current_target = next((t for t in reversed(targets) if t.date <= self.today), None)
        target_percentage = current_target.target_percentage if current_target else 0.0
        variance = current_percentage - target_percentage

        upcoming = sorted(
            (t for t in targets if t.is_milestone and t.date > self.today),
            key=lambda t: t.date,
        )
        next_milestone = None
        if upcoming:
            milestone = upcoming[0]
            next_milestone = NextMilestone(
                date=milestone.date,
                label=milestone.milestone_label or "",
                days_away=(milestone.date - self.today).days,
            )

        return PerformanceMetrics(
            current_percentage=current_percentage,
            target_percentage=target_percentage,
            variance=variance,
            is_on_track=variance >= -self.on_track_tolerance,
            next_milestone=next_milestone,
        )
