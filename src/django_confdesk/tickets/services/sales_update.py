"""Periodic ticket sales update.

Collects ticket sales from Checkin, free ticket allocations, the sponsor
pipeline and the CFP summary for one conference, runs the target analysis
when a sales target is configured, and posts the result to Slack.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import TYPE_CHECKING, Any

from django.db import DatabaseError
from django.utils import timezone

from django_confdesk.notifications.sales_update import SalesUpdateData, send_sales_update_to_slack
from django_confdesk.proposals.services import (
    ProposalSummary,
    get_confirmed_speaker_count,
    get_organizer_count,
    summarize_proposals,
)
from django_confdesk.settings import get_config
from django_confdesk.sponsors.pipeline import (
    SponsorPipelineData,
    aggregate_sponsor_pipeline,
    get_sponsor_tier_titles,
    list_sponsors_for_conference,
)
from django_confdesk.tickets.checkin import CheckinClient
from django_confdesk.tickets.processor import TicketSalesProcessor
from django_confdesk.tickets.types import TicketAnalysisResult, TicketStatistics
from django_confdesk.tickets.utils import calculate_ticket_statistics, split_paid_and_free

if TYPE_CHECKING:
    from django_confdesk.conference.models import Conference
    from django_confdesk.tickets.types import EventTicket

logger = logging.getLogger(__name__)


class SalesUpdateError(Exception):
    """Raised when a sales update cannot be produced."""


class SalesUpdateConfigurationError(SalesUpdateError):
    """Raised when a conference is not set up for ticket sales tracking."""


@dataclass(frozen=True, slots=True)
class SalesUpdateResult:
    """Outcome of one sales update run.

    ``skipped`` is set when the conference has already ended; all other
    fields are then left at their defaults.
    """

    conference: str
    last_updated: datetime
    skipped: bool = False
    statistics: TicketStatistics | None = None
    analysis: TicketAnalysisResult | None = None
    sponsor_pipeline: SponsorPipelineData | None = None
    proposal_summary: ProposalSummary | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return the JSON payload reported by the cron endpoint."""
        if self.skipped or self.statistics is None:
            return {
                "success": True,
                "message": "Conference has ended. Sales updates are no longer sent.",
                "conference": self.conference,
            }

        statistics = self.statistics
        target_analysis = None
        if self.analysis is not None:
            performance = self.analysis.performance
            milestone = performance.next_milestone
            target_analysis = {
                "enabled": True,
                "capacity": self.analysis.capacity,
                "current_target_percentage": performance.target_percentage,
                "actual_percentage": performance.current_percentage,
                "variance": performance.variance,
                "is_on_track": performance.is_on_track,
                "next_milestone": (
                    {
                        "date": milestone.date.isoformat(),
                        "label": milestone.label,
                        "days_away": milestone.days_away,
                    }
                    if milestone
                    else None
                ),
            }

        return {
            "success": True,
            "data": {
                "conference": self.conference,
                "paid_tickets": statistics.total_paid_tickets,
                "sponsor_tickets": statistics.sponsor_tickets,
                "speaker_tickets": statistics.speaker_tickets,
                "total_tickets": statistics.total_capacity_used,
                "total_revenue": float(statistics.total_revenue),
                "categories": dict(statistics.category_breakdown),
                "target_analysis": target_analysis,
                "sponsor_pipeline": self.sponsor_pipeline.as_dict() if self.sponsor_pipeline else None,
                "proposal_summary": self.proposal_summary.as_dict() if self.proposal_summary else None,
                "last_updated": self.last_updated.isoformat(),
            },
        }


class SalesUpdateService:
    """Build and send the sales update for a conference.

    Args:
        conference: The conference to report on.
        client: Checkin client to fetch tickets with. Built from settings
            and the conference's own secret when omitted.
        today: Reference date for "conference is over" and target
            performance. Defaults to the current local date.

    Example::

        result = SalesUpdateService(conference).run()
        result.as_dict()
    """

    def __init__(
        self,
        conference: "Conference",
        client: CheckinClient | None = None,
        today: date | None = None,
    ) -> None:
        """Initialize the service for a conference."""
        self.conference = conference
        self.client = client
        self.today = today or timezone.localdate()
        self.config = get_config()

    def run(self, force_slack: bool = False) -> SalesUpdateResult:
        """Collect sales data and post the update to Slack.

        Args:
            force_slack: Post to Slack even in development mode.

        Returns:
            The collected data, or a skipped result if the conference is over.

        Raises:
            SalesUpdateConfigurationError: If Checkin is not configured for
                the conference.
            SalesUpdateError: If tickets cannot be fetched.
            RuntimeError: If Slack rejects the message.
        """
        conference = self.conference
        now = timezone.now()

        if conference.is_over(self.today):
            logger.info("Conference %s has ended. Skipping sales update.", conference.name)
            return SalesUpdateResult(conference=conference.name, last_updated=now, skipped=True)

        tickets = self._fetch_tickets()
        paid, free = split_paid_and_free(tickets)

        organizer_count = get_organizer_count()
        speaker_count = get_confirmed_speaker_count(conference)

        analysis = self._analyse(paid, speaker_count)
        statistics = analysis.statistics if analysis is not None else self._fallback_statistics(paid)

        proposal_summary = self._proposal_summary()
        sponsor_pipeline = self._sponsor_pipeline()

        send_sales_update_to_slack(
            SalesUpdateData(
                conference=conference,
                tickets_by_category=dict(statistics.category_breakdown),
                paid_tickets=statistics.total_paid_tickets,
                sponsor_tickets=statistics.sponsor_tickets,
                speaker_tickets=statistics.speaker_tickets,
                organizer_tickets=organizer_count,
                free_tickets_claimed=len(free),
                total_tickets=statistics.total_capacity_used,
                total_revenue=statistics.total_revenue,
                last_updated=now,
                currency=self.config.currency,
                target_analysis=analysis,
                sponsor_pipeline=sponsor_pipeline,
                proposal_summary=proposal_summary,
            ),
            force_slack=force_slack,
        )
        logger.info(
            "Sent sales update for %s: %d paid tickets, %s revenue",
            conference.slug,
            statistics.total_paid_tickets,
            statistics.total_revenue,
        )

        return SalesUpdateResult(
            conference=conference.name,
            last_updated=now,
            statistics=statistics,
            analysis=analysis,
            sponsor_pipeline=sponsor_pipeline,
            proposal_summary=proposal_summary,
        )

    # ------------------------------------------------------------------
    # Data collection
    # ------------------------------------------------------------------

    def _fetch_tickets(self) -> list["EventTicket"]:
        conference = self.conference
        if not conference.has_checkin_config:
            msg = f"Conference '{conference.slug}' is not configured for ticket sales tracking"
            raise SalesUpdateConfigurationError(msg)

        client = self.client
        if client is None:
            try:
                client = CheckinClient.for_conference(conference)
            except ValueError as exc:
                raise SalesUpdateConfigurationError(str(exc)) from exc

        try:
            return client.fetch_event_tickets(conference.checkin_customer_id, conference.checkin_event_id)
        except RuntimeError as exc:
            msg = f"Failed to fetch tickets from Checkin API: {exc}"
            raise SalesUpdateError(msg) from exc

    def _analyse(self, paid: list["EventTicket"], speaker_count: int) -> TicketAnalysisResult | None:
        """Run the target analysis, or return ``None`` when it does not apply."""
        conference = self.conference
        sales_target = getattr(conference, "sales_target", None)
        if sales_target is None or not sales_target.is_configured or not conference.ticket_capacity or not paid:
            return None

        sales_update = self.config.sales_update
        try:
            return TicketSalesProcessor(
                paid,
                sales_target.to_config(),
                capacity=conference.ticket_capacity,
                conference_date=conference.start_date,
                speaker_count=speaker_count,
                sponsor_tiers=get_sponsor_tier_titles(conference),
                tier_allocation=sales_update.sponsor_tier_ticket_allocation,
                today=self.today,
                interval_days=sales_update.target_interval_days,
                on_track_tolerance=sales_update.on_track_tolerance,
            ).process()
        except (ValueError, ArithmeticError) as exc:
            logger.warning("Target analysis calculation failed for %s: %s", conference.slug, exc)
            return None

    @staticmethod
    def _fallback_statistics(paid: list["EventTicket"]) -> TicketStatistics:
        basic = calculate_ticket_statistics(paid)
        return TicketStatistics(
            total_paid_tickets=basic.total_paid_tickets,
            total_revenue=basic.total_revenue,
            total_orders=basic.total_orders,
            average_ticket_price=basic.average_ticket_price,
            category_breakdown={},
            sponsor_tickets=0,
            speaker_tickets=0,
            total_capacity_used=len(paid),
        )

    def _proposal_summary(self) -> ProposalSummary | None:
        try:
            return summarize_proposals(self.conference)
        except DatabaseError as exc:
            logger.warning("Proposal summary fetch failed for %s: %s", self.conference.slug, exc)
            return None

    def _sponsor_pipeline(self) -> SponsorPipelineData | None:
        try:
            records = list(list_sponsors_for_conference(self.conference))
        except DatabaseError as exc:
            logger.warning("Sponsor pipeline data fetch failed for %s: %s", self.conference.slug, exc)
            return None
        if not records:
            return None
        return aggregate_sponsor_pipeline(records)
