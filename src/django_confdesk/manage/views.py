"""Organizer dashboard widget endpoints.

Every view is scoped to a conference via the ``conference_slug`` URL kwarg
and returns JSON for a single dashboard widget. Access requires a logged-in
superuser or a user with the ``confdesk_conference.change_conference``
permission.
"""

import logging
from typing import TYPE_CHECKING

from django.contrib.auth.mixins import LoginRequiredMixin
from django.core.exceptions import PermissionDenied
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.shortcuts import get_object_or_404
from django.views import View

from django_confdesk.conference.models import Conference
from django_confdesk.features import FeatureRequiredMixin
from django_confdesk.proposals.services import get_confirmed_speaker_count, get_organizer_count, summarize_proposals
from django_confdesk.settings import get_config
from django_confdesk.sponsors.pipeline import (
    aggregate_sponsor_pipeline,
    get_sponsor_tier_titles,
    list_sponsors_for_conference,
)
from django_confdesk.tickets.checkin import CheckinClient
from django_confdesk.tickets.processor import TicketSalesProcessor
from django_confdesk.tickets.targets import (
    TargetCurve,
    generate_curve_data,
    generate_curve_svg_path,
    get_curve_metadata,
)
from django_confdesk.tickets.utils import (
    calculate_capacity_percentage,
    calculate_category_stats,
    calculate_free_ticket_allocation,
    calculate_free_ticket_claim_rate,
    calculate_ticket_statistics,
    split_paid_and_free,
)

if TYPE_CHECKING:
    from django_confdesk.tickets.types import EventTicket

logger = logging.getLogger(__name__)

_CURVE_SAMPLE_POINTS = 20


class ManagePermissionMixin(LoginRequiredMixin):
    """Permission mixin for conference-scoped management views.

    Resolves the conference from the ``conference_slug`` URL kwarg and
    checks that the authenticated user is a superuser or holds the
    ``confdesk_conference.change_conference`` permission.  Stores the
    resolved conference on ``self.conference``.

    Raises:
        PermissionDenied: If the user lacks the required permission.
    """

    conference: Conference
    kwargs: dict[str, str]

    def dispatch(self, request: HttpRequest, *args: str, **kwargs: str) -> HttpResponse:
        """Resolve the conference and enforce permissions before dispatch.

        Unauthenticated users are handed to ``LoginRequiredMixin`` before
        the conference is looked up.

        Args:
            request: The incoming HTTP request.
            *args: Positional arguments from the URL resolver.
            **kwargs: Keyword arguments from the URL pattern.

        Returns:
            The HTTP response from the downstream view.

        Raises:
            PermissionDenied: If the user is not authorized.
        """
        if not request.user.is_authenticated:
            return self.handle_no_permission()  # type: ignore[return-value]

        self.conference = get_object_or_404(Conference, slug=kwargs.get("conference_slug", ""))

        if not (request.user.is_superuser or request.user.has_perm("confdesk_conference.change_conference")):
            raise PermissionDenied

        return super().dispatch(request, *args, **kwargs)  # type: ignore[misc]


class TicketSalesView(ManagePermissionMixin, FeatureRequiredMixin, View):
    """Ticket sales widget: statistics, target performance and categories.

    Tickets are fetched live from Checkin. The target analysis is included
    only when the conference has an enabled sales target, a ticket capacity
    and at least one paid ticket.
    """

    required_feature = ("tickets", "manage_ui")

    def get(self, _request: HttpRequest, **_kwargs: str) -> JsonResponse:
        """Return ticket sales data for the conference.

        Returns:
            A JSON response with the sales data, a 400 payload when Checkin
            is not configured, or a 502 payload when Checkin fails.
        """
        conference = self.conference
        if not conference.has_checkin_config:
            return JsonResponse({"error": "Conference not configured for ticket sales tracking"}, status=400)

        try:
            client = CheckinClient.for_conference(conference)
            tickets = client.fetch_event_tickets(conference.checkin_customer_id, conference.checkin_event_id)
        except ValueError as exc:
            return JsonResponse({"error": str(exc)}, status=400)
        except RuntimeError as exc:
            logger.warning("Failed to fetch tickets for %s: %s", conference.slug, exc)
            return JsonResponse({"error": "Failed to fetch tickets from Checkin API", "details": str(exc)}, status=502)

        return JsonResponse(self._build_payload(tickets))

    def _build_payload(self, tickets: list["EventTicket"]) -> dict[str, object]:
        conference = self.conference
        allocation_config = get_config().sales_update
        paid, free = split_paid_and_free(tickets)
        sponsor_tiers = get_sponsor_tier_titles(conference)
        speaker_count = get_confirmed_speaker_count(conference)

        basic = calculate_ticket_statistics(paid)
        allocation = calculate_free_ticket_allocation(
            sponsor_tiers,
            allocation_config.sponsor_tier_ticket_allocation,
            speaker_count=speaker_count,
            organizer_count=get_organizer_count(),
            free_tickets=free,
        )

        analysis = None
        sales_target = getattr(conference, "sales_target", None)
        if sales_target is not None and sales_target.is_configured and conference.ticket_capacity and paid:
            analysis = TicketSalesProcessor(
                paid,
                sales_target.to_config(),
                capacity=conference.ticket_capacity,
                conference_date=conference.start_date,
                speaker_count=speaker_count,
                sponsor_tiers=sponsor_tiers,
                tier_allocation=allocation_config.sponsor_tier_ticket_allocation,
                interval_days=allocation_config.target_interval_days,
                on_track_tolerance=allocation_config.on_track_tolerance,
            ).process()

        return {
            "conference": conference.slug,
            "statistics": {
                "total_paid_tickets": basic.total_paid_tickets,
                "total_revenue": float(basic.total_revenue),
                "total_orders": basic.total_orders,
                "average_ticket_price": float(basic.average_ticket_price),
            },
            "free_tickets": {
                "sponsor_tickets": allocation.sponsor_tickets,
                "speaker_tickets": allocation.speaker_tickets,
                "organizer_tickets": allocation.organizer_tickets,
                "total_allocated": allocation.total_allocated,
                "total_claimed": allocation.total_claimed,
                "claim_rate": calculate_free_ticket_claim_rate(allocation.total_claimed, allocation.total_allocated),
            },
            "capacity": conference.ticket_capacity,
            "capacity_percentage": calculate_capacity_percentage(basic.total_paid_tickets, conference.ticket_capacity),
            "categories": [
                {
                    "category": stats.category,
                    "count": stats.count,
                    "revenue": float(stats.revenue),
                    "orders": stats.orders,
                    "percentage": stats.percentage,
                }
                for stats in calculate_category_stats(paid, basic.total_paid_tickets)
            ],
            "analysis": analysis.as_dict() if analysis is not None else None,
        }


class SponsorPipelineView(ManagePermissionMixin, FeatureRequiredMixin, View):
    """Sponsor pipeline widget."""

    required_feature = ("sponsors", "manage_ui")

    def get(self, _request: HttpRequest, **_kwargs: str) -> JsonResponse:
        """Return the aggregated sponsor CRM pipeline."""
        pipeline = aggregate_sponsor_pipeline(list_sponsors_for_conference(self.conference))
        return JsonResponse(pipeline.as_dict())


class ProposalSummaryView(ManagePermissionMixin, FeatureRequiredMixin, View):
    """CFP summary widget."""

    required_feature = ("proposals", "manage_ui")

    def get(self, _request: HttpRequest, **_kwargs: str) -> JsonResponse:
        """Return proposal counts by status."""
        summary = summarize_proposals(self.conference)
        return JsonResponse(summary.as_dict())


class TargetCurvesView(ManagePermissionMixin, FeatureRequiredMixin, View):
    """Target curve picker data: metadata, sample points and SVG previews."""

    required_feature = ("tickets", "manage_ui")

    def get(self, _request: HttpRequest, **_kwargs: str) -> JsonResponse:
        """Return every available target curve with a preview."""
        sales_target = getattr(self.conference, "sales_target", None)
        curves = []
        for curve in TargetCurve.values:
            metadata = get_curve_metadata(curve)
            curves.append(
                {
                    "value": curve,
                    "name": metadata.name,
                    "description": metadata.description,
                    "icon": metadata.icon,
                    "points": [
                        {"x": point.x, "y": point.y} for point in generate_curve_data(curve, _CURVE_SAMPLE_POINTS)
                    ],
                    "svg_path": generate_curve_svg_path(curve),
                }
            )
        return JsonResponse(
            {
                "selected": sales_target.target_curve if sales_target is not None else None,
                "curves": curves,
            }
        )
