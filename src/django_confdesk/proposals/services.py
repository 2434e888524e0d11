"""Proposal and speaker queries used by dashboards and the sales update."""

from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING

from django.db.models import Count

from django_confdesk.proposals.models import Proposal, ProposalStatus, Speaker

if TYPE_CHECKING:
    from django_confdesk.conference.models import Conference


@dataclass(frozen=True, slots=True)
class ProposalSummary:
    """Proposal counts for a conference.

    ``total`` covers every proposal that has been submitted at some point;
    drafts and deleted proposals are not counted.
    """

    submitted: int
    accepted: int
    confirmed: int
    rejected: int
    withdrawn: int
    waitlisted: int
    total: int

    def as_dict(self) -> dict[str, int]:
        return asdict(self)


_COUNTED_STATUSES = (
    ProposalStatus.SUBMITTED,
    ProposalStatus.ACCEPTED,
    ProposalStatus.CONFIRMED,
    ProposalStatus.REJECTED,
    ProposalStatus.WITHDRAWN,
    ProposalStatus.WAITLISTED,
)


def summarize_proposals(conference: "Conference") -> ProposalSummary:
    """Count a conference's proposals by status."""
    rows = (
        Proposal.objects.filter(conference=conference, status__in=_COUNTED_STATUSES)
        .values("status")
        .annotate(count=Count("id"))
    )
    counts = dict.fromkeys(_COUNTED_STATUSES, 0)
    for row in rows:
        counts[row["status"]] = row["count"]

    return ProposalSummary(
        submitted=counts[ProposalStatus.SUBMITTED],
        accepted=counts[ProposalStatus.ACCEPTED],
        confirmed=counts[ProposalStatus.CONFIRMED],
        rejected=counts[ProposalStatus.REJECTED],
        withdrawn=counts[ProposalStatus.WITHDRAWN],
        waitlisted=counts[ProposalStatus.WAITLISTED],
        total=sum(counts.values()),
    )


def get_confirmed_speaker_count(conference: "Conference") -> int:
    """Number of distinct speakers with at least one confirmed proposal."""
    return (
        Speaker.objects.filter(
            proposals__conference=conference,
            proposals__status=ProposalStatus.CONFIRMED,
        )
        .distinct()
        .count()
    )


def get_organizer_count() -> int:
    """Number of speakers flagged as organizers."""
    return Speaker.objects.filter(is_organizer=True).count()
