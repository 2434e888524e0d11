"""Sponsor CRM pipeline aggregation."""

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING

from django_confdesk.sponsors.models import (
    ACTIVE_STATUSES,
    ContractStatus,
    InvoiceStatus,
    SponsorForConference,
    SponsorStatus,
)

if TYPE_CHECKING:
    from django.db.models import QuerySet

    from django_confdesk.conference.models import Conference

DEFAULT_CONTRACT_CURRENCY = "NOK"


@dataclass(frozen=True, slots=True)
class SponsorPipelineData:
    """Tallies of a conference's sponsor CRM records.

    The ``by_*`` mappings contain every known status value, including those
    with a zero count.
    """

    by_status: dict[str, int]
    by_contract_status: dict[str, int]
    by_invoice_status: dict[str, int]
    total_contract_value: Decimal
    contract_currency: str
    total_sponsors: int
    closed_won_count: int
    closed_lost_count: int
    active_deals: int

    @property
    def win_rate(self) -> float:
        """Percentage of closed deals that were won."""
        closed = self.closed_won_count + self.closed_lost_count
        if closed == 0:
            return 0.0
        return self.closed_won_count / closed * 100

    def as_dict(self) -> dict[str, object]:
        """Return a JSON-serialisable representation."""
        return {
            "by_status": dict(self.by_status),
            "by_contract_status": dict(self.by_contract_status),
            "by_invoice_status": dict(self.by_invoice_status),
            "total_contract_value": float(self.total_contract_value),
            "contract_currency": self.contract_currency,
            "total_sponsors": self.total_sponsors,
            "closed_won_count": self.closed_won_count,
            "closed_lost_count": self.closed_lost_count,
            "active_deals": self.active_deals,
            "win_rate": self.win_rate,
        }


def aggregate_sponsor_pipeline(records: Iterable[SponsorForConference]) -> SponsorPipelineData:
    """Tally sponsor CRM records by pipeline, contract, and invoice status.

    Contract value is summed over closed-won records with a positive value.
    The currency is taken from the first record, falling back to NOK.

    Args:
        records: CRM records for a single conference.

    Returns:
        The aggregated pipeline.
    """
    records = list(records)
    by_status = dict.fromkeys(SponsorStatus.values, 0)
    by_contract_status = dict.fromkeys(ContractStatus.values, 0)
    by_invoice_status = dict.fromkeys(InvoiceStatus.values, 0)
    total_value = Decimal(0)

    for record in records:
        by_status[record.status] = by_status.get(record.status, 0) + 1
        if record.contract_status:
            by_contract_status[record.contract_status] = by_contract_status.get(record.contract_status, 0) + 1
        if record.invoice_status:
            by_invoice_status[record.invoice_status] = by_invoice_status.get(record.invoice_status, 0) + 1
        if record.status == SponsorStatus.CLOSED_WON and record.contract_value and record.contract_value > 0:
            total_value += record.contract_value

    currency = (records[0].contract_currency if records else "") or DEFAULT_CONTRACT_CURRENCY

    return SponsorPipelineData(
        by_status=by_status,
        by_contract_status=by_contract_status,
        by_invoice_status=by_invoice_status,
        total_contract_value=total_value,
        contract_currency=currency,
        total_sponsors=len(records),
        closed_won_count=by_status[SponsorStatus.CLOSED_WON],
        closed_lost_count=by_status[SponsorStatus.CLOSED_LOST],
        active_deals=sum(by_status[status] for status in ACTIVE_STATUSES),
    )


def list_sponsors_for_conference(conference: "Conference") -> "QuerySet[SponsorForConference]":
    """Return all CRM records of a conference with sponsor and tier loaded."""
    return SponsorForConference.objects.filter(conference=conference).select_related("sponsor", "tier")


def get_sponsor_tier_titles(conference: "Conference") -> list[str]:
    """Tier titles of the conference's confirmed sponsors, one per sponsor."""
    return list(
        SponsorForConference.objects.filter(
            conference=conference,
            status=SponsorStatus.CLOSED_WON,
            tier__isnull=False,
        ).values_list("tier__title", flat=True)
    )


def format_status_name(status: str) -> str:
    """Turn a hyphenated status value into a title, e.g. ``"Closed Won"``."""
    return " ".join(word.capitalize() for word in status.split("-"))
