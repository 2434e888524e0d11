"""Slack Block Kit builders for the periodic ticket sales update.

The builders are pure: they turn aggregates into lists of Slack blocks and
never touch the network. :func:`send_sales_update_to_slack` assembles the
full message and hands it to :func:`~django_confdesk.notifications.slack.post_slack_message`.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING

from django.utils import timezone
from django.utils.dateformat import format as format_date

from django_confdesk.notifications.slack import SlackBlock, post_slack_message
from django_confdesk.tickets.utils import calculate_free_ticket_claim_rate

if TYPE_CHECKING:
    from datetime import datetime

    from django_confdesk.conference.models import Conference
    from django_confdesk.proposals.services import ProposalSummary
    from django_confdesk.sponsors.pipeline import SponsorPipelineData
    from django_confdesk.tickets.types import TicketAnalysisResult


@dataclass(frozen=True, slots=True)
class SalesUpdateData:
    """Everything needed to render one sales update message."""

    conference: "Conference"
    tickets_by_category: dict[str, int]
    paid_tickets: int
    sponsor_tickets: int
    speaker_tickets: int
    organizer_tickets: int
    free_tickets_claimed: int
    total_tickets: int
    total_revenue: Decimal
    last_updated: "datetime"
    currency: str = "NOK"
    target_analysis: "TicketAnalysisResult | None" = None
    sponsor_pipeline: "SponsorPipelineData | None" = None
    proposal_summary: "ProposalSummary | None" = None

    @property
    def complimentary_tickets(self) -> int:
        return self.sponsor_tickets + self.speaker_tickets + self.organizer_tickets


def format_currency(amount: Decimal | float | int, currency: str = "NOK") -> str:
    """Format an amount with space-separated thousands and no decimals.

    Example::

        >>> format_currency(Decimal("125000.40"), "NOK")
        '125 000 NOK'
    """
    rounded = Decimal(str(amount)).quantize(Decimal(1))
    return f"{rounded:,.0f}".replace(",", " ") + f" {currency}"


def _text_section(text: str) -> SlackBlock:
    return {"type": "section", "text": {"type": "mrkdwn", "text": text}}


def _fields_section(*texts: str) -> SlackBlock:
    return {"type": "section", "fields": [{"type": "mrkdwn", "text": text} for text in texts]}


def _tally_line(counts: Mapping[str, int]) -> str:
    return " · ".join(f"{key}: {count}" for key, count in counts.items() if count > 0)


def create_category_breakdown(tickets_by_category: Mapping[str, int]) -> list[SlackBlock]:
    """Lay out ticket counts per category, two categories per section."""
    entries = list(tickets_by_category.items())
    blocks: list[SlackBlock] = []
    for index in range(0, len(entries), 2):
        pair = entries[index : index + 2]
        blocks.append(_fields_section(*(f"*{category}:*\n{count} tickets" for category, count in pair)))
    return blocks


def create_proposal_summary_blocks(summary: "ProposalSummary") -> list[SlackBlock]:
    """Build the CFP section. Rejected and withdrawn counts appear only when non-zero."""
    blocks = [
        _text_section("*📝 CFP / Proposals*"),
        _fields_section(f"*Total Proposals:*\n{summary.total}", f"*Submitted:*\n{summary.submitted}"),
        _fields_section(f"*Accepted:*\n{summary.accepted}", f"*Confirmed:*\n{summary.confirmed}"),
    ]
    if summary.rejected > 0 or summary.withdrawn > 0:
        blocks.append(_fields_section(f"*Rejected:*\n{summary.rejected}", f"*Withdrawn:*\n{summary.withdrawn}"))
    return blocks


def create_sponsor_pipeline_blocks(pipeline: "SponsorPipelineData", currency: str) -> list[SlackBlock]:
    """Build the sponsor pipeline section.

    Args:
        pipeline: Aggregated CRM tallies.
        currency: Currency used for the total contract value.

    Returns:
        Slack blocks. Contract value and win rate are only shown once some
        contract value has been closed; stage, invoice and contract lines
        list non-zero tallies only.
    """
    blocks = [
        _text_section("*🤝 Sponsor Pipeline*"),
        _fields_section(
            f"*Total Sponsors:*\n{pipeline.total_sponsors}",
            f"*Active Deals:*\n{pipeline.active_deals}",
        ),
        _fields_section(
            f"*Closed Won:*\n{pipeline.closed_won_count}",
            f"*Closed Lost:*\n{pipeline.closed_lost_count}",
        ),
    ]

    if pipeline.total_contract_value > 0:
        blocks.append(
            _fields_section(
                f"*Total Contract Value:*\n{format_currency(pipeline.total_contract_value, currency)}",
                f"*Win Rate:*\n{pipeline.win_rate:.0f}%",
            )
        )

    for title, counts in (
        ("Pipeline Stages", pipeline.by_status),
        ("Invoice Status", pipeline.by_invoice_status),
        ("Contract Status", pipeline.by_contract_status),
    ):
        line = _tally_line(counts)
        if line:
            blocks.append(_text_section(f"*{title}:* {line}"))

    return blocks


def create_target_progress_blocks(analysis: "TicketAnalysisResult", paid_tickets: int) -> list[SlackBlock]:
    """Build the actual-vs-target section from a sales analysis."""
    performance = analysis.performance
    status_emoji = "✅" if performance.is_on_track else "⚠️"
    if performance.variance >= 0:
        variance_text = f"+{performance.variance:.1f}% ahead"
    else:
        variance_text = f"{performance.variance:.1f}% behind"

    blocks = [
        _text_section(f"*{status_emoji} Target Progress*"),
        _fields_section(
            f"*Current Target:*\n{performance.target_percentage:.1f}%",
            f"*Actual Progress:*\n{performance.current_percentage:.1f}%",
        ),
        _fields_section(
            f"*Variance:*\n{variance_text}",
            f"*Capacity:*\n{paid_tickets}/{analysis.capacity} tickets",
        ),
    ]

    milestone = performance.next_milestone
    if milestone is not None:
        blocks.append(_text_section(f"*🎯 Next Milestone:* {milestone.label} in {milestone.days_away} days"))
    return blocks


def create_ticket_overview_blocks(data: SalesUpdateData) -> list[SlackBlock]:
    """Build the compact ticket totals section."""
    complimentary = data.complimentary_tickets
    claim_rate = calculate_free_ticket_claim_rate(data.free_tickets_claimed, complimentary)
    return [
        _text_section("*🎟️ Tickets*"),
        _fields_section(
            f"*Paid Tickets:*\n{data.paid_tickets}",
            f"*Total Revenue:*\n{format_currency(data.total_revenue, data.currency)}",
        ),
        _fields_section(
            f"*Total Tickets:*\n{data.total_tickets}",
            f"*Complimentary:*\n{complimentary} (claimed {data.free_tickets_claimed}, rate {claim_rate:.1f}%)",
        ),
    ]


def build_sales_update_blocks(data: SalesUpdateData) -> list[SlackBlock]:
    """Assemble the complete sales update message.

    Sections appear in order of how actionable they are: sponsor pipeline,
    proposals, tickets, target progress and finally the per-category
    breakdown. Empty pipelines and proposal summaries are omitted.
    """
    last_updated = timezone.localtime(data.last_updated) if timezone.is_aware(data.last_updated) else data.last_updated

    blocks: list[SlackBlock] = [
        {
            "type": "header",
            "text": {
                "type": "plain_text",
                "text": f"📊 Weekly Sales Update - {data.conference.name}",
                "emoji": True,
            },
        },
        _text_section(f"*Summary as of {format_date(last_updated, 'l j F Y')}*"),
    ]

    pipeline = data.sponsor_pipeline
    if pipeline is not None and pipeline.total_sponsors > 0:
        blocks.extend(create_sponsor_pipeline_blocks(pipeline, pipeline.contract_currency))

    summary = data.proposal_summary
    if summary is not None and summary.total > 0:
        blocks.extend(create_proposal_summary_blocks(summary))

    blocks.extend(create_ticket_overview_blocks(data))

    if data.target_analysis is not None:
        blocks.extend(create_target_progress_blocks(data.target_analysis, data.paid_tickets))

    if len(data.tickets_by_category) > 1:
        blocks.append(_text_section("*Breakdown by Paid Ticket Category:*"))
        blocks.extend(create_category_breakdown(data.tickets_by_category))

    blocks.append({"type": "divider"})
    blocks.append(
        _text_section(f"_This report was generated automatically on {format_date(last_updated, 'd.m.Y H:i')}_")
    )
    return blocks


def send_sales_update_to_slack(data: SalesUpdateData, force_slack: bool = False) -> None:
    """Build the sales update and post it to the conference's sales channel.

    Raises:
        RuntimeError: If Slack rejects the message.
    """
    message = {"blocks": build_sales_update_blocks(data)}
    post_slack_message(message, channel=data.conference.sales_notification_channel or None, force_slack=force_slack)
