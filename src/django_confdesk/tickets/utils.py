"""Ticket statistics helpers.

Checkin reports the *order* total on every ticket row of an order, so any
revenue figure must deduplicate by ``order_id`` (or split the order total
across its tickets when attributing revenue to categories).
"""

from collections import defaultdict
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation

from django_confdesk.tickets.types import EventTicket


@dataclass(frozen=True, slots=True)
class BasicTicketStatistics:
    """Totals over paid tickets."""

    total_paid_tickets: int
    total_revenue: Decimal
    total_orders: int
    average_ticket_price: Decimal


@dataclass(frozen=True, slots=True)
class CategoryStats:
    """Per-category ticket totals."""

    category: str
    count: int
    revenue: Decimal
    orders: int
    percentage: float


@dataclass(frozen=True, slots=True)
class FreeTicketAllocation:
    """Free tickets allocated to sponsors, speakers and organizers."""

    sponsor_tickets: int
    speaker_tickets: int
    organizer_tickets: int
    total_allocated: int
    total_claimed: int


@dataclass(slots=True)
class GroupedOrder:
    """All ticket rows belonging to one order."""

    order_id: int
    total_amount: Decimal
    amount_left: Decimal
    tickets: list[EventTicket] = field(default_factory=list)
    categories: list[str] = field(default_factory=list)

    @property
    def total_tickets(self) -> int:
        return len(self.tickets)


def parse_amount(value: object) -> Decimal | None:
    """Parse a ticket amount, returning ``None`` for missing or invalid values."""
    if value is None or value == "":
        return None
    try:
        amount = Decimal(str(value))
    except InvalidOperation:
        return None
    if not amount.is_finite():
        return None
    return amount


def is_paid_ticket(ticket: EventTicket) -> bool:
    """Whether *ticket* belongs to an order with a positive total."""
    amount = parse_amount(ticket.sum)
    return amount is not None and amount > 0


def split_paid_and_free(tickets: Iterable[EventTicket]) -> tuple[list[EventTicket], list[EventTicket]]:
    """Split tickets into paid (positive order total) and free (zero total).

    Tickets with negative or unparsable amounts belong to neither group.
    """
    paid: list[EventTicket] = []
    free: list[EventTicket] = []
    for ticket in tickets:
        amount = parse_amount(ticket.sum)
        if amount is None:
            continue
        if amount > 0:
            paid.append(ticket)
        elif amount == 0:
            free.append(ticket)
    return paid, free


def calculate_ticket_statistics(tickets: Iterable[EventTicket]) -> BasicTicketStatistics:
    """Compute paid ticket totals.

    Free, negative and unparsable tickets are ignored. Revenue counts each
    order once.
    """
    paid = [ticket for ticket in tickets if is_paid_ticket(ticket)]
    seen_orders: set[int] = set()
    revenue = Decimal(0)
    for ticket in paid:
        if ticket.order_id not in seen_orders:
            revenue += ticket.sum or Decimal(0)
            seen_orders.add(ticket.order_id)

    count = len(paid)
    return BasicTicketStatistics(
        total_paid_tickets=count,
        total_revenue=revenue,
        total_orders=len(seen_orders),
        average_ticket_price=revenue / count if count else Decimal(0),
    )


def calculate_free_ticket_claim_rate(claimed: int, allocated: int) -> float:
    """Percentage of allocated free tickets that have been claimed."""
    if allocated <= 0:
        return 0.0
    return claimed / allocated * 100


def calculate_capacity_percentage(sold: int, capacity: int) -> float:
    """Percentage of capacity sold. Returns 0 when capacity is not set."""
    if capacity <= 0:
        return 0.0
    return sold / capacity * 100


def calculate_category_stats(tickets: Iterable[EventTicket], total: int) -> list[CategoryStats]:
    """Break tickets down by category.

    Each order's total is split evenly across all of its tickets so that a
    mixed-category order contributes revenue proportionally.

    Args:
        tickets: Tickets to group.
        total: Denominator for the percentage column.

    Returns:
        One entry per category, sorted by ticket count descending.
    """
    tickets = list(tickets)
    tickets_per_order: dict[int, int] = defaultdict(int)
    for ticket in tickets:
        tickets_per_order[ticket.order_id] += 1

    counts: dict[str, int] = defaultdict(int)
    revenue: dict[str, Decimal] = defaultdict(Decimal)
    orders: dict[str, set[int]] = defaultdict(set)
    for ticket in tickets:
        counts[ticket.category] += 1
        revenue[ticket.category] += (ticket.sum or Decimal(0)) / tickets_per_order[ticket.order_id]
        orders[ticket.category].add(ticket.order_id)

    stats = [
        CategoryStats(
            category=category,
            count=count,
            revenue=revenue[category],
            orders=len(orders[category]),
            percentage=count / total * 100 if total > 0 else 0.0,
        )
        for category, count in counts.items()
    ]
    return sorted(stats, key=lambda item: item.count, reverse=True)


def calculate_free_ticket_allocation(
    sponsor_tiers: Iterable[str | None],
    tier_allocation: Mapping[str, int],
    speaker_count: int,
    organizer_count: int,
    free_tickets: Iterable[EventTicket] = (),
) -> FreeTicketAllocation:
    """Total the free tickets each group is entitled to and how many were claimed.

    Args:
        sponsor_tiers: Tier title of each sponsor; ``None`` when a sponsor has
            no tier.
        tier_allocation: Free tickets per tier title.
        speaker_count: Speakers entitled to a free ticket.
        organizer_count: Organizers entitled to a free ticket.
        free_tickets: Zero-priced tickets already issued.
    """
    sponsor_tickets = sum(tier_allocation.get(tier or "", 0) for tier in sponsor_tiers)
    return FreeTicketAllocation(
        sponsor_tickets=sponsor_tickets,
        speaker_tickets=speaker_count,
        organizer_tickets=organizer_count,
        total_allocated=sponsor_tickets + speaker_count + organizer_count,
        total_claimed=len(list(free_tickets)),
    )


def group_tickets_by_order(tickets: Iterable[EventTicket]) -> list[GroupedOrder]:
    """Group ticket rows by order, preserving first-seen order."""
    orders: dict[int, GroupedOrder] = {}
    for ticket in tickets:
        order = orders.get(ticket.order_id)
        if order is None:
            order = GroupedOrder(
                order_id=ticket.order_id,
                total_amount=ticket.sum or Decimal(0),
                amount_left=ticket.sum_left,
            )
            orders[ticket.order_id] = order
        order.tickets.append(ticket)
        if ticket.category not in order.categories:
            order.categories.append(ticket.category)
    return list(orders.values())
