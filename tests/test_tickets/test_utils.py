from decimal import Decimal

import pytest

from django_confdesk.tickets.types import EventTicket
from django_confdesk.tickets.utils import (
    calculate_capacity_percentage,
    calculate_category_stats,
    calculate_free_ticket_allocation,
    calculate_free_ticket_claim_rate,
    calculate_ticket_statistics,
    group_tickets_by_order,
    is_paid_ticket,
    parse_amount,
    split_paid_and_free,
)


def _ticket(ticket_id, order_id, amount, category="Regular", sum_left="0"):
    return EventTicket(
        id=ticket_id,
        order_id=order_id,
        category=category,
        sum=parse_amount(amount),
        sum_left=Decimal(sum_left),
    )


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("1250.50", Decimal("1250.50")),
        (100, Decimal(100)),
        ("0", Decimal(0)),
        (None, None),
        ("", None),
        ("abc", None),
        ("NaN", None),
        ("Infinity", None),
    ],
)
def test_parse_amount(value, expected):
    assert parse_amount(value) == expected


def test_is_paid_ticket():
    assert is_paid_ticket(_ticket(1, 1, "100")) is True
    assert is_paid_ticket(_ticket(2, 2, "0")) is False
    assert is_paid_ticket(_ticket(3, 3, None)) is False


def test_split_paid_and_free_drops_negative_and_invalid():
    tickets = [
        _ticket(1, 1, "1000"),
        _ticket(2, 2, "0"),
        _ticket(3, 3, "-50"),
        _ticket(4, 4, None),
    ]

    paid, free = split_paid_and_free(tickets)

    assert [t.id for t in paid] == [1]
    assert [t.id for t in free] == [2]


def test_ticket_statistics_deduplicates_orders():
    tickets = [
        _ticket(1, 10, "3000"),
        _ticket(2, 10, "3000"),
        _ticket(3, 11, "1500"),
        _ticket(4, 12, "0"),
    ]

    stats = calculate_ticket_statistics(tickets)

    assert stats.total_paid_tickets == 3
    assert stats.total_revenue == Decimal(4500)
    assert stats.total_orders == 2
    assert stats.average_ticket_price == Decimal(1500)


def test_ticket_statistics_empty():
    stats = calculate_ticket_statistics([])

    assert stats.total_paid_tickets == 0
    assert stats.average_ticket_price == Decimal(0)


@pytest.mark.parametrize(
    ("claimed", "allocated", "expected"),
    [(5, 20, 25.0), (0, 10, 0.0), (3, 0, 0.0), (3, -1, 0.0)],
)
def test_free_ticket_claim_rate(claimed, allocated, expected):
    assert calculate_free_ticket_claim_rate(claimed, allocated) == expected


@pytest.mark.parametrize(
    ("sold", "capacity", "expected"),
    [(50, 200, 25.0), (10, 0, 0.0), (250, 200, 125.0)],
)
def test_capacity_percentage(sold, capacity, expected):
    assert calculate_capacity_percentage(sold, capacity) == expected


def test_category_stats_splits_mixed_orders():
    tickets = [
        _ticket(1, 10, "3000", "Regular"),
        _ticket(2, 10, "3000", "Student"),
        _ticket(3, 11, "2000", "Regular"),
    ]

    stats = calculate_category_stats(tickets, total=4)

    assert [s.category for s in stats] == ["Regular", "Student"]
    regular, student = stats
    assert regular.count == 2
    assert regular.revenue == Decimal(3500)
    assert regular.orders == 2
    assert regular.percentage == 50.0
    assert student.revenue == Decimal(1500)
    assert student.percentage == 25.0


def test_category_stats_zero_total():
    stats = calculate_category_stats([_ticket(1, 1, "100")], total=0)

    assert stats[0].percentage == 0.0


def test_free_ticket_allocation():
    allocation = calculate_free_ticket_allocation(
        sponsor_tiers=["Ingress", "Pod", None, "Unknown"],
        tier_allocation={"Ingress": 5, "Pod": 2},
        speaker_count=8,
        organizer_count=3,
        free_tickets=[_ticket(1, 1, "0"), _ticket(2, 2, "0")],
    )

    assert allocation.sponsor_tickets == 7
    assert allocation.speaker_tickets == 8
    assert allocation.organizer_tickets == 3
    assert allocation.total_allocated == 18
    assert allocation.total_claimed == 2


def test_group_tickets_by_order_preserves_first_seen_order():
    tickets = [
        _ticket(1, 20, "2000", "Regular", sum_left="500"),
        _ticket(2, 10, "900", "Student"),
        _ticket(3, 20, "2000", "Workshop", sum_left="500"),
        _ticket(4, 20, "2000", "Regular", sum_left="500"),
    ]

    orders = group_tickets_by_order(tickets)

    assert [order.order_id for order in orders] == [20, 10]
    first = orders[0]
    assert first.total_tickets == 3
    assert first.total_amount == Decimal(2000)
    assert first.amount_left == Decimal(500)
    assert first.categories == ["Regular", "Workshop"]
