"""Typed dataclasses for ticket data and sales analysis results.

:class:`EventTicket` and :class:`EventOrderUser` parse raw Checkin GraphQL
records. The remaining dataclasses describe the output of
:class:`~django_confdesk.tickets.processor.TicketSalesProcessor`.
"""

from dataclasses import asdict, dataclass, field
from datetime import date  # noqa: TC003 -- used at runtime by dataclass fields
from decimal import Decimal, InvalidOperation
from typing import Any


def _decimal(value: object) -> Decimal | None:
    """Parse an API amount string, returning ``None`` for blanks and garbage."""
    if value is None or value == "":
        return None
    try:
        amount = Decimal(str(value))
    except InvalidOperation:
        return None
    return amount if amount.is_finite() else None


@dataclass(frozen=True, slots=True)
class EventTicket:
    """A single ticket row from the Checkin ``eventTickets`` query.

    Attributes:
        id: Checkin ticket identifier.
        order_id: Identifier of the order the ticket belongs to.
        category: Ticket category name (e.g. ``"Early Bird"``).
        sum: Order total excluding VAT. Every ticket row of an order carries
            the same amount, so revenue must be counted once per order.
            ``None`` when the API returned a missing or invalid amount.
        sum_left: Outstanding amount on the order.
        order_date: ISO timestamp of the order, or ``""`` when unknown.
        customer_name: Purchasing organisation or person, if any.
        coupon: Coupon code applied to the order.
        fields: Custom registration fields as ``{key: value}``.
        first_name: Attendee first name.
        last_name: Attendee last name.
        email: Attendee email address.
    """

    id: int
    order_id: int
    category: str
    sum: Decimal | None
    sum_left: Decimal = Decimal(0)
    order_date: str = ""
    customer_name: str = ""
    coupon: str = ""
    fields: dict[str, str] = field(default_factory=dict)
    first_name: str = ""
    last_name: str = ""
    email: str = ""

    @classmethod
    def from_api(cls, data: dict[str, Any], order_date: str = "") -> "EventTicket":
        """Construct an ``EventTicket`` from a raw Checkin API dict.

        Args:
            data: A single object from the ``eventTickets`` query.
            order_date: The order creation timestamp, when known.

        Returns:
            A populated ``EventTicket`` instance.
        """
        crm = data.get("crm") or {}
        raw_fields = data.get("fields") or []
        return cls(
            id=int(data.get("id") or 0),
            order_id=int(data.get("order_id") or 0),
            category=str(data.get("category") or ""),
            sum=_decimal(data.get("sum")),
            sum_left=_decimal(data.get("sum_left")) or Decimal(0),
            order_date=order_date or str(data.get("order_date") or ""),
            customer_name=str(data.get("customer_name") or ""),
            coupon=str(data.get("coupon") or ""),
            fields={str(item.get("key", "")): str(item.get("value", "")) for item in raw_fields},
            first_name=str(crm.get("first_name") or ""),
            last_name=str(crm.get("last_name") or ""),
            email=str(crm.get("email") or ""),
        )

    @property
    def order_day(self) -> date | None:
        """Calendar date of the order, or ``None`` when the date is unknown."""
        if not self.order_date:
            return None
        try:
            return date.fromisoformat(self.order_date[:10])
        except ValueError:
            return None


@dataclass(frozen=True, slots=True)
class EventOrderUser:
    """An order record from the Checkin ``allEventOrderUsers`` query."""

    id: int
    order_id: int
    event_id: int
    created_at: str

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "EventOrderUser":
        """Construct an ``EventOrderUser`` from a raw Checkin API dict."""
        return cls(
            id=int(data.get("id") or 0),
            order_id=int(data.get("orderId") or 0),
            event_id=int(data.get("eventId") or 0),
            created_at=str(data.get("createdAt") or ""),
        )


@dataclass(frozen=True, slots=True)
class Milestone:
    """A named sales milestone on a given date."""

    date: date
    target_percentage: float
    label: str


@dataclass(frozen=True, slots=True)
class SalesTargetConfig:
    """Sales target settings used by the ticket sales processor."""

    enabled: bool
    sales_start_date: date
    target_curve: str
    milestones: tuple[Milestone, ...] = ()


@dataclass(frozen=True, slots=True)
class DailySales:
    """Tickets sold on a single day."""

    date: date
    paid_tickets: int
    total_revenue: Decimal
    category_breakdown: dict[str, int]
    order_count: int


@dataclass(frozen=True, slots=True)
class CumulativeSales:
    """Running sales totals up to and including ``date``."""

    date: date
    total_paid_tickets: int
    total_revenue: Decimal
    category_breakdown: dict[str, int]
    total_orders: int


@dataclass(frozen=True, slots=True)
class TargetPoint:
    """Expected sales on a given date according to the target curve."""

    date: date
    target_tickets: int
    target_percentage: float
    is_milestone: bool = False
    milestone_label: str | None = None


@dataclass(frozen=True, slots=True)
class CombinedDataPoint:
    """A target point paired with the actual sales known on that date."""

    date: date
    actual_tickets: int
    target_tickets: int
    revenue: Decimal
    category_breakdown: dict[str, int]
    is_milestone: bool
    milestone_label: str | None


@dataclass(frozen=True, slots=True)
class NextMilestone:
    """The next upcoming milestone and how far away it is."""

    date: date
    label: str
    days_away: int


@dataclass(frozen=True, slots=True)
class PerformanceMetrics:
    """Actual vs. target sales performance as of today."""

    current_percentage: float
    target_percentage: float
    variance: float
    is_on_track: bool
    next_milestone: NextMilestone | None


@dataclass(frozen=True, slots=True)
class TicketStatistics:
    """Aggregate statistics over paid tickets plus free allocations."""

    total_paid_tickets: int
    total_revenue: Decimal
    total_orders: int
    average_ticket_price: Decimal
    category_breakdown: dict[str, int]
    sponsor_tickets: int
    speaker_tickets: int
    total_capacity_used: int


@dataclass(frozen=True, slots=True)
class TicketAnalysisResult:
    """Full output of a ticket sales analysis run."""

    statistics: TicketStatistics
    progression: list[CombinedDataPoint]
    performance: PerformanceMetrics
    capacity: int

    def as_dict(self) -> dict[str, Any]:
        """Return a JSON-serialisable representation of the analysis."""
        return _jsonable(asdict(self))


def _jsonable(value: Any) -> Any:
    """Convert dates and decimals in nested dataclass dicts for JSON output."""
    if isinstance(value, dict):
        return {key: _jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(item) for item in value]
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, Decimal):
        return float(value)
    return value
