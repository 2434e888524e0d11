"""HTTP client for the Checkin.no GraphQL API.

Provides :class:`CheckinClient` for fetching event tickets and enriching them
with the purchase date of their order. Ticket rows do not carry a date, so the
client also pages through ``allEventOrderUsers`` and joins on ``orderId``.
"""

import logging
from typing import TYPE_CHECKING, Any

import httpx

from django_confdesk.settings import get_config
from django_confdesk.tickets.types import EventOrderUser, EventTicket

if TYPE_CHECKING:
    from django_confdesk.conference.models import Conference

logger = logging.getLogger(__name__)

EVENT_TICKETS_QUERY = """
query FetchEventTickets($customerId: Int!, $eventId: Int!) {
  eventTickets(customer_id: $customerId, id: $eventId) {
    id
    order_id
    category
    customer_name
    sum
    sum_left
    coupon
    discount
    fields {
      key
      value
    }
    crm {
      first_name
      last_name
      email
    }
  }
}
"""

EVENT_ORDER_USERS_QUERY = """
query allEventOrderUsers(
  $customerId: Int!
  $offset: Int
  $length: Int
  $reportFilters: [EventOrderUserReportFilterInput!]
) {
  allEventOrderUsers(
    customerId: $customerId
    offset: $offset
    length: $length
    reportFilters: $reportFilters
  ) {
    records
    offset
    length
    data {
      id
      orderId
      eventId
      createdAt
    }
    pageInfo {
      hasNextPage
    }
  }
}
"""


def _validate_ids(customer_id: int | None, event_id: int | None) -> None:
    if not customer_id or customer_id <= 0:
        msg = "Valid customer ID is required"
        raise ValueError(msg)
    if not event_id or event_id <= 0:
        msg = "Valid event ID is required"
        raise ValueError(msg)


class CheckinClient:
    """HTTP client for the Checkin GraphQL API.

    Args:
        api_key: Checkin API key.
        api_secret: Checkin API secret.
        api_url: GraphQL endpoint URL.
        timeout: Request timeout in seconds.
        batch_size: Page size for paginated order queries.

    Example::

        client = CheckinClient(api_key="key", api_secret="secret")
        tickets = client.fetch_event_tickets(customer_id=123, event_id=456)
    """

    def __init__(
        self,
        *,
        api_key: str,
        api_secret: str,
        api_url: str = "https://api.checkin.no/graphql",
        timeout: float = 30,
        batch_size: int = 1000,
    ) -> None:
        """Initialize the client with API credentials."""
        self.api_url = api_url
        self.timeout = timeout
        self.batch_size = batch_size
        self.headers: dict[str, str] = {
            "Content-Type": "application/json",
            "Authorization": f"Basic {api_key}:{api_secret}",
        }

    @classmethod
    def for_conference(cls, conference: "Conference") -> "CheckinClient":
        """Build a client from settings, preferring the conference's own secret.

        Raises:
            ValueError: If no API key or secret is configured.
        """
        config = get_config().checkin
        api_secret = conference.checkin_api_secret or config.api_secret
        if not config.api_key or not api_secret:
            msg = "Checkin API credentials are not configured"
            raise ValueError(msg)
        return cls(
            api_key=config.api_key,
            api_secret=api_secret,
            api_url=config.api_url,
            timeout=config.timeout,
            batch_size=config.batch_size,
        )

    def query(self, query: str, variables: dict[str, Any]) -> dict[str, Any]:
        """Execute a GraphQL query and return its ``data`` payload.

        Raises:
            RuntimeError: If the request fails or the response has errors.
        """
        try:
            response = httpx.post(
                self.api_url,
                json={"query": query, "variables": variables},
                headers=self.headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            msg = f"Checkin API request failed: {exc.response.status_code} {exc.response.reason_phrase}"
            raise RuntimeError(msg) from exc
        except httpx.RequestError as exc:
            msg = f"Checkin API connection error: {exc}"
            raise RuntimeError(msg) from exc

        try:
            payload = response.json()
        except ValueError as exc:
            msg = f"Checkin API returned invalid JSON: {exc}"
            raise RuntimeError(msg) from exc
        errors = payload.get("errors")
        if errors:
            messages = "; ".join(str(error.get("message", error)) for error in errors)
            msg = f"Checkin API returned errors: {messages}"
            raise RuntimeError(msg)
        data = payload.get("data")
        if data is None:
            msg = "Checkin API returned no data"
            raise RuntimeError(msg)
        return data

    def fetch_raw_tickets(self, customer_id: int, event_id: int) -> list[dict[str, Any]]:
        """Fetch ticket rows for an event without order dates."""
        _validate_ids(customer_id, event_id)
        data = self.query(EVENT_TICKETS_QUERY, {"customerId": customer_id, "eventId": event_id})
        return data.get("eventTickets") or []

    def fetch_event_orders(self, customer_id: int, event_id: int, *, offset: int = 0) -> list[EventOrderUser]:
        """Fetch one page of order users for an event."""
        variables = {
            "customerId": customer_id,
            "offset": offset,
            "length": self.batch_size,
            "reportFilters": [
                {
                    "rule": "AND",
                    "conditions": [
                        {
                            "rule": "AND",
                            "field": "EVENT_ID",
                            "operator": "EQUALS",
                            "value": str(event_id),
                        },
                    ],
                },
            ],
        }
        data = self.query(EVENT_ORDER_USERS_QUERY, variables)
        page = data.get("allEventOrderUsers") or {}
        rows = page.get("data")
        if not rows:
            return []
        return [EventOrderUser.from_api(row) for row in rows]

    def fetch_all_event_orders(self, customer_id: int, event_id: int) -> list[EventOrderUser]:
        """Page through all order users for an event until a short page."""
        _validate_ids(customer_id, event_id)
        orders: list[EventOrderUser] = []
        offset = 0
        while True:
            batch = self.fetch_event_orders(customer_id, event_id, offset=offset)
            orders.extend(batch)
            if len(batch) < self.batch_size:
                break
            offset += self.batch_size
        logger.debug("Fetched %d order users for Checkin event %s", len(orders), event_id)
        return orders

    def fetch_event_tickets(self, customer_id: int, event_id: int) -> list[EventTicket]:
        """Fetch all tickets for an event with their order dates filled in.

        Args:
            customer_id: Checkin customer (organizer account) identifier.
            event_id: Checkin event identifier.

        Returns:
            Tickets with ``order_date`` set from the order's ``createdAt``, or
            ``""`` when the order is unknown.

        Raises:
            ValueError: If either identifier is missing or not positive.
            RuntimeError: If the API request fails.
        """
        _validate_ids(customer_id, event_id)
        raw_tickets = self.fetch_raw_tickets(customer_id, event_id)
        orders = self.fetch_all_event_orders(customer_id, event_id)
        order_dates = {order.order_id: order.created_at for order in orders}

        tickets = [
            EventTicket.from_api(item, order_date=order_dates.get(int(item.get("order_id") or 0), ""))
            for item in raw_tickets
        ]
        logger.info("Fetched %d tickets for Checkin event %s", len(tickets), event_id)
        return tickets
