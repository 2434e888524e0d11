"""Views for the tickets app.

Provides the cron-triggered sales update endpoint. It is protected by a
shared bearer token (``DJANGO_CONFDESK['sales_update']['cron_secret']``)
rather than a user session, so scheduled jobs can call it directly.
"""

import hmac
import logging

from django.http import HttpRequest, JsonResponse
from django.views.decorators.cache import never_cache
from django.views.decorators.http import require_GET

from django_confdesk.conference.models import Conference
from django_confdesk.features import require_feature
from django_confdesk.settings import get_config
from django_confdesk.tickets.services.sales_update import (
    SalesUpdateConfigurationError,
    SalesUpdateService,
)

logger = logging.getLogger(__name__)


def _is_authorized(request: HttpRequest, cron_secret: str) -> bool:
    auth_header = request.headers.get("Authorization", "")
    return hmac.compare_digest(auth_header.encode(), f"Bearer {cron_secret}".encode())


@never_cache
@require_GET
def sales_update_cron(request: HttpRequest, conference_slug: str) -> JsonResponse:
    """Run the sales update for a conference and post it to Slack.

    Args:
        request: The incoming HTTP request from the scheduler.
        conference_slug: URL slug identifying the conference.

    Returns:
        A JSON response with the sales update summary, or an error payload:
        500 when no cron secret is configured, 401 for a missing or wrong
        bearer token, 404 for an unknown conference, 400 when the conference
        lacks Checkin configuration, and 500 for unexpected failures.
    """
    require_feature("sales_update")

    cron_secret = get_config().sales_update.cron_secret
    if not cron_secret:
        logger.error("Sales update cron secret is not configured")
        return JsonResponse({"error": "Server configuration error"}, status=500)

    if not _is_authorized(request, cron_secret):
        logger.warning("Invalid or missing authorization token for sales update of %s", conference_slug)
        return JsonResponse({"error": "Unauthorized"}, status=401)

    try:
        conference = Conference.objects.get(slug=conference_slug, is_active=True)
    except Conference.DoesNotExist:
        logger.warning("Sales update requested for unknown conference slug: %s", conference_slug)
        return JsonResponse({"error": "Conference not found"}, status=404)

    try:
        result = SalesUpdateService(conference).run()
    except SalesUpdateConfigurationError as exc:
        logger.error("Conference '%s' is missing Checkin configuration: %s", conference_slug, exc)
        return JsonResponse({"error": "Conference not configured for ticket sales tracking"}, status=400)
    except Exception as exc:
        logger.exception("Error in sales update cron job for %s", conference_slug)
        return JsonResponse({"error": "Internal server error", "details": str(exc)}, status=500)

    return JsonResponse(result.as_dict())
