"""URL configuration for the tickets app.

Mount under a conference-scoped prefix in the host project::

    urlpatterns = [
        path("<slug:conference_slug>/tickets/", include("django_confdesk.tickets.urls")),
    ]
"""

from django.urls import path

from django_confdesk.tickets.views import sales_update_cron

app_name = "tickets"

urlpatterns = [
    path("cron/sales-update/", sales_update_cron, name="sales-update-cron"),
]
