"""URL configuration for the conference management dashboard.

Mount under a prefix in the host project::

    urlpatterns = [
        path("manage/", include("django_confdesk.manage.urls")),
    ]
"""

from django.urls import path

from django_confdesk.manage.views import (
    ProposalSummaryView,
    SponsorPipelineView,
    TargetCurvesView,
    TicketSalesView,
)

app_name = "manage"

urlpatterns = [
    path("<slug:conference_slug>/ticket-sales/", TicketSalesView.as_view(), name="ticket-sales"),
    path("<slug:conference_slug>/sponsor-pipeline/", SponsorPipelineView.as_view(), name="sponsor-pipeline"),
    path("<slug:conference_slug>/proposals/", ProposalSummaryView.as_view(), name="proposals"),
    path("<slug:conference_slug>/target-curves/", TargetCurvesView.as_view(), name="target-curves"),
]
