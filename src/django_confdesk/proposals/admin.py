"""Django admin configuration for the proposals app."""

from django.contrib import admin

from django_confdesk.proposals.models import Proposal, Speaker


@admin.register(Speaker)
class SpeakerAdmin(admin.ModelAdmin):
    """Admin interface for speakers and organizers."""

    list_display = ("name", "email", "is_organizer")
    list_filter = ("is_organizer",)
    search_fields = ("name", "email")
    raw_id_fields = ("user",)


@admin.register(Proposal)
class ProposalAdmin(admin.ModelAdmin):
    """Admin interface for CFP proposals."""

    list_display = ("title", "conference", "status", "created_at")
    list_filter = ("conference", "status")
    search_fields = ("title", "speakers__name")
    filter_horizontal = ("speakers",)
    readonly_fields = ("created_at", "updated_at")
