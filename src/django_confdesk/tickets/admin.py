"""Django admin configuration for the tickets app."""

from django.contrib import admin

from django_confdesk.tickets.models import SalesMilestone, SalesTarget


class SalesMilestoneInline(admin.TabularInline):
    """Inline editor for the milestones of a sales target."""

    model = SalesMilestone
    extra = 1
    fields = ("date", "target_percentage", "label")


@admin.register(SalesTarget)
class SalesTargetAdmin(admin.ModelAdmin):
    """Admin interface for ticket sales targets and their milestones."""

    list_display = ("conference", "enabled", "sales_start_date", "target_curve", "updated_at")
    list_filter = ("enabled", "target_curve")
    search_fields = ("conference__name", "conference__slug")
    readonly_fields = ("created_at", "updated_at")
    inlines = (SalesMilestoneInline,)
