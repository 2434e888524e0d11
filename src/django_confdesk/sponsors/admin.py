"""Django admin configuration for the sponsors app."""

from django.contrib import admin

from django_confdesk.sponsors.models import Sponsor, SponsorEmailTemplate, SponsorForConference, SponsorTier


class SponsorForConferenceInline(admin.TabularInline):
    """Inline editor for a sponsor's per-conference CRM records."""

    model = SponsorForConference
    extra = 0
    fields = ("conference", "tier", "status", "contract_status", "invoice_status", "contract_value")
    raw_id_fields = ("tier",)


@admin.register(SponsorTier)
class SponsorTierAdmin(admin.ModelAdmin):
    """Admin interface for managing sponsor tiers."""

    list_display = ("title", "conference", "tier_type", "price", "currency", "sold_out", "order")
    list_filter = ("conference", "tier_type")
    search_fields = ("title", "slug")
    prepopulated_fields = {"slug": ("title",)}


@admin.register(Sponsor)
class SponsorAdmin(admin.ModelAdmin):
    """Admin interface for managing sponsors with inline CRM records."""

    list_display = ("name", "org_number", "website_url", "is_active")
    list_filter = ("is_active",)
    search_fields = ("name", "slug", "org_number")
    prepopulated_fields = {"slug": ("name",)}
    inlines = (SponsorForConferenceInline,)


@admin.register(SponsorForConference)
class SponsorForConferenceAdmin(admin.ModelAdmin):
    """Admin interface for the sponsor sales pipeline."""

    list_display = (
        "sponsor",
        "conference",
        "tier",
        "status",
        "contract_status",
        "invoice_status",
        "contract_value",
        "assigned_to",
    )
    list_filter = ("conference", "status", "contract_status", "invoice_status")
    search_fields = ("sponsor__name", "contact_names", "contact_email", "notes")
    raw_id_fields = ("sponsor", "tier", "assigned_to")
    readonly_fields = ("created_at", "updated_at")


@admin.register(SponsorEmailTemplate)
class SponsorEmailTemplateAdmin(admin.ModelAdmin):
    """Admin interface for sponsor outreach email templates."""

    list_display = ("title", "category", "language", "is_default", "sort_order")
    list_filter = ("category", "language", "is_default")
    search_fields = ("title", "subject", "body")
    prepopulated_fields = {"slug": ("title",)}
