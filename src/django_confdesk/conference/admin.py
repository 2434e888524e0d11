"""Django admin configuration for the conference app."""

from django import forms
from django.contrib import admin

from django_confdesk.conference.models import Conference
from django_confdesk.tickets.models import SalesTarget

MASKED_VALUE = "•" * 12


class MaskedSecretInput(forms.PasswordInput):
    """Password widget that renders a mask when a secret is stored.

    The decrypted secret is never written into the page; a row of dots
    tells the admin that a value exists.
    """

    def format_value(self, value: str | None) -> str:
        """Render the mask for stored values and nothing otherwise."""
        return MASKED_VALUE if value else ""


class MaskedSecretField(forms.CharField):
    """Optional char field that keeps the stored secret unless replaced.

    Submitting an empty value or the mask itself leaves the database value
    untouched.
    """

    widget = MaskedSecretInput

    def __init__(self, **kwargs: object) -> None:
        """Make the field optional and disable browser autocomplete."""
        kwargs.setdefault("required", False)
        super().__init__(**kwargs)
        self.widget.attrs.setdefault("autocomplete", "off")

    def has_changed(self, initial: str | None, data: str | None) -> bool:
        """Report no change when the mask or a blank value is submitted."""
        if not data or data == MASKED_VALUE:
            return False
        return super().has_changed(initial, data)

    def clean(self, value: str | None) -> str | None:
        """Fall back to the stored secret when nothing new was entered."""
        if not value or value == MASKED_VALUE:
            return self.initial
        return super().clean(value)


class ConferenceForm(forms.ModelForm):
    """Conference form with the Checkin API secret masked."""

    checkin_api_secret = MaskedSecretField(label="Checkin API secret")

    class Meta:
        model = Conference
        exclude: list[str] = []

    def __init__(self, *args: object, **kwargs: object) -> None:
        """Seed the secret field with the stored value so blank submissions keep it."""
        super().__init__(*args, **kwargs)
        if self.instance.pk:
            self.fields["checkin_api_secret"].initial = self.instance.checkin_api_secret


class SalesTargetInline(admin.StackedInline):
    """Inline editor for the conference's ticket sales target.

    Milestones are edited on the sales target's own admin page.
    """

    model = SalesTarget
    extra = 0
    max_num = 1
    fields = ("enabled", "sales_start_date", "target_curve")


@admin.register(Conference)
class ConferenceAdmin(admin.ModelAdmin):
    """Admin interface for managing conferences.

    Fields are grouped into basic information, dates, ticket sales
    settings, the Checkin integration and status. The sales target is
    editable inline.
    """

    form = ConferenceForm
    list_display = ("name", "slug", "start_date", "end_date", "ticket_capacity", "is_active")
    list_filter = ("is_active",)
    search_fields = ("name", "slug", "domain")
    prepopulated_fields = {"slug": ("name",)}
    inlines = (SalesTargetInline,)

    fieldsets = (
        (
            None,
            {
                "fields": ("name", "slug", "organizer", "city", "domain", "website_url", "prospectus_url"),
            },
        ),
        (
            "Dates",
            {
                "fields": ("start_date", "end_date", "timezone"),
            },
        ),
        (
            "Ticket sales",
            {
                "fields": ("ticket_capacity", "sales_notification_channel", "contract_currency"),
            },
        ),
        (
            "Checkin integration",
            {
                "fields": ("checkin_customer_id", "checkin_event_id", "checkin_api_secret"),
                "classes": ("collapse",),
            },
        ),
        (
            "Status",
            {
                "fields": ("is_active",),
            },
        ),
    )
