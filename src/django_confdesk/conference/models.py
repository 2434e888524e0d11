"""Conference model for django-confdesk."""

from datetime import date

from django.db import models
from django.utils import timezone
from encrypted_fields import EncryptedCharField


class Conference(models.Model):
    """A conference event with dates, capacity, and integration settings.

    The central model that all other apps reference. Stores the Checkin
    ticketing identifiers and the Slack channel for sales updates so each
    conference can be managed independently.
    """

    name = models.CharField(max_length=200)
    slug = models.SlugField(max_length=200, unique=True)
    organizer = models.CharField(max_length=200, blank=True, default="")
    city = models.CharField(max_length=200, blank=True, default="")
    start_date = models.DateField()
    end_date = models.DateField()
    timezone = models.CharField(max_length=100, default="Europe/Oslo")
    domain = models.CharField(
        max_length=200,
        blank=True,
        default="",
        help_text="Primary domain without scheme, e.g. cloudnativeday.no.",
    )
    website_url = models.URLField(blank=True, default="")
    prospectus_url = models.URLField(blank=True, default="")

    ticket_capacity = models.PositiveIntegerField(
        default=0,
        help_text="Total ticket capacity used for sales targets. 0 means not configured.",
    )
    checkin_customer_id = models.PositiveIntegerField(blank=True, null=True)
    checkin_event_id = models.PositiveIntegerField(blank=True, null=True)
    checkin_api_secret = EncryptedCharField(max_length=200, blank=True, null=True, default=None)

    sales_notification_channel = models.CharField(
        max_length=100,
        blank=True,
        default="",
        help_text="Slack channel for weekly sales updates. Falls back to the configured default.",
    )
    contract_currency = models.CharField(max_length=3, default="NOK")

    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-start_date"]

    def __str__(self) -> str:
        return self.name

    def is_over(self, today: date | None = None) -> bool:
        """Return ``True`` once the conference end date has passed.

        Args:
            today: Reference date. Defaults to the current local date.
        """
        today = today or timezone.localdate()
        return self.end_date < today

    @property
    def has_checkin_config(self) -> bool:
        """Whether both Checkin identifiers are configured."""
        return bool(self.checkin_customer_id) and bool(self.checkin_event_id)

    @property
    def url(self) -> str:
        """Public URL of the conference website."""
        if self.domain:
            return f"https://{self.domain}"
        return self.website_url
