"""Sponsor tier, sponsor, CRM record, and email template models for django-confdesk."""

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.utils.text import slugify


class SponsorStatus(models.TextChoices):
    """Sales pipeline stage of a sponsor for a conference."""

    PROSPECT = "prospect", "Prospect"
    CONTACTED = "contacted", "Contacted"
    NEGOTIATING = "negotiating", "Negotiating"
    CLOSED_WON = "closed-won", "Closed Won"
    CLOSED_LOST = "closed-lost", "Closed Lost"


class ContractStatus(models.TextChoices):
    """How far the sponsorship contract has progressed."""

    NONE = "none", "None"
    VERBAL_AGREEMENT = "verbal-agreement", "Verbal Agreement"
    CONTRACT_SENT = "contract-sent", "Contract Sent"
    CONTRACT_SIGNED = "contract-signed", "Contract Signed"


class InvoiceStatus(models.TextChoices):
    """Invoicing state of a sponsorship."""

    NOT_SENT = "not-sent", "Not Sent"
    SENT = "sent", "Sent"
    PAID = "paid", "Paid"
    OVERDUE = "overdue", "Overdue"
    CANCELLED = "cancelled", "Cancelled"


ACTIVE_STATUSES: tuple[str, ...] = (
    SponsorStatus.PROSPECT,
    SponsorStatus.CONTACTED,
    SponsorStatus.NEGOTIATING,
)


class SponsorTier(models.Model):
    """A sponsorship package offered by a conference.

    The tier ``title`` is also the key into the free ticket allocation
    table (``DJANGO_CONFDESK['sales_update']['sponsor_tier_ticket_allocation']``).
    """

    class TierType(models.TextChoices):
        STANDARD = "standard", "Standard"
        SPECIAL = "special", "Special"

    conference = models.ForeignKey(
        "confdesk_conference.Conference",
        on_delete=models.CASCADE,
        related_name="sponsor_tiers",
    )
    title = models.CharField(max_length=200)
    slug = models.SlugField(max_length=200, blank=True)
    tagline = models.CharField(max_length=300, blank=True, default="")
    tier_type = models.CharField(max_length=20, choices=TierType.choices, default=TierType.STANDARD)
    price = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    currency = models.CharField(max_length=3, default="NOK")
    sold_out = models.BooleanField(default=False)
    order = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["order", "title"]
        unique_together = [("conference", "slug")]

    def __str__(self) -> str:
        return f"{self.title} ({self.conference.slug})"

    def save(self, *args: object, **kwargs: object) -> None:
        """Auto-generate slug from title if not set."""
        if not self.slug:
            self.slug = slugify(self.title)
        super().save(*args, **kwargs)


class Sponsor(models.Model):
    """A sponsoring organization, shared across conferences."""

    name = models.CharField(max_length=200)
    slug = models.SlugField(max_length=200, unique=True, blank=True)
    website_url = models.URLField(blank=True, default="")
    logo_url = models.URLField(blank=True, default="")
    org_number = models.CharField(
        max_length=20,
        blank=True,
        default="",
        help_text="Norwegian organization number, if any.",
    )
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name

    def save(self, *args: object, **kwargs: object) -> None:
        """Auto-generate slug from name if not set."""
        if not self.slug:
            self.slug = slugify(self.name)
        super().save(*args, **kwargs)


class SponsorForConference(models.Model):
    """CRM record tracking a sponsor's relationship with one conference."""

    sponsor = models.ForeignKey(
        Sponsor,
        on_delete=models.CASCADE,
        related_name="conference_records",
    )
    conference = models.ForeignKey(
        "confdesk_conference.Conference",
        on_delete=models.CASCADE,
        related_name="sponsor_records",
    )
    tier = models.ForeignKey(
        SponsorTier,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="sponsor_records",
    )
    status = models.CharField(max_length=20, choices=SponsorStatus.choices, default=SponsorStatus.PROSPECT)
    contract_status = models.CharField(
        max_length=20,
        choices=ContractStatus.choices,
        default=ContractStatus.NONE,
    )
    invoice_status = models.CharField(
        max_length=20,
        choices=InvoiceStatus.choices,
        default=InvoiceStatus.NOT_SENT,
    )
    contract_value = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    contract_currency = models.CharField(max_length=3, blank=True, default="")
    assigned_to = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="assigned_sponsor_records",
    )
    contact_names = models.CharField(max_length=300, blank=True, default="")
    contact_email = models.EmailField(blank=True, default="")
    tags = models.JSONField(default=list, blank=True)
    notes = models.TextField(blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["sponsor__name"]
        unique_together = [("sponsor", "conference")]
        verbose_name = "sponsor for conference"
        verbose_name_plural = "sponsors for conference"

    def __str__(self) -> str:
        return f"{self.sponsor.name} ({self.conference.slug})"

    def clean(self) -> None:
        """Validate that the tier belongs to the same conference as the record."""
        if self.tier_id and self.conference_id and self.tier.conference_id != self.conference_id:
            msg = "Sponsor tier must belong to the same conference as the sponsor record."
            raise ValidationError({"tier": msg})
        if not isinstance(self.tags, list):
            raise ValidationError({"tags": "Tags must be a list of strings."})


class TemplateCategory(models.TextChoices):
    """Use case of a sponsor outreach email template."""

    COLD_OUTREACH = "cold-outreach", "Cold Outreach"
    RETURNING_SPONSOR = "returning-sponsor", "Returning Sponsor"
    INTERNATIONAL = "international", "International"
    LOCAL_COMMUNITY = "local-community", "Local / Community"
    FOLLOW_UP = "follow-up", "Follow-up"
    CUSTOM = "custom", "Custom"


class TemplateLanguage(models.TextChoices):
    NORWEGIAN = "no", "Norwegian"
    ENGLISH = "en", "English"


class SponsorEmailTemplate(models.Model):
    """A reusable outreach email with ``{{{VARIABLE}}}`` placeholders."""

    title = models.CharField(max_length=200)
    slug = models.SlugField(max_length=200, unique=True, blank=True)
    category = models.CharField(max_length=30, choices=TemplateCategory.choices, default=TemplateCategory.CUSTOM)
    language = models.CharField(max_length=2, choices=TemplateLanguage.choices, default=TemplateLanguage.NORWEGIAN)
    subject = models.CharField(max_length=300)
    body = models.TextField()
    description = models.TextField(blank=True, default="")
    is_default = models.BooleanField(default=False)
    sort_order = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["sort_order", "title"]

    def __str__(self) -> str:
        return self.title

    def save(self, *args: object, **kwargs: object) -> None:
        """Auto-generate slug from title if not set."""
        if not self.slug:
            self.slug = slugify(self.title)
        super().save(*args, **kwargs)
