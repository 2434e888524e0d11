"""Sales target models for the tickets app."""

from django.core.exceptions import ValidationError
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from django_confdesk.tickets.targets import TargetCurve
from django_confdesk.tickets.types import Milestone, SalesTargetConfig


class SalesTarget(models.Model):
    """Ticket sales target settings for a conference.

    The target curve runs from ``sales_start_date`` to the conference start
    date and reaches the conference's ``ticket_capacity`` on that day.
    """

    conference = models.OneToOneField(
        "confdesk_conference.Conference",
        on_delete=models.CASCADE,
        related_name="sales_target",
    )
    enabled = models.BooleanField(default=False)
    sales_start_date = models.DateField(blank=True, null=True)
    target_curve = models.CharField(
        max_length=20,
        choices=TargetCurve.choices,
        default=TargetCurve.LINEAR,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return f"Sales target ({self.conference.slug})"

    def clean(self) -> None:
        """Validate that sales start before the conference does."""
        if self.sales_start_date and self.conference_id and self.sales_start_date > self.conference.start_date:
            msg = "Sales start date must be on or before the conference start date."
            raise ValidationError({"sales_start_date": msg})

    @property
    def is_configured(self) -> bool:
        """Whether the target has everything needed to run an analysis."""
        return bool(self.enabled and self.sales_start_date and self.target_curve)

    def to_config(self) -> SalesTargetConfig:
        """Return the target as a processor configuration.

        Raises:
            ValueError: If no sales start date is set.
        """
        if self.sales_start_date is None:
            msg = f"Sales target for '{self.conference.slug}' has no sales start date"
            raise ValueError(msg)
        return SalesTargetConfig(
            enabled=self.enabled,
            sales_start_date=self.sales_start_date,
            target_curve=self.target_curve,
            milestones=tuple(
                Milestone(
                    date=milestone.date,
                    target_percentage=milestone.target_percentage,
                    label=milestone.label,
                )
                for milestone in self.milestones.all()
            ),
        )


class SalesMilestone(models.Model):
    """A labelled checkpoint on the sales target timeline."""

    sales_target = models.ForeignKey(
        SalesTarget,
        on_delete=models.CASCADE,
        related_name="milestones",
    )
    date = models.DateField()
    target_percentage = models.FloatField(
        validators=[MinValueValidator(0), MaxValueValidator(100)],
    )
    label = models.CharField(max_length=200)

    class Meta:
        ordering = ["date"]

    def __str__(self) -> str:
        return f"{self.label} ({self.date})"
