"""Speaker and proposal models for django-confdesk."""

from django.conf import settings
from django.db import models


class ProposalStatus(models.TextChoices):
    """Lifecycle state of a CFP proposal."""

    DRAFT = "draft", "Draft"
    SUBMITTED = "submitted", "Submitted"
    ACCEPTED = "accepted", "Accepted"
    CONFIRMED = "confirmed", "Confirmed"
    REJECTED = "rejected", "Rejected"
    WITHDRAWN = "withdrawn", "Withdrawn"
    WAITLISTED = "waitlisted", "Waitlisted"
    DELETED = "deleted", "Deleted"


class Speaker(models.Model):
    """A person submitting proposals. Organizers are flagged with ``is_organizer``."""

    name = models.CharField(max_length=200)
    email = models.EmailField(blank=True, default="")
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="confdesk_speaker",
    )
    is_organizer = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class Proposal(models.Model):
    """A talk or workshop proposal submitted to a conference."""

    conference = models.ForeignKey(
        "confdesk_conference.Conference",
        on_delete=models.CASCADE,
        related_name="proposals",
    )
    title = models.CharField(max_length=300)
    speakers = models.ManyToManyField(Speaker, related_name="proposals", blank=True)
    status = models.CharField(max_length=20, choices=ProposalStatus.choices, default=ProposalStatus.DRAFT)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return self.title
