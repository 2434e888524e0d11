"""Django app configuration for the proposals app."""

from django.apps import AppConfig


class DjangoConfdeskProposalsConfig(AppConfig):
    """Configuration for the proposals app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "django_confdesk.proposals"
    label = "confdesk_proposals"
    verbose_name = "Proposals"
