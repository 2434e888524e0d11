"""Django app configuration for the sponsors app."""

from django.apps import AppConfig


class DjangoConfdeskSponsorsConfig(AppConfig):
    """Configuration for the sponsors app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "django_confdesk.sponsors"
    label = "confdesk_sponsors"
    verbose_name = "Sponsors"
