"""Django app configuration for the conference app."""

from django.apps import AppConfig


class DjangoConfdeskConferenceConfig(AppConfig):
    """Configuration for the conference app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "django_confdesk.conference"
    label = "confdesk_conference"
    verbose_name = "Conference"
