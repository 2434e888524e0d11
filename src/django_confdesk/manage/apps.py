"""Django app configuration for the conference management dashboard app."""

from django.apps import AppConfig


class DjangoConfdeskManageConfig(AppConfig):
    """Configuration for the organizer dashboard endpoints."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "django_confdesk.manage"
    label = "confdesk_manage"
    verbose_name = "Conference Management"
