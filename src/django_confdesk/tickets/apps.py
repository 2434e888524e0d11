"""Django app configuration for the tickets app."""

from django.apps import AppConfig


class DjangoConfdeskTicketsConfig(AppConfig):
    """Configuration for the tickets app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "django_confdesk.tickets"
    label = "confdesk_tickets"
    verbose_name = "Tickets"
