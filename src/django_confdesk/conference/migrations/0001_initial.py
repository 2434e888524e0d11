import encrypted_fields.fields
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Conference",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=200)),
                ("slug", models.SlugField(max_length=200, unique=True)),
                ("organizer", models.CharField(blank=True, default="", max_length=200)),
                ("city", models.CharField(blank=True, default="", max_length=200)),
                ("start_date", models.DateField()),
                ("end_date", models.DateField()),
                ("timezone", models.CharField(default="Europe/Oslo", max_length=100)),
                (
                    "domain",
                    models.CharField(
                        blank=True,
                        default="",
                        help_text="Primary domain without scheme, e.g. cloudnativeday.no.",
                        max_length=200,
                    ),
                ),
                ("website_url", models.URLField(blank=True, default="")),
                ("prospectus_url", models.URLField(blank=True, default="")),
                (
                    "ticket_capacity",
                    models.PositiveIntegerField(
                        default=0,
                        help_text="Total ticket capacity used for sales targets. 0 means not configured.",
                    ),
                ),
                ("checkin_customer_id", models.PositiveIntegerField(blank=True, null=True)),
                ("checkin_event_id", models.PositiveIntegerField(blank=True, null=True)),
                (
                    "checkin_api_secret",
                    encrypted_fields.fields.EncryptedCharField(blank=True, default=None, max_length=200, null=True),
                ),
                (
                    "sales_notification_channel",
                    models.CharField(
                        blank=True,
                        default="",
                        help_text="Slack channel for weekly sales updates. Falls back to the configured default.",
                        max_length=100,
                    ),
                ),
                ("contract_currency", models.CharField(default="NOK", max_length=3)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["-start_date"],
            },
        ),
    ]
