import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("confdesk_conference", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Sponsor",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=200)),
                ("slug", models.SlugField(blank=True, max_length=200, unique=True)),
                ("website_url", models.URLField(blank=True, default="")),
                ("logo_url", models.URLField(blank=True, default="")),
                (
                    "org_number",
                    models.CharField(
                        blank=True,
                        default="",
                        help_text="Norwegian organization number, if any.",
                        max_length=20,
                    ),
                ),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="SponsorEmailTemplate",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("title", models.CharField(max_length=200)),
                ("slug", models.SlugField(blank=True, max_length=200, unique=True)),
                (
                    "category",
                    models.CharField(
                        choices=[
                            ("cold-outreach", "Cold Outreach"),
                            ("returning-sponsor", "Returning Sponsor"),
                            ("international", "International"),
                            ("local-community", "Local / Community"),
                            ("follow-up", "Follow-up"),
                            ("custom", "Custom"),
                        ],
                        default="custom",
                        max_length=30,
                    ),
                ),
                (
                    "language",
                    models.CharField(
                        choices=[("no", "Norwegian"), ("en", "English")],
                        default="no",
                        max_length=2,
                    ),
                ),
                ("subject", models.CharField(max_length=300)),
                ("body", models.TextField()),
                ("description", models.TextField(blank=True, default="")),
                ("is_default", models.BooleanField(default=False)),
                ("sort_order", models.PositiveIntegerField(default=0)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["sort_order", "title"],
            },
        ),
        migrations.CreateModel(
            name="SponsorTier",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("title", models.CharField(max_length=200)),
                ("slug", models.SlugField(blank=True, max_length=200)),
                ("tagline", models.CharField(blank=True, default="", max_length=300)),
                (
                    "tier_type",
                    models.CharField(
                        choices=[("standard", "Standard"), ("special", "Special")],
                        default="standard",
                        max_length=20,
                    ),
                ),
                ("price", models.DecimalField(decimal_places=2, default=0, max_digits=10)),
                ("currency", models.CharField(default="NOK", max_length=3)),
                ("sold_out", models.BooleanField(default=False)),
                ("order", models.PositiveIntegerField(default=0)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "conference",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="sponsor_tiers",
                        to="confdesk_conference.conference",
                    ),
                ),
            ],
            options={
                "ordering": ["order", "title"],
                "unique_together": {("conference", "slug")},
            },
        ),
        migrations.CreateModel(
            name="SponsorForConference",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("prospect", "Prospect"),
                            ("contacted", "Contacted"),
                            ("negotiating", "Negotiating"),
                            ("closed-won", "Closed Won"),
                            ("closed-lost", "Closed Lost"),
                        ],
                        default="prospect",
                        max_length=20,
                    ),
                ),
                (
                    "contract_status",
                    models.CharField(
                        choices=[
                            ("none", "None"),
                            ("verbal-agreement", "Verbal Agreement"),
                            ("contract-sent", "Contract Sent"),
                            ("contract-signed", "Contract Signed"),
                        ],
                        default="none",
                        max_length=20,
                    ),
                ),
                (
                    "invoice_status",
                    models.CharField(
                        choices=[
                            ("not-sent", "Not Sent"),
                            ("sent", "Sent"),
                            ("paid", "Paid"),
                            ("overdue", "Overdue"),
                            ("cancelled", "Cancelled"),
                        ],
                        default="not-sent",
                        max_length=20,
                    ),
                ),
                ("contract_value", models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                ("contract_currency", models.CharField(blank=True, default="", max_length=3)),
                ("contact_names", models.CharField(blank=True, default="", max_length=300)),
                ("contact_email", models.EmailField(blank=True, default="", max_length=254)),
                ("tags", models.JSONField(blank=True, default=list)),
                ("notes", models.TextField(blank=True, default="")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "assigned_to",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="assigned_sponsor_records",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "conference",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="sponsor_records",
                        to="confdesk_conference.conference",
                    ),
                ),
                (
                    "sponsor",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="conference_records",
                        to="confdesk_sponsors.sponsor",
                    ),
                ),
                (
                    "tier",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="sponsor_records",
                        to="confdesk_sponsors.sponsortier",
                    ),
                ),
            ],
            options={
                "verbose_name": "sponsor for conference",
                "verbose_name_plural": "sponsors for conference",
                "ordering": ["sponsor__name"],
                "unique_together": {("sponsor", "conference")},
            },
        ),
    ]
