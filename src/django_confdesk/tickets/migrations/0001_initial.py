import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("confdesk_conference", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="SalesTarget",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("enabled", models.BooleanField(default=False)),
                ("sales_start_date", models.DateField(blank=True, null=True)),
                (
                    "target_curve",
                    models.CharField(
                        choices=[
                            ("linear", "Linear"),
                            ("s_curve", "S-Curve"),
                            ("early_push", "Early Push"),
                            ("late_push", "Late Push"),
                        ],
                        default="linear",
                        max_length=20,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "conference",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="sales_target",
                        to="confdesk_conference.conference",
                    ),
                ),
            ],
        ),
        migrations.CreateModel(
            name="SalesMilestone",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("date", models.DateField()),
                (
                    "target_percentage",
                    models.FloatField(
                        validators=[
                            django.core.validators.MinValueValidator(0),
                            django.core.validators.MaxValueValidator(100),
                        ]
                    ),
                ),
                ("label", models.CharField(max_length=200)),
                (
                    "sales_target",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="milestones",
                        to="confdesk_tickets.salestarget",
                    ),
                ),
            ],
            options={
                "ordering": ["date"],
            },
        ),
    ]
