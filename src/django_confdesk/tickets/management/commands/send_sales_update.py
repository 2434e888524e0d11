"""Management command to post the ticket sales update to Slack.

Usage::

    # Send the update for one conference
    manage.py send_sales_update --conference javazone-2026

    # Send the update for every active conference
    manage.py send_sales_update --all

    # Post to Slack even when development mode is enabled
    manage.py send_sales_update --conference javazone-2026 --force-slack
"""

from typing import TYPE_CHECKING

from django.core.management.base import BaseCommand, CommandError

from django_confdesk.conference.models import Conference
from django_confdesk.features import is_feature_enabled
from django_confdesk.tickets.services.sales_update import SalesUpdateError, SalesUpdateService

if TYPE_CHECKING:
    import argparse


class Command(BaseCommand):
    """Post the periodic ticket sales update to Slack."""

    help = "Post the ticket sales update for one or all active conferences to Slack"

    def add_arguments(self, parser: "argparse.ArgumentParser") -> None:
        """Register command-line arguments.

        Args:
            parser: The argument parser to add arguments to.
        """
        parser.add_argument(
            "--conference",
            help="Conference slug to report on.",
        )
        parser.add_argument(
            "--all",
            action="store_true",
            default=False,
            dest="all_conferences",
            help="Report on every active conference.",
        )
        parser.add_argument(
            "--force-slack",
            action="store_true",
            default=False,
            help="Post to Slack even when Slack development mode is enabled.",
        )

    def handle(self, **options: object) -> None:
        """Resolve the conferences and run the sales update for each."""
        if not is_feature_enabled("sales_update"):
            msg = "The sales_update feature is disabled"
            raise CommandError(msg)

        conference_slug = options.get("conference")
        all_conferences = bool(options["all_conferences"])
        force_slack = bool(options["force_slack"])

        if conference_slug and all_conferences:
            msg = "Use either --conference or --all, not both"
            raise CommandError(msg)

        if all_conferences:
            conferences = list(Conference.objects.filter(is_active=True))
        elif conference_slug:
            try:
                conferences = [Conference.objects.get(slug=str(conference_slug))]
            except Conference.DoesNotExist:
                msg = f"Conference with slug '{conference_slug}' not found"
                raise CommandError(msg) from None
        else:
            msg = "Specify --conference <slug> or --all"
            raise CommandError(msg)

        failures = 0
        for conference in conferences:
            try:
                result = SalesUpdateService(conference).run(force_slack=force_slack)
            except (SalesUpdateError, RuntimeError) as exc:
                if not all_conferences:
                    raise CommandError(str(exc)) from exc
                failures += 1
                self.stderr.write(self.style.ERROR(f"{conference.slug}: {exc}"))
                continue

            if result.skipped:
                self.stdout.write(self.style.WARNING(f"{conference.slug}: conference has ended, skipped"))
            else:
                stats = result.statistics
                self.stdout.write(
                    self.style.SUCCESS(
                        f"{conference.slug}: sent sales update "
                        f"({stats.total_paid_tickets} paid tickets, {stats.total_revenue} revenue)"
                    )
                )

        if failures:
            msg = f"Sales update failed for {failures} of {len(conferences)} conferences"
            raise CommandError(msg)
