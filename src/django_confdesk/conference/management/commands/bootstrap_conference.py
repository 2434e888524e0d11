"""Management command to bootstrap a conference from a TOML configuration file."""

from typing import Any

from django.core.management.base import BaseCommand, CommandError, CommandParser
from django.db import transaction

from django_confdesk.conference.models import Conference
from django_confdesk.config_loader import load_conference_config
from django_confdesk.sponsors.models import SponsorTier
from django_confdesk.tickets.models import SalesMilestone, SalesTarget

# Mapping from TOML short field names to Django model field names.
_CONFERENCE_FIELD_MAP: dict[str, str] = {
    "name": "name",
    "start": "start_date",
    "end": "end_date",
    "timezone": "timezone",
    "organizer": "organizer",
    "city": "city",
    "domain": "domain",
    "website_url": "website_url",
    "prospectus_url": "prospectus_url",
    "ticket_capacity": "ticket_capacity",
    "checkin_customer_id": "checkin_customer_id",
    "checkin_event_id": "checkin_event_id",
    "sales_notification_channel": "sales_notification_channel",
    "contract_currency": "contract_currency",
}

_SALES_TARGET_FIELD_MAP: dict[str, str] = {
    "enabled": "enabled",
    "sales_start": "sales_start_date",
    "curve": "target_curve",
}

_TIER_FIELD_MAP: dict[str, str] = {
    "title": "title",
    "tagline": "tagline",
    "tier_type": "tier_type",
    "price": "price",
    "currency": "currency",
    "sold_out": "sold_out",
}


def _map_fields(data: dict[str, Any], field_map: dict[str, str]) -> dict[str, Any]:
    """Translate TOML keys to model field names, skipping absent keys.

    Args:
        data: A table from the config file.
        field_map: Mapping of config key to model field name.

    Returns:
        Dict keyed by model field name.
    """
    return {model_field: data[config_key] for config_key, model_field in field_map.items() if config_key in data}


class Command(BaseCommand):
    """Bootstrap a conference from a TOML configuration file.

    Creates (or with ``--update`` updates) the ``Conference``, its
    ``SalesTarget`` with milestones, and its ``SponsorTier`` records.

    Usage::

        manage.py bootstrap_conference --config conference.toml
        manage.py bootstrap_conference --config conference.toml --update
        manage.py bootstrap_conference --config conference.toml --dry-run
    """

    help = "Create or update a conference, its sales target and sponsor tiers from a TOML config file."

    def add_arguments(self, parser: CommandParser) -> None:
        """Define the command-line arguments accepted by this command.

        Args:
            parser: The argument parser to configure.
        """
        parser.add_argument(
            "--config",
            required=True,
            help="Path to the conference TOML configuration file.",
        )
        parser.add_argument(
            "--update",
            action="store_true",
            default=False,
            help="Update an existing conference instead of failing on duplicate slug.",
        )
        parser.add_argument(
            "--dry-run",
            action="store_true",
            default=False,
            help="Validate the config and print what would be created without saving.",
        )

    def handle(self, *args: Any, **options: Any) -> None:
        """Execute the bootstrap command."""
        update: bool = options["update"]
        verbosity: int = options["verbosity"]

        try:
            conf = load_conference_config(options["config"])
        except (FileNotFoundError, TypeError, ValueError) as exc:
            raise CommandError(str(exc)) from exc

        tiers_data: list[dict[str, Any]] = conf.get("sponsor_tiers", [])
        target_data: dict[str, Any] | None = conf.get("sales_target")

        if options["dry_run"]:
            self._print_dry_run(conf, target_data, tiers_data)
            return

        with transaction.atomic():
            conference = self._bootstrap_conference(conf, update=update)
            milestones = self._bootstrap_sales_target(conference, target_data)
            created_tiers, updated_tiers = self._bootstrap_tiers(conference, tiers_data, update=update)

        self._print_summary(conference, milestones, created_tiers, updated_tiers, verbosity)

    def _bootstrap_conference(self, conf: dict[str, Any], *, update: bool) -> Conference:
        """Create or update the conference matched by slug.

        Raises:
            CommandError: If the conference exists and ``update`` is ``False``.
        """
        slug = conf["slug"]
        fields = _map_fields(conf, _CONFERENCE_FIELD_MAP)

        existing = Conference.objects.filter(slug=slug).first()
        if existing and not update:
            raise CommandError(f"Conference with slug '{slug}' already exists. Use --update to update it.")

        if existing:
            for attr, value in fields.items():
                setattr(existing, attr, value)
            existing.save()
            self.stdout.write(self.style.SUCCESS(f"  Updated conference: {existing.name}"))
            return existing

        conference = Conference.objects.create(slug=slug, **fields)
        self.stdout.write(self.style.SUCCESS(f"  Created conference: {conference.name}"))
        return conference

    def _bootstrap_sales_target(self, conference: Conference, target_data: dict[str, Any] | None) -> int:
        """Create or replace the sales target and its milestones.

        Milestones are replaced wholesale so the database mirrors the file.

        Returns:
            The number of milestones written.
        """
        if target_data is None:
            return 0

        fields = _map_fields(target_data, _SALES_TARGET_FIELD_MAP)
        fields.setdefault("enabled", True)
        target, created = SalesTarget.objects.update_or_create(conference=conference, defaults=fields)
        target.milestones.all().delete()
        SalesMilestone.objects.bulk_create(
            SalesMilestone(
                sales_target=target,
                date=milestone["date"],
                target_percentage=float(milestone["target_percentage"]),
                label=milestone["label"],
            )
            for milestone in target_data["milestones"]
        )
        verb = "Created" if created else "Updated"
        self.stdout.write(
            self.style.SUCCESS(f"  {verb} sales target: {target.target_curve} from {target.sales_start_date}")
        )
        return len(target_data["milestones"])

    def _bootstrap_tiers(
        self,
        conference: Conference,
        tiers_data: list[dict[str, Any]],
        *,
        update: bool,
    ) -> tuple[list[SponsorTier], list[SponsorTier]]:
        """Create or update sponsor tiers matched by conference and slug.

        Returns:
            A tuple of (created_tiers, updated_tiers).
        """
        created: list[SponsorTier] = []
        updated: list[SponsorTier] = []

        for position, tier_data in enumerate(tiers_data):
            slug = tier_data["slug"]
            fields = _map_fields(tier_data, _TIER_FIELD_MAP)
            fields["order"] = position

            existing = SponsorTier.objects.filter(conference=conference, slug=slug).first()
            if existing and update:
                for attr, value in fields.items():
                    setattr(existing, attr, value)
                existing.save()
                self.stdout.write(self.style.SUCCESS(f"  Updated sponsor tier: {existing.title}"))
                updated.append(existing)
            elif existing:
                self.stdout.write(
                    self.style.WARNING(f"  Sponsor tier '{slug}' already exists for this conference, skipping.")
                )
            else:
                tier = SponsorTier.objects.create(conference=conference, slug=slug, **fields)
                self.stdout.write(self.style.SUCCESS(f"  Created sponsor tier: {tier.title}"))
                created.append(tier)

        return created, updated

    def _print_dry_run(
        self,
        conf: dict[str, Any],
        target_data: dict[str, Any] | None,
        tiers_data: list[dict[str, Any]],
    ) -> None:
        """Print a preview of what would be created without touching the database."""
        self.stdout.write(self.style.MIGRATE_HEADING("\n[DRY RUN] No database changes will be made.\n"))
        self.stdout.write(self.style.MIGRATE_HEADING("Conference:"))
        self.stdout.write(f"  Name:       {conf['name']}")
        self.stdout.write(f"  Slug:       {conf['slug']}")
        self.stdout.write(f"  Dates:      {conf['start']} -- {conf['end']}")
        self.stdout.write(f"  Capacity:   {conf.get('ticket_capacity', 0)}")
        if conf.get("domain"):
            self.stdout.write(f"  Domain:     {conf['domain']}")

        if target_data is not None:
            self.stdout.write(self.style.MIGRATE_HEADING("\nSales target:"))
            self.stdout.write(f"  Curve:      {target_data['curve']} from {target_data['sales_start']}")
            for milestone in target_data["milestones"]:
                self.stdout.write(
                    f"  - {milestone['date']} {milestone['target_percentage']}% {milestone['label']}"
                )

        if tiers_data:
            self.stdout.write(self.style.MIGRATE_HEADING(f"\nSponsor tiers ({len(tiers_data)}):"))
            for idx, tier in enumerate(tiers_data):
                price = tier.get("price", 0)
                currency = tier.get("currency", "NOK")
                self.stdout.write(f"  [{idx}] {tier['title']} ({tier['slug']}) {price} {currency}")

        self.stdout.write("")

    def _print_summary(
        self,
        conference: Conference,
        milestones: int,
        created_tiers: list[SponsorTier],
        updated_tiers: list[SponsorTier],
        verbosity: int,
    ) -> None:
        """Print what the bootstrap wrote."""
        self.stdout.write("")
        self.stdout.write(self.style.MIGRATE_HEADING("Bootstrap summary:"))
        self.stdout.write(f"  Conference:             {conference.name} ({conference.slug})")
        self.stdout.write(f"  Milestones:             {milestones}")
        self.stdout.write(f"  Sponsor tiers created:  {len(created_tiers)}")
        self.stdout.write(f"  Sponsor tiers updated:  {len(updated_tiers)}")

        if verbosity >= 2:
            for tier in created_tiers:
                self.stdout.write(f"    + {tier.title} ({tier.slug})")
            for tier in updated_tiers:
                self.stdout.write(f"    ~ {tier.title} ({tier.slug})")

        self.stdout.write(self.style.SUCCESS("\nDone."))
