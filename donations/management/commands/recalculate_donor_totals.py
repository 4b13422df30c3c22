from django.core.management.base import BaseCommand
from django.utils.timezone import now

from donations.ledger import recalculate_donor_totals


class Command(BaseCommand):
    help = "Rebuild each donor's cached total_donated/donation_count/last_donation from its donations."

    def add_arguments(self, parser):
        parser.add_argument("--dry-run", action="store_true", help="Report drifted donors without writing.")

    def handle(self, *args, **opts):
        dry = opts["dry_run"]
        self.stdout.write(self.style.HTTP_INFO(f"[{now().isoformat()}] Checking donor totals…"))

        drifted = recalculate_donor_totals(dry_run=dry)
        for change in drifted:
            prefix = "[DRY] Would fix" if dry else "Fixed"
            self.stdout.write(self.style.WARNING(
                f"{prefix} {change['name']} ({change['donor_id']}): "
                f"total {change['old_total']} -> {change['new_total']}, "
                f"count {change['old_count']} -> {change['new_count']}"
            ))

        if not drifted:
            self.stdout.write(self.style.SUCCESS("Done. All donor totals match their donations."))
        else:
            self.stdout.write(self.style.SUCCESS(f"Done. drifted={len(drifted)} dry_run={dry}"))
