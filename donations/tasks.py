from celery import shared_task
from django.core.management import call_command


@shared_task(name="donations.recalculate_donor_totals_task")
def recalculate_donor_totals_task(dry_run=False):
    """
    Celery task that delegates to our management command.
    Kept thin so it's easy to test/patch.
    """
    return call_command("recalculate_donor_totals", dry_run=dry_run)
