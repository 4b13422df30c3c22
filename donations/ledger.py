"""
Write and aggregate paths of the donation ledger.

Donors carry cached totals (``total_donated``, ``donation_count``,
``last_donation``). Every submitted donation bumps them straight away,
whatever its status; status changes afterwards never touch them.
The public stats, on the other hand, only count completed donations.
"""
import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, List

from django.db import transaction
from django.db.models import BigIntegerField, Count, DateTimeField, F, Max, Sum, Value
from django.db.models.functions import Coalesce, Greatest
from django.utils import timezone

from .models import Donation, Donor, PaymentMethod

logger = logging.getLogger(__name__)


def record_donation(data: Dict) -> Donation:
    """
    Store a donation and fold it into its donor's totals in one transaction.

    ``data`` is a cleaned DonationForm. Without ``donor_id`` a donor is
    created from the ``donor_*`` fields; an unknown ``donor_id`` raises
    Donor.DoesNotExist before anything is written.
    """
    donor_id = data.get("donor_id")
    if donor_id and not Donor.objects.filter(pk=donor_id).exists():
        raise Donor.DoesNotExist(f"Donor {donor_id} does not exist")

    is_anonymous = bool(data.get("is_anonymous"))

    with transaction.atomic():
        if not donor_id:
            donor = Donor.objects.create(
                name=data["donor_name"],
                email=data.get("donor_email") or None,
                phone=data.get("donor_phone") or None,
                country=data.get("donor_country") or None,
                is_anonymous=is_anonymous,
            )
            donor_id = donor.pk

        donation = Donation.objects.create(
            donor_id=donor_id,
            amount=data["amount"],
            currency=data.get("currency") or "USD",
            payment_method=data["payment_method"],
            message=data.get("message") or None,
            is_anonymous=is_anonymous,
            status=data.get("status") or Donation.PENDING,
            transaction_id=data.get("transaction_id") or None,
        )

        _add_to_donor_totals(donor_id, donation.amount, donation.date)

    logger.info("Recorded donation %s (%s %s) for donor %s",
                donation.pk, donation.amount, donation.currency, donor_id)
    return donation


def _add_to_donor_totals(donor_id, amount: int, donated_at) -> None:
    # Increment happens in SQL so concurrent donations can't lose an update;
    # last_donation only ever moves forward, so it stays equal to Max(date)
    donated_at_value = Value(donated_at, output_field=DateTimeField())
    Donor.objects.filter(pk=donor_id).update(
        total_donated=F("total_donated") + amount,
        donation_count=F("donation_count") + 1,
        last_donation=Greatest(Coalesce("last_donation", donated_at_value), donated_at_value),
        updated_at=timezone.now(),
    )


def update_donation_status(donation_id, status: str) -> Donation:
    """Change only the status column. Donor totals are left as they are."""
    updated = Donation.objects.filter(pk=donation_id).update(status=status)
    if not updated:
        raise Donation.DoesNotExist(f"Donation {donation_id} does not exist")
    return Donation.objects.get(pk=donation_id)


def donation_stats() -> Dict[str, int]:
    total = (
        Donation.objects.filter(status=Donation.COMPLETED)
        .aggregate(s=Sum("amount"))["s"] or 0
    )
    donors = Donor.objects.count()
    active_methods = PaymentMethod.objects.filter(is_active=True).count()

    average = 0
    if donors > 0:
        average = int((Decimal(total) / Decimal(donors)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))

    return {
        "total_donations": total,
        "total_donors": donors,
        "active_methods": active_methods,
        "average_donation": average,
    }


def recalculate_donor_totals(dry_run: bool = False) -> List[Dict]:
    """
    Rebuild cached donor totals from the donation rows and return the
    donors that had drifted, with their old and new figures.
    Counts every donation regardless of status, like the write path does.
    """
    drifted = []
    donors = Donor.objects.annotate(
        actual_total=Coalesce(Sum("donations__amount"), 0, output_field=BigIntegerField()),
        actual_count=Count("donations"),
        actual_last=Max("donations__date"),
    ).order_by("created_at")

    for donor in donors:
        cached = (donor.total_donated, donor.donation_count, donor.last_donation)
        if cached == (donor.actual_total, donor.actual_count, donor.actual_last):
            continue

        change = {
            "donor_id": str(donor.pk),
            "name": donor.name,
            "old_total": donor.total_donated,
            "old_count": donor.donation_count,
            "new_total": donor.actual_total,
            "new_count": donor.actual_count,
        }

        if not dry_run:
            with transaction.atomic():
                locked = Donor.objects.select_for_update().get(pk=donor.pk)
                agg = locked.donations.aggregate(
                    total=Coalesce(Sum("amount"), 0, output_field=BigIntegerField()),
                    count=Count("id"),
                    last=Max("date"),
                )
                Donor.objects.filter(pk=locked.pk).update(
                    total_donated=agg["total"],
                    donation_count=agg["count"],
                    last_donation=agg["last"],
                    updated_at=timezone.now(),
                )
            change["new_total"], change["new_count"] = agg["total"], agg["count"]
            logger.warning("Donor %s totals drifted: %s/%s -> %s/%s", donor.pk,
                           change["old_total"], change["old_count"],
                           change["new_total"], change["new_count"])

        drifted.append(change)

    return drifted
