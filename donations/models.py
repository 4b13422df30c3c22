import uuid

from django.db import models
from django.utils import timezone

from .utils import validate_payment_details


class Donor(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    email = models.EmailField(max_length=255, blank=True, null=True)
    phone = models.CharField(max_length=20, blank=True, null=True)
    country = models.CharField(max_length=100, blank=True, null=True)
    avatar = models.URLField(max_length=500, blank=True, null=True)
    is_anonymous = models.BooleanField(default=False)
    # Cached from the donation history, only ever moved by the ledger
    total_donated = models.BigIntegerField(default=0, editable=False)
    donation_count = models.PositiveIntegerField(default=0, editable=False)
    last_donation = models.DateTimeField(blank=True, null=True, editable=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ("-created_at",)

    def __str__(self):
        return self.name or "Anonymous"

    def as_dict(self):
        return {
            "id": str(self.id),
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "country": self.country,
            "avatar": self.avatar,
            "is_anonymous": self.is_anonymous,
            "total_donated": self.total_donated,
            "donation_count": self.donation_count,
            "last_donation": self.last_donation,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }


class Donation(models.Model):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
    STATUS_CHOICES = [
        (PENDING, "Pending"),
        (COMPLETED, "Completed"),
        (FAILED, "Failed"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    donor = models.ForeignKey(Donor, on_delete=models.PROTECT, related_name="donations")
    amount = models.PositiveIntegerField(help_text="Amount in the smallest currency unit")
    currency = models.CharField(max_length=10, default="USD")
    payment_method = models.CharField(max_length=100)
    message = models.TextField(blank=True, null=True)
    is_anonymous = models.BooleanField(default=False)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=PENDING)
    transaction_id = models.CharField(max_length=255, blank=True, null=True)
    date = models.DateTimeField(default=timezone.now)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ("-date",)
        indexes = [
            models.Index(fields=["status"], name="donation_status_idx"),
            models.Index(fields=["-date"], name="donation_date_idx"),
        ]

    def __str__(self):
        return f"{self.amount} {self.currency} ({self.status})"

    def as_dict(self):
        data = {
            "id": str(self.id),
            "donor_id": str(self.donor_id),
            "amount": self.amount,
            "currency": self.currency,
            "payment_method": self.payment_method,
            "message": self.message,
            "is_anonymous": self.is_anonymous,
            "status": self.status,
            "transaction_id": self.transaction_id,
            "date": self.date,
            "created_at": self.created_at,
        }
        # set by AdminDonationListView's annotate()
        if hasattr(self, "donor_name"):
            data["donor_name"] = self.donor_name
        return data


class PaymentMethod(models.Model):
    BANK = "bank"
    DIGITAL = "digital"
    CRYPTO = "crypto"
    MOBILE = "mobile"
    TYPE_CHOICES = [
        (BANK, "Bank transfer"),
        (DIGITAL, "Digital wallet"),
        (CRYPTO, "Crypto"),
        (MOBILE, "Mobile money"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    type = models.CharField(max_length=50, choices=TYPE_CHOICES)
    details = models.JSONField(default=dict)
    qr_code = models.CharField(max_length=500, blank=True, null=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ("-created_at",)

    def __str__(self):
        return self.name

    def clean(self):
        super().clean()
        validate_payment_details(self.type, self.details)

    def as_dict(self):
        return {
            "id": str(self.id),
            "name": self.name,
            "type": self.type,
            "details": self.details,
            "qr_code": self.qr_code,
            "is_active": self.is_active,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }
