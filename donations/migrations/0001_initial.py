import uuid

import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Donor",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=255)),
                ("email", models.EmailField(blank=True, max_length=255, null=True)),
                ("phone", models.CharField(blank=True, max_length=20, null=True)),
                ("country", models.CharField(blank=True, max_length=100, null=True)),
                ("avatar", models.URLField(blank=True, max_length=500, null=True)),
                ("is_anonymous", models.BooleanField(default=False)),
                ("total_donated", models.BigIntegerField(default=0, editable=False)),
                ("donation_count", models.PositiveIntegerField(default=0, editable=False)),
                ("last_donation", models.DateTimeField(blank=True, editable=False, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ("-created_at",),
            },
        ),
        migrations.CreateModel(
            name="PaymentMethod",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=255)),
                ("type", models.CharField(choices=[("bank", "Bank transfer"), ("digital", "Digital wallet"), ("crypto", "Crypto"), ("mobile", "Mobile money")], max_length=50)),
                ("details", models.JSONField(default=dict)),
                ("qr_code", models.CharField(blank=True, max_length=500, null=True)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ("-created_at",),
            },
        ),
        migrations.CreateModel(
            name="Donation",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("amount", models.PositiveIntegerField(help_text="Amount in the smallest currency unit")),
                ("currency", models.CharField(default="USD", max_length=10)),
                ("payment_method", models.CharField(max_length=100)),
                ("message", models.TextField(blank=True, null=True)),
                ("is_anonymous", models.BooleanField(default=False)),
                ("status", models.CharField(choices=[("pending", "Pending"), ("completed", "Completed"), ("failed", "Failed")], default="pending", max_length=20)),
                ("transaction_id", models.CharField(blank=True, max_length=255, null=True)),
                ("date", models.DateTimeField(default=django.utils.timezone.now)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("donor", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="donations", to="donations.donor")),
            ],
            options={
                "ordering": ("-date",),
                "indexes": [
                    models.Index(fields=["status"], name="donation_status_idx"),
                    models.Index(fields=["-date"], name="donation_date_idx"),
                ],
            },
        ),
    ]
