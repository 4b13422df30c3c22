from django import forms
from django.conf import settings

from .models import Donation, PaymentMethod


class DonationForm(forms.Form):
    """Body of a public donation submission."""

    donor_id = forms.UUIDField(required=False)
    donor_name = forms.CharField(max_length=255, required=False)
    donor_email = forms.EmailField(max_length=255, required=False)
    donor_phone = forms.CharField(max_length=20, required=False)
    donor_country = forms.CharField(max_length=100, required=False)
    # upper bound is the PositiveIntegerField column range
    amount = forms.IntegerField(min_value=1, max_value=2147483647)
    currency = forms.CharField(max_length=10, required=False)
    payment_method = forms.CharField(max_length=100)
    message = forms.CharField(required=False)
    is_anonymous = forms.BooleanField(required=False)
    status = forms.ChoiceField(choices=Donation.STATUS_CHOICES, required=False)
    transaction_id = forms.CharField(max_length=255, required=False)

    def clean_currency(self):
        currency = self.cleaned_data.get("currency") or settings.DONATION_DEFAULT_CURRENCY
        return currency.upper()

    def clean_status(self):
        return self.cleaned_data.get("status") or Donation.PENDING

    def clean(self):
        cleaned = super().clean()
        if not cleaned.get("donor_id") and not cleaned.get("donor_name"):
            self.add_error("donor_name", "A donor name is required when no donor_id is given.")
        return cleaned


class DonationStatusForm(forms.Form):
    status = forms.ChoiceField(choices=Donation.STATUS_CHOICES)


class PaymentMethodForm(forms.ModelForm):
    class Meta:
        model = PaymentMethod
        fields = ["name", "type", "details", "qr_code", "is_active"]
