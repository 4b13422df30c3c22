import logging

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.db import DatabaseError
from django.db.models import F
from django.forms.models import model_to_dict
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

from . import ledger
from .auth import admin_required, issue_token
from .forms import DonationForm, DonationStatusForm, PaymentMethodForm
from .models import Donation, Donor, PaymentMethod
from .utils import (
    error_message,
    error_response,
    format_errors,
    json_response,
    paginate,
    read_json_body,
)

logger = logging.getLogger(__name__)


@method_decorator(csrf_exempt, name="dispatch")
class ApiView(View):
    """
    JSON endpoint base. Database failures become a 500 with the
    per-method message from ``failure_messages``.
    """
    failure_messages = {}

    def dispatch(self, request, *args, **kwargs):
        try:
            return super().dispatch(request, *args, **kwargs)
        except DatabaseError:
            logger.exception("%s %s failed", request.method, request.path)
            message = self.failure_messages.get(request.method.lower(), "Internal server error")
            return error_response(message, 500)


def not_found(request, exception=None):
    return error_response("Not found", 404)


def server_error(request):
    return error_response("Internal server error", 500)


# ---------- auth ----------
class LoginView(ApiView):
    http_method_names = ["post"]
    failure_messages = {"post": "Internal server error."}

    def post(self, request, *args, **kwargs):
        try:
            payload = read_json_body(request)
        except ValueError as e:
            return error_response(str(e), 400)

        email = payload.get("email")
        password = payload.get("password")
        if not email or not password:
            return error_response("Email and password are required.", 400)

        user = (
            get_user_model().objects
            .filter(email__iexact=email, is_active=True)
            .order_by("pk")
            .first()
        )
        if user is None or not user.check_password(password):
            return error_response("Invalid email or password.", 401)

        return json_response({
            "token": issue_token(user),
            "user": {
                "id": user.pk,
                "email": user.email,
                "username": user.get_username(),
                "is_staff": user.is_staff,
            },
        })


# ---------- payment methods ----------
class PaymentMethodListView(ApiView):
    """Public list: only methods switched on for the donation page."""
    http_method_names = ["get"]
    failure_messages = {"get": "Failed to fetch payment methods"}

    def get_queryset(self):
        return PaymentMethod.objects.filter(is_active=True).order_by("-created_at")

    def get(self, request, *args, **kwargs):
        return json_response([m.as_dict() for m in self.get_queryset()])


@method_decorator(admin_required, name="dispatch")
class AdminPaymentMethodListView(PaymentMethodListView):
    http_method_names = ["get", "post"]
    failure_messages = {
        "get": "Failed to fetch payment methods",
        "post": "Failed to create payment method",
    }

    def get_queryset(self):
        return PaymentMethod.objects.order_by("-created_at")

    def post(self, request, *args, **kwargs):
        try:
            payload = read_json_body(request)
        except ValueError as e:
            return error_response(str(e), 400)

        form = PaymentMethodForm({"is_active": True, **payload})
        if not form.is_valid():
            return error_response(format_errors(form.errors), 400)

        method = form.save()
        return json_response(method.as_dict(), status=201, message="Payment method created successfully")


@method_decorator(admin_required, name="dispatch")
class AdminPaymentMethodDetailView(ApiView):
    http_method_names = ["put", "delete"]
    failure_messages = {
        "put": "Failed to update payment method",
        "delete": "Failed to delete payment method",
    }

    def put(self, request, pk, *args, **kwargs):
        try:
            payload = read_json_body(request)
        except ValueError as e:
            return error_response(str(e), 400)

        method = PaymentMethod.objects.filter(pk=pk).first()
        if method is None:
            return error_response("Payment method not found", 404)

        # partial update: anything not in the body keeps its stored value
        current = model_to_dict(method, fields=PaymentMethodForm._meta.fields)
        form = PaymentMethodForm({**current, **payload}, instance=method)
        if not form.is_valid():
            return error_response(format_errors(form.errors), 400)

        method = form.save()
        return json_response(method.as_dict(), message="Payment method updated successfully")

    def delete(self, request, pk, *args, **kwargs):
        deleted, _ = PaymentMethod.objects.filter(pk=pk).delete()
        if not deleted:
            return error_response("Payment method not found", 404)
        return json_response(None, message="Payment method deleted successfully")


# ---------- donors ----------
class DonorListView(ApiView):
    http_method_names = ["get"]
    failure_messages = {"get": "Failed to fetch donors"}

    def get(self, request, *args, **kwargs):
        try:
            donors = paginate(Donor.objects.order_by("-created_at"), request.GET)
        except ValidationError as e:
            return error_response(error_message(e), 400)
        return json_response([d.as_dict() for d in donors])


@method_decorator(admin_required, name="dispatch")
class AdminDonorListView(DonorListView):
    pass


@method_decorator(admin_required, name="dispatch")
class AdminDonorDetailView(ApiView):
    http_method_names = ["get"]
    failure_messages = {"get": "Failed to fetch donor"}

    def get(self, request, pk, *args, **kwargs):
        donor = Donor.objects.filter(pk=pk).first()
        if donor is None:
            return error_response("Donor not found", 404)

        data = donor.as_dict()
        data["donations"] = [d.as_dict() for d in donor.donations.order_by("-date")]
        return json_response(data)


# ---------- donations ----------
class DonationCreateView(ApiView):
    http_method_names = ["post"]
    failure_messages = {"post": "Failed to create donation"}

    def post(self, request, *args, **kwargs):
        try:
            payload = read_json_body(request)
        except ValueError as e:
            return error_response(str(e), 400)

        form = DonationForm(payload)
        if not form.is_valid():
            return error_response(format_errors(form.errors), 400)

        try:
            donation = ledger.record_donation(form.cleaned_data)
        except Donor.DoesNotExist:
            return error_response("Donor not found", 404)

        return json_response(donation.as_dict(), status=201, message="Donation created successfully")


@method_decorator(admin_required, name="dispatch")
class AdminDonationListView(ApiView):
    http_method_names = ["get"]
    failure_messages = {"get": "Failed to fetch donations"}

    def get(self, request, *args, **kwargs):
        qs = Donation.objects.annotate(donor_name=F("donor__name")).order_by("-date")
        try:
            donations = paginate(qs, request.GET)
        except ValidationError as e:
            return error_response(error_message(e), 400)
        return json_response([d.as_dict() for d in donations])


@method_decorator(admin_required, name="dispatch")
class AdminDonationStatusView(ApiView):
    http_method_names = ["put"]
    failure_messages = {"put": "Failed to update donation status"}

    def put(self, request, pk, *args, **kwargs):
        try:
            payload = read_json_body(request)
        except ValueError as e:
            return error_response(str(e), 400)

        form = DonationStatusForm(payload)
        if not form.is_valid():
            return error_response(format_errors(form.errors), 400)

        try:
            donation = ledger.update_donation_status(pk, form.cleaned_data["status"])
        except Donation.DoesNotExist:
            return error_response("Donation not found", 404)

        return json_response(donation.as_dict(), message="Donation status updated successfully")


# ---------- stats ----------
class DonationStatsView(ApiView):
    http_method_names = ["get"]
    failure_messages = {"get": "Failed to fetch donation stats"}

    def get(self, request, *args, **kwargs):
        stats = ledger.donation_stats()
        return json_response({
            "totalDonations": stats["total_donations"],
            "totalDonors": stats["total_donors"],
            "activeMethods": stats["active_methods"],
            "averageDonation": stats["average_donation"],
        })


@method_decorator(admin_required, name="dispatch")
class AdminDonationStatsView(DonationStatsView):
    pass
