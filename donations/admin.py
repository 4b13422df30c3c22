from django.contrib import admin
from .models import Donation, Donor, PaymentMethod

# amounts are folded into donor totals on submit; only the status may change afterwards
DONATION_READONLY_FIELDS = (
    "donor", "amount", "currency", "payment_method", "message",
    "is_anonymous", "transaction_id", "date", "created_at",
)


class DonationInline(admin.TabularInline):
    model = Donation
    extra = 0
    fields = ("amount", "currency", "payment_method", "status", "date")
    readonly_fields = ("amount", "currency", "payment_method", "date")
    ordering = ("-date",)
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Donation)
class DonationAdmin(admin.ModelAdmin):
    list_display = ("amount", "currency", "donor", "payment_method", "status", "date")
    list_filter = ("status", "currency")
    list_select_related = ("donor",)
    search_fields = ("donor__name", "donor__email", "transaction_id")
    date_hierarchy = "date"
    ordering = ("-date",)
    readonly_fields = DONATION_READONLY_FIELDS

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(Donor)
class DonorAdmin(admin.ModelAdmin):
    list_display = ("name", "email", "country", "total_donated", "donation_count", "last_donation")
    search_fields = ("name", "email")
    readonly_fields = ("total_donated", "donation_count", "last_donation", "created_at", "updated_at")
    ordering = ("-created_at",)
    inlines = [DonationInline]


@admin.register(PaymentMethod)
class PaymentMethodAdmin(admin.ModelAdmin):
    list_display = ("name", "type", "is_active", "created_at")
    list_filter = ("type", "is_active")
    ordering = ("-created_at",)
