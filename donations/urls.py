from django.urls import path
from . import views

app_name = "donations"

urlpatterns = [
    # public, used by the donation page
    path("payment-methods", views.PaymentMethodListView.as_view(), name="payment-methods"),
    path("donation-stats", views.DonationStatsView.as_view(), name="stats"),
    path("donors", views.DonorListView.as_view(), name="donors"),
    path("donations", views.DonationCreateView.as_view(), name="donate"),
    path("auth/login", views.LoginView.as_view(), name="login"),
    # admin panel
    path("admin/payment-methods", views.AdminPaymentMethodListView.as_view(), name="admin-payment-methods"),
    path("admin/payment-methods/<uuid:pk>", views.AdminPaymentMethodDetailView.as_view(), name="admin-payment-method"),
    path("admin/donors", views.AdminDonorListView.as_view(), name="admin-donors"),
    path("admin/donors/<uuid:pk>", views.AdminDonorDetailView.as_view(), name="admin-donor"),
    path("admin/donations", views.AdminDonationListView.as_view(), name="admin-donations"),
    path("admin/donations/<uuid:pk>/status", views.AdminDonationStatusView.as_view(), name="admin-donation-status"),
    path("admin/donation-stats", views.AdminDonationStatsView.as_view(), name="admin-stats"),
]
