from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/", include("donations.urls")),
]

handler404 = "donations.views.not_found"
handler500 = "donations.views.server_error"
