from django.urls import include, path

from . import admin_views
from .api import availability_api, booking_link_api
from .views import gallery_view, home_view, service_detail_view, services_view


app_name = "studio"

studio_admin_patterns = [
    path("", admin_views.dashboard_view, name="dashboard"),
    path("availability/", admin_views.availability_view, name="availability"),
    path("settings/", admin_views.settings_view, name="settings"),
]
for manager in admin_views.MANAGERS:
    studio_admin_patterns += manager.urls()

urlpatterns = [
    path("", home_view, name="home"),
    path("services/", services_view, name="services"),
    path("services/<slug:slug>/", service_detail_view, name="service_detail"),
    path("gallery/", gallery_view, name="gallery"),
    path("api/availability/", availability_api, name="availability_api"),
    path("api/booking-link/", booking_link_api, name="booking_link_api"),
    path("studio/", include(studio_admin_patterns)),
]
