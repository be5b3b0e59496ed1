from __future__ import annotations

from datetime import date

import pytest
from django.contrib.messages import get_messages
from django.core.files.uploadedfile import SimpleUploadedFile
from django.urls import reverse

from studio import storage
from studio.admin_views import OUTSIDE_MONTH_MESSAGE
from studio.availability import AvailabilityDraft
from studio.models import BookedDay, SiteSettings


pytestmark = pytest.mark.django_db


def _messages(response) -> list[str]:
    return [str(m) for m in get_messages(response.wsgi_request)]


class TestGuard:
    def test_anonymous_is_sent_to_login(self, client):
        response = client.get(reverse("studio:dashboard"))
        assert response.status_code == 302
        assert response["Location"].startswith(reverse("accounts:login"))

    def test_non_admin_is_sent_to_login_with_reason(self, visitor_client):
        response = visitor_client.get(reverse("studio:availability"))
        assert response.status_code == 302
        assert "This account does not have admin access." in _messages(response)

    def test_non_admin_cannot_post_to_managers(self, visitor_client):
        response = visitor_client.post(reverse("studio:types_list"), {"name": "Sneaky"})
        assert response.status_code == 302

    def test_admin_sees_dashboard(self, staff_client):
        response = staff_client.get(reverse("studio:dashboard"))
        assert response.status_code == 200
        assert response.context["counts"]["booked_days"] == 0


class TestLogin:
    def test_non_admin_credentials_are_refused(self, client, regular_user):
        response = client.post(reverse("accounts:login"), {"username": "visitor", "password": "pw-12345"})
        assert response.status_code == 200
        assert "This account does not have admin access." in _messages(response)
        assert "_auth_user_id" not in client.session

    def test_admin_login_lands_on_dashboard(self, client, staff_user):
        response = client.post(reverse("accounts:login"), {"username": "studio-admin", "password": "pw-12345"})
        assert response.status_code == 302
        assert response["Location"] == "/studio/"


class TestAvailabilityScreen:
    url = "/studio/availability/"

    def test_month_is_loaded_into_session(self, staff_client):
        BookedDay.objects.create(date=date(2024, 1, 5))

        response = staff_client.get(self.url, {"month": "2024-01"})

        assert response.status_code == 200
        assert response.context["booked_count"] == 1
        assert not response.context["is_dirty"]
        draft = AvailabilityDraft.from_session(staff_client.session)
        assert draft.server_dates == ["2024-01-05"]

    def test_toggle_then_save_writes_diff(self, staff_client):
        BookedDay.objects.create(date=date(2024, 1, 5))
        staff_client.get(self.url, {"month": "2024-01"})

        staff_client.post(self.url, {"month": "2024-01", "action": "toggle", "date": "2024-01-05"})
        staff_client.post(self.url, {"month": "2024-01", "action": "toggle", "date": "2024-01-07"})
        response = staff_client.get(self.url, {"month": "2024-01"})
        assert response.context["is_dirty"]
        assert response.context["pending_added"] == ["2024-01-07"]
        assert response.context["pending_removed"] == ["2024-01-05"]
        assert BookedDay.objects.count() == 1

        response = staff_client.post(self.url, {"month": "2024-01", "action": "save"})

        assert "Availability updated successfully." in _messages(response)
        assert list(BookedDay.objects.values_list("date", flat=True)) == [date(2024, 1, 7)]

    def test_save_without_changes(self, staff_client):
        response = staff_client.post(self.url, {"month": "2024-01", "action": "save"})
        assert "No changes to save." in _messages(response)

    def test_discard_restores_month(self, staff_client):
        staff_client.post(self.url, {"month": "2024-01", "action": "toggle", "date": "2024-01-09"})

        staff_client.post(self.url, {"month": "2024-01", "action": "discard"})

        response = staff_client.get(self.url, {"month": "2024-01"})
        assert not response.context["is_dirty"]
        assert not BookedDay.objects.exists()

    def test_returning_to_a_month_refetches_saved_dates(self, staff_client):
        staff_client.get(self.url, {"month": "2024-01"})
        BookedDay.objects.create(date=date(2024, 1, 15))
        staff_client.get(self.url, {"month": "2024-02"})

        response = staff_client.get(self.url, {"month": "2024-01"})

        draft = AvailabilityDraft.from_session(staff_client.session)
        assert "2024-01-15" in draft.server_dates
        assert response.context["month_dirty"]

    def test_unsaved_edits_survive_month_navigation(self, staff_client):
        staff_client.get(self.url, {"month": "2024-01"})
        staff_client.post(self.url, {"month": "2024-01", "action": "toggle", "date": "2024-01-07"})
        staff_client.get(self.url, {"month": "2024-02"})

        response = staff_client.get(self.url, {"month": "2024-01"})

        assert response.context["pending_added"] == ["2024-01-07"]
        assert response.context["booked_count"] == 1

    def test_toggle_outside_displayed_month_is_refused(self, staff_client):
        response = staff_client.post(self.url, {"month": "2024-01", "action": "toggle", "date": "2024-02-03"})

        assert OUTSIDE_MONTH_MESSAGE in _messages(response)
        draft = AvailabilityDraft.from_session(staff_client.session)
        assert "2024-02-03" not in draft.local_dates

    def test_invalid_date_is_reported(self, staff_client):
        response = staff_client.post(self.url, {"month": "2024-01", "action": "toggle", "date": "nope"})
        assert "Invalid date." in _messages(response)


class TestSettingsScreen:
    def test_update_with_logo_upload(self, staff_client):
        response = staff_client.post(
            reverse("studio:settings"),
            {
                "brand_name": "Raygraphy",
                "whatsapp_number": "60123456789",
                "hero_title": "  ",
                "logo_file": SimpleUploadedFile("logo.svg", b"<svg/>", content_type="image/svg+xml"),
            },
        )

        assert response.status_code == 302
        obj = SiteSettings.load()
        assert obj.whatsapp_number == "60123456789"
        assert obj.hero_title is None
        assert obj.logo_url.startswith("/media/site-assets/logo/logo-")
        path = storage.path_from_url(storage.SITE_ASSETS_BUCKET, obj.logo_url)
        assert storage.get_bucket(storage.SITE_ASSETS_BUCKET).exists(path)
