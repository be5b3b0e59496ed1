from __future__ import annotations

from datetime import date

import pytest
from django.core.exceptions import PermissionDenied

from studio.availability import AvailabilityDraft
from studio.models import BookedDay
from studio.services import BookedDayStore, booked_dates_between, delete_booked_days, upsert_booked_days


pytestmark = pytest.mark.django_db


def test_upsert_is_idempotent_per_date(staff_user):
    assert upsert_booked_days(user=staff_user, dates=["2024-01-05", "2024-01-05", "2024-01-06"]) == 2
    upsert_booked_days(user=staff_user, dates=["2024-01-05"], note="Wedding")

    assert BookedDay.objects.count() == 2
    assert BookedDay.objects.get(date=date(2024, 1, 5)).note == "Wedding"


def test_booked_dates_between_is_inclusive_and_sorted(staff_user):
    upsert_booked_days(user=staff_user, dates=["2024-02-01", "2024-01-31", "2024-01-01", "2023-12-31"])

    assert booked_dates_between(date(2024, 1, 1), date(2024, 1, 31)) == ["2024-01-01", "2024-01-31"]


def test_delete_removes_only_given_dates(staff_user):
    upsert_booked_days(user=staff_user, dates=["2024-01-05", "2024-01-06"])

    delete_booked_days(user=staff_user, dates=["2024-01-06", "2024-01-09"])

    assert list(BookedDay.objects.values_list("date", flat=True)) == [date(2024, 1, 5)]


def test_empty_writes_are_noops(staff_user):
    assert upsert_booked_days(user=staff_user, dates=[]) == 0
    assert delete_booked_days(user=staff_user, dates=[]) == 0


def test_non_admin_cannot_write(regular_user):
    with pytest.raises(PermissionDenied):
        upsert_booked_days(user=regular_user, dates=["2024-01-05"])
    with pytest.raises(PermissionDenied):
        delete_booked_days(user=regular_user, dates=["2024-01-05"])
    assert not BookedDay.objects.exists()


def test_draft_round_trip_through_database(staff_user):
    BookedDay.objects.create(date=date(2024, 1, 5))
    BookedDay.objects.create(date=date(2024, 1, 6))
    store = BookedDayStore(staff_user)
    draft = AvailabilityDraft()
    draft.load_month(store, 2024, 1)

    draft.toggle("2024-01-06")
    draft.toggle("2024-01-07")
    draft.save(store)

    assert booked_dates_between(date(2024, 1, 1), date(2024, 1, 31)) == ["2024-01-05", "2024-01-07"]
    assert not draft.is_dirty
