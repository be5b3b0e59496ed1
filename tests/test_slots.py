from __future__ import annotations

from datetime import date, time

import pytest
from django.core.exceptions import PermissionDenied, ValidationError
from django.db import DatabaseError
from django.db.models import QuerySet

from studio import services
from studio.models import AvailabilitySlot, SlotStatus
from studio.services import (
    SLOT_EXISTS_MESSAGE,
    SlotAlreadyExistsError,
    SlotInput,
    StoreError,
    create_availability_slot,
    delete_availability_slot,
    set_slot_status,
    slots_between,
    update_availability_slot,
)


pytestmark = pytest.mark.django_db


def _timed(hour: int, day: date = date(2024, 3, 10)) -> SlotInput:
    return SlotInput(date=day, slot_time=time(hour, 0), is_full_day=False)


def _full_day(day: date = date(2024, 3, 10), status: str = SlotStatus.AVAILABLE) -> SlotInput:
    return SlotInput(date=day, slot_time=None, is_full_day=True, status=status)


class TestCreate:
    def test_timed_and_full_day_slots_coexist(self, staff_user):
        create_availability_slot(user=staff_user, data=_timed(10))
        create_availability_slot(user=staff_user, data=_timed(14))
        create_availability_slot(user=staff_user, data=_full_day())

        assert AvailabilitySlot.objects.count() == 3

    def test_duplicate_timed_slot_is_rejected(self, staff_user):
        create_availability_slot(user=staff_user, data=_timed(10))

        with pytest.raises(SlotAlreadyExistsError) as excinfo:
            create_availability_slot(user=staff_user, data=_timed(10))

        assert str(excinfo.value) == SLOT_EXISTS_MESSAGE

    def test_duplicate_full_day_slot_is_rejected(self, staff_user):
        create_availability_slot(user=staff_user, data=_full_day())

        with pytest.raises(SlotAlreadyExistsError):
            create_availability_slot(user=staff_user, data=_full_day(status=SlotStatus.BOOKED))

    def test_constraint_violation_maps_to_same_error(self, staff_user, monkeypatch):
        create_availability_slot(user=staff_user, data=_timed(10))
        monkeypatch.setattr(services, "_slot_conflicts", lambda data, exclude_id=None: False)

        with pytest.raises(SlotAlreadyExistsError) as excinfo:
            create_availability_slot(user=staff_user, data=_timed(10))

        assert str(excinfo.value) == SLOT_EXISTS_MESSAGE
        assert AvailabilitySlot.objects.count() == 1

    def test_timed_slot_needs_a_time(self, staff_user):
        with pytest.raises(ValidationError):
            create_availability_slot(user=staff_user, data=SlotInput(date=date(2024, 3, 10), slot_time=None, is_full_day=False))

    def test_full_day_slot_drops_time(self, staff_user):
        slot = create_availability_slot(
            user=staff_user,
            data=SlotInput(date=date(2024, 3, 10), slot_time=time(9, 0), is_full_day=True),
        )
        assert slot.slot_time is None
        assert slot.time_label == "Full Day"

    def test_non_admin_is_refused(self, regular_user):
        with pytest.raises(PermissionDenied):
            create_availability_slot(user=regular_user, data=_timed(10))


class TestUpdateAndStatus:
    def test_update_into_existing_slot_is_rejected(self, staff_user):
        create_availability_slot(user=staff_user, data=_timed(10))
        other = create_availability_slot(user=staff_user, data=_timed(11))

        with pytest.raises(SlotAlreadyExistsError):
            update_availability_slot(user=staff_user, slot_id=other.id, data=_timed(10))

    def test_update_keeping_own_time_is_allowed(self, staff_user):
        slot = create_availability_slot(user=staff_user, data=_timed(10))

        updated = update_availability_slot(
            user=staff_user,
            slot_id=slot.id,
            data=SlotInput(date=slot.date, slot_time=time(10, 0), is_full_day=False, note="Outdoor"),
        )

        assert updated.note == "Outdoor"

    def test_set_status(self, staff_user):
        slot = create_availability_slot(user=staff_user, data=_full_day())

        set_slot_status(user=staff_user, slot_id=slot.id, status=SlotStatus.BOOKED)

        slot.refresh_from_db()
        assert slot.blocks_whole_day

    def test_set_status_rejects_unknown_value(self, staff_user):
        slot = create_availability_slot(user=staff_user, data=_full_day())
        with pytest.raises(ValidationError):
            set_slot_status(user=staff_user, slot_id=slot.id, status="pending")

    def test_delete(self, staff_user):
        slot = create_availability_slot(user=staff_user, data=_timed(10))
        delete_availability_slot(user=staff_user, slot_id=slot.id)
        assert not AvailabilitySlot.objects.exists()

    def test_backend_failures_raise_store_error(self, staff_user, monkeypatch):
        slot = create_availability_slot(user=staff_user, data=_timed(10))

        def broken(*args, **kwargs):
            raise DatabaseError("connection lost")

        monkeypatch.setattr(AvailabilitySlot, "save", broken)
        with pytest.raises(StoreError):
            set_slot_status(user=staff_user, slot_id=slot.id, status=SlotStatus.BOOKED)
        with pytest.raises(StoreError):
            update_availability_slot(user=staff_user, slot_id=slot.id, data=_timed(11))

        monkeypatch.setattr(QuerySet, "delete", broken)
        with pytest.raises(StoreError):
            delete_availability_slot(user=staff_user, slot_id=slot.id)


def test_slots_between_orders_full_day_first(staff_user):
    create_availability_slot(user=staff_user, data=_timed(14))
    create_availability_slot(user=staff_user, data=_full_day())
    create_availability_slot(user=staff_user, data=_timed(9))
    create_availability_slot(user=staff_user, data=_timed(9, day=date(2024, 4, 1)))

    labels = [s.time_label for s in slots_between(date(2024, 3, 1), date(2024, 3, 31))]

    assert labels == ["Full Day", "09:00", "14:00"]
