from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date as date_type
from datetime import time as time_type
from typing import Iterable

from django.core.exceptions import PermissionDenied, ValidationError
from django.db import DatabaseError, IntegrityError, transaction
from django.utils import timezone

from .models import AvailabilitySlot, BookedDay, SlotStatus


logger = logging.getLogger(__name__)


class StudioError(Exception):
    """Base error type for studio domain errors. The message is user-facing."""


class StoreError(StudioError):
    """Raised when the database rejects a read or write."""


class SlotAlreadyExistsError(StudioError):
    """Raised when an availability slot collides with an existing one."""


class StorageError(StudioError):
    """Raised when an object storage upload or removal fails."""


SLOT_EXISTS_MESSAGE = "This slot already exists."


def is_admin(user) -> bool:
    return bool(user is not None and user.is_authenticated and user.is_active and user.is_staff)


def ensure_admin(user) -> None:
    """
    Writes are refused for non-admins here as well, so a view that forgets its
    guard still cannot change data.
    """
    if not is_admin(user):
        raise PermissionDenied("Admin access required.")


def _iso(value) -> str:
    if isinstance(value, date_type):
        return value.isoformat()
    return date_type.fromisoformat(str(value)).isoformat()


# Booked days (legacy whole-day flags)


def booked_dates_between(first: date_type, last: date_type) -> list[str]:
    try:
        rows = BookedDay.objects.filter(date__gte=first, date__lte=last).order_by("date")
        return [row.date.isoformat() for row in rows]
    except DatabaseError as exc:
        logger.exception("Failed to load booked days %s..%s", first, last)
        raise StoreError(str(exc)) from exc


def upsert_booked_days(*, user, dates: Iterable[str], note: str | None = None) -> int:
    """
    Insert or refresh one BookedDay per date (conflict target: date).
    """
    ensure_admin(user)
    values = sorted({_iso(d) for d in dates})
    if not values:
        return 0

    now = timezone.now()
    try:
        BookedDay.objects.bulk_create(
            [BookedDay(date=date_type.fromisoformat(v), note=note, updated_at=now) for v in values],
            update_conflicts=True,
            unique_fields=["date"],
            update_fields=["note", "updated_at"],
        )
    except DatabaseError as exc:
        logger.exception("Failed to upsert %d booked days", len(values))
        raise StoreError(str(exc)) from exc
    return len(values)


def delete_booked_days(*, user, dates: Iterable[str]) -> int:
    ensure_admin(user)
    values = sorted({_iso(d) for d in dates})
    if not values:
        return 0
    try:
        deleted, _ = BookedDay.objects.filter(date__in=values).delete()
    except DatabaseError as exc:
        logger.exception("Failed to delete %d booked days", len(values))
        raise StoreError(str(exc)) from exc
    return deleted


class BookedDayStore:
    """
    Booked-day access bound to the acting user. The availability calendar only
    talks to this object, so tests can hand it an in-memory replacement.
    """

    def __init__(self, user):
        self.user = user

    def fetch(self, first: date_type, last: date_type) -> list[str]:
        return booked_dates_between(first, last)

    def upsert(self, dates: list[str]) -> None:
        upsert_booked_days(user=self.user, dates=dates)

    def delete(self, dates: list[str]) -> None:
        delete_booked_days(user=self.user, dates=dates)


# Availability slots


@dataclass(frozen=True)
class SlotInput:
    date: date_type
    slot_time: time_type | None
    is_full_day: bool
    status: str = SlotStatus.AVAILABLE
    service_type: str | None = None
    note: str | None = None


def slots_between(first: date_type, last: date_type) -> list[AvailabilitySlot]:
    try:
        return list(
            AvailabilitySlot.objects.filter(date__gte=first, date__lte=last).order_by(
                "date", "-is_full_day", "slot_time"
            )
        )
    except DatabaseError as exc:
        logger.exception("Failed to load availability slots %s..%s", first, last)
        raise StoreError(str(exc)) from exc


def _validate_slot(data: SlotInput) -> None:
    if data.status not in SlotStatus.values:
        raise ValidationError({"status": "Invalid slot status."})
    if not data.is_full_day and data.slot_time is None:
        raise ValidationError({"slot_time": "Pick a time or mark the slot as full day."})


def _slot_conflicts(data: SlotInput, *, exclude_id=None) -> bool:
    qs = AvailabilitySlot.objects.filter(date=data.date, is_full_day=data.is_full_day)
    if not data.is_full_day:
        qs = qs.filter(slot_time=data.slot_time)
    if exclude_id is not None:
        qs = qs.exclude(id=exclude_id)
    return qs.exists()


def create_availability_slot(*, user, data: SlotInput) -> AvailabilitySlot:
    """
    Create a slot. The unique constraints stay the final guard; a violation is
    reported as SlotAlreadyExistsError instead of the raw backend message.
    """
    ensure_admin(user)
    _validate_slot(data)

    if _slot_conflicts(data):
        raise SlotAlreadyExistsError(SLOT_EXISTS_MESSAGE)

    try:
        with transaction.atomic():
            return AvailabilitySlot.objects.create(
                date=data.date,
                slot_time=None if data.is_full_day else data.slot_time,
                is_full_day=data.is_full_day,
                status=data.status,
                service_type=data.service_type or None,
                note=data.note or None,
            )
    except IntegrityError as exc:
        raise SlotAlreadyExistsError(SLOT_EXISTS_MESSAGE) from exc
    except DatabaseError as exc:
        logger.exception("Failed to create availability slot on %s", data.date)
        raise StoreError(str(exc)) from exc


def update_availability_slot(*, user, slot_id: int, data: SlotInput) -> AvailabilitySlot:
    ensure_admin(user)
    _validate_slot(data)

    if _slot_conflicts(data, exclude_id=slot_id):
        raise SlotAlreadyExistsError(SLOT_EXISTS_MESSAGE)

    try:
        with transaction.atomic():
            slot = AvailabilitySlot.objects.select_for_update().get(id=slot_id)
            slot.date = data.date
            slot.slot_time = None if data.is_full_day else data.slot_time
            slot.is_full_day = data.is_full_day
            slot.status = data.status
            slot.service_type = data.service_type or None
            slot.note = data.note or None
            slot.save()
            return slot
    except IntegrityError as exc:
        raise SlotAlreadyExistsError(SLOT_EXISTS_MESSAGE) from exc
    except DatabaseError as exc:
        logger.exception("Failed to update availability slot %s", slot_id)
        raise StoreError(str(exc)) from exc


def set_slot_status(*, user, slot_id: int, status: str) -> AvailabilitySlot:
    ensure_admin(user)
    if status not in SlotStatus.values:
        raise ValidationError({"status": "Invalid slot status."})
    try:
        slot = AvailabilitySlot.objects.get(id=slot_id)
        slot.status = status
        slot.save(update_fields=["status"])
    except DatabaseError as exc:
        logger.exception("Failed to set status of availability slot %s", slot_id)
        raise StoreError(str(exc)) from exc
    return slot


def delete_availability_slot(*, user, slot_id: int) -> None:
    ensure_admin(user)
    try:
        AvailabilitySlot.objects.filter(id=slot_id).delete()
    except DatabaseError as exc:
        logger.exception("Failed to delete availability slot %s", slot_id)
        raise StoreError(str(exc)) from exc
