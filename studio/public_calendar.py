from __future__ import annotations

import calendar
from collections import defaultdict
from dataclasses import dataclass
from datetime import date as date_type
from typing import Iterable

from django.conf import settings
from django.utils import timezone

from .availability import month_bounds, month_key
from .services import booked_dates_between, slots_between


ANY_TIME = "Any Time"
WEEKDAY_HEADERS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]

_sunday_first = calendar.Calendar(firstweekday=calendar.SUNDAY)


def parse_month(value: str | None, *, default: date_type | None = None) -> tuple[int, int]:
    """
    Parse ``YYYY-MM``; anything invalid falls back to the month of ``default``
    (today when omitted).
    """
    fallback = default or timezone.localdate()
    raw = (value or "").strip()
    try:
        year_str, month_str = raw.split("-", 1)
        year, month = int(year_str), int(month_str)
        if 1 <= month <= 12 and 1 <= year <= 9999:
            return year, month
    except ValueError:
        pass
    return fallback.year, fallback.month


def parse_iso_date(value: str | None) -> date_type | None:
    raw = (value or "").strip()
    if not raw:
        return None
    try:
        return date_type.fromisoformat(raw)
    except ValueError:
        return None


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def month_label(year: int, month: int) -> str:
    return f"{calendar.month_name[month]} {year}"


def month_weeks(year: int, month: int) -> list[list[date_type | None]]:
    """Sunday-first weeks; days outside the month are None."""
    return [
        [date_type(year, month, day) if day else None for day in week]
        for week in _sunday_first.monthdayscalendar(year, month)
    ]


@dataclass(frozen=True)
class SlotView:
    label: str
    status: str
    booked: bool


@dataclass(frozen=True)
class PublicDay:
    date: date_type
    fully_booked: bool
    selected: bool

    @property
    def iso(self) -> str:
        return self.date.isoformat()

    @property
    def day(self) -> int:
        return self.date.day


def group_slots_by_date(slots: Iterable) -> dict[str, list]:
    by_date: dict[str, list] = defaultdict(list)
    for slot in slots:
        by_date[slot.date.isoformat()].append(slot)
    return dict(by_date)


def is_full_day_booked(slots: Iterable) -> bool:
    """Only a booked full-day slot blocks the date; booked time slots do not."""
    return any(slot.is_full_day and slot.status == "booked" for slot in slots)


def slot_details(slots: Iterable, *, day_blocked: bool = False) -> list[SlotView]:
    ordered = sorted(
        slots,
        key=lambda s: (not s.is_full_day, s.slot_time.isoformat() if s.slot_time else ""),
    )
    return [
        SlotView(
            label=slot.time_label,
            status=slot.status,
            booked=day_blocked or slot.status == "booked",
        )
        for slot in ordered
    ]


class PublicMonth:
    """
    Read-only month of availability. A date with no rows is available.
    """

    def __init__(
        self,
        year: int,
        month: int,
        slots: Iterable = (),
        booked_days: Iterable[str] = (),
        selected: date_type | None = None,
    ):
        self.year = year
        self.month = month
        self.by_date = group_slots_by_date(slots)
        self.booked_days = set(booked_days)
        self.selected = selected

    @property
    def key(self) -> str:
        return month_key(self.year, self.month)

    @property
    def label(self) -> str:
        return month_label(self.year, self.month)

    @property
    def prev_key(self) -> str:
        return month_key(*shift_month(self.year, self.month, -1))

    @property
    def next_key(self) -> str:
        return month_key(*shift_month(self.year, self.month, 1))

    def is_fully_booked(self, iso: str) -> bool:
        if iso in self.booked_days:
            return True
        return is_full_day_booked(self.by_date.get(iso, []))

    def weeks(self) -> list[list[PublicDay | None]]:
        return [
            [
                PublicDay(
                    date=d,
                    fully_booked=self.is_fully_booked(d.isoformat()),
                    selected=self.selected == d,
                )
                if d
                else None
                for d in week
            ]
            for week in month_weeks(self.year, self.month)
        ]

    def details_for(self, iso: str) -> list[SlotView]:
        return slot_details(self.by_date.get(iso, []), day_blocked=self.is_fully_booked(iso))

    def event_type_for(self, iso: str) -> str | None:
        return next((s.service_type for s in self.by_date.get(iso, []) if s.service_type), None)

    def as_dict(self) -> dict:
        days = []
        for week in month_weeks(self.year, self.month):
            for d in week:
                if d is None:
                    continue
                iso = d.isoformat()
                days.append(
                    {
                        "date": iso,
                        "fully_booked": self.is_fully_booked(iso),
                        "event_type": self.event_type_for(iso),
                        "slots": [
                            {"time": s.label, "status": s.status, "booked": s.booked}
                            for s in self.details_for(iso)
                        ],
                    }
                )
        return {"month": self.key, "label": self.label, "days": days}


def load_public_month(year: int, month: int, *, selected: date_type | None = None) -> PublicMonth:
    """
    Fetch one month of slots (and, when enabled, legacy booked days). Raises
    StoreError when the database read fails.
    """
    first, last = month_bounds(year, month)
    slots = slots_between(first, last)
    booked = booked_dates_between(first, last) if settings.STUDIO_PUBLIC_CALENDAR_USES_BOOKED_DAYS else []
    return PublicMonth(year, month, slots=slots, booked_days=booked, selected=selected)
