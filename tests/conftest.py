from __future__ import annotations

from datetime import date as date_type

import pytest

from studio.services import StoreError


class FakeBookedDayStore:
    """In-memory booked-day source that records every write."""

    def __init__(self, booked=(), *, fail_upsert: bool = False, fail_delete: bool = False):
        self.rows = set(booked)
        self.fail_upsert = fail_upsert
        self.fail_delete = fail_delete
        self.fetches: list[tuple[date_type, date_type]] = []
        self.upserts: list[list[str]] = []
        self.deletes: list[list[str]] = []

    def fetch(self, first, last):
        self.fetches.append((first, last))
        return sorted(d for d in self.rows if first.isoformat() <= d <= last.isoformat())

    def upsert(self, dates):
        if self.fail_upsert:
            raise StoreError("upsert rejected")
        self.upserts.append(list(dates))
        self.rows.update(dates)

    def delete(self, dates):
        if self.fail_delete:
            raise StoreError("delete rejected")
        self.deletes.append(list(dates))
        self.rows.difference_update(dates)


@pytest.fixture
def fake_store():
    return FakeBookedDayStore(["2024-01-05", "2024-01-06"])


@pytest.fixture
def staff_user(django_user_model):
    return django_user_model.objects.create_user(
        username="studio-admin", email="admin@example.com", password="pw-12345", is_staff=True
    )


@pytest.fixture
def regular_user(django_user_model):
    return django_user_model.objects.create_user(username="visitor", email="visitor@example.com", password="pw-12345")


@pytest.fixture
def staff_client(client, staff_user):
    client.force_login(staff_user)
    return client


@pytest.fixture
def visitor_client(client, regular_user):
    client.force_login(regular_user)
    return client
