from __future__ import annotations

import pytest

from studio.availability import (
    NO_CHANGES_MESSAGE,
    SAVED_MESSAGE,
    AvailabilityDraft,
    AvailabilitySaveError,
    month_bounds,
    replace_month_dates,
)

from .conftest import FakeBookedDayStore


def _loaded(store, year=2024, month=1) -> AvailabilityDraft:
    draft = AvailabilityDraft()
    draft.load_month(store, year, month)
    return draft


class TestHelpers:
    def test_month_bounds_handles_leap_february(self):
        first, last = month_bounds(2024, 2)
        assert first.isoformat() == "2024-02-01"
        assert last.isoformat() == "2024-02-29"

    def test_replace_month_dates_only_touches_that_month(self):
        dates = ["2024-01-05", "2024-02-01"]
        assert replace_month_dates(dates, "2024-01", ["2024-01-09"]) == ["2024-01-09", "2024-02-01"]


class TestToggle:
    def test_fresh_load_is_clean(self, fake_store):
        draft = _loaded(fake_store)
        assert draft.local_dates == ["2024-01-05", "2024-01-06"]
        assert not draft.is_dirty

    def test_toggle_marks_dirty_and_toggling_back_clears_it(self, fake_store):
        draft = _loaded(fake_store)
        assert draft.toggle("2024-01-20") is True
        assert draft.is_dirty
        assert draft.toggle("2024-01-20") is False
        assert not draft.is_dirty

    def test_local_dates_stay_sorted(self, fake_store):
        draft = _loaded(fake_store)
        draft.toggle("2024-01-01")
        assert draft.local_dates == ["2024-01-01", "2024-01-05", "2024-01-06"]

    def test_invalid_date_is_rejected(self, fake_store):
        draft = _loaded(fake_store)
        with pytest.raises(ValueError):
            draft.toggle("2024-13-40")


class TestSave:
    def test_save_sends_minimal_diff(self, fake_store):
        draft = _loaded(fake_store)
        draft.toggle("2024-01-06")
        draft.toggle("2024-01-07")

        outcome = draft.save(fake_store)

        assert fake_store.upserts == [["2024-01-07"]]
        assert fake_store.deletes == [["2024-01-06"]]
        assert outcome.message == SAVED_MESSAGE
        assert outcome.added == ["2024-01-07"]
        assert outcome.removed == ["2024-01-06"]
        assert not draft.is_dirty
        assert sorted(fake_store.rows) == ["2024-01-05", "2024-01-07"]

    def test_save_without_changes_writes_nothing(self, fake_store):
        draft = _loaded(fake_store)
        outcome = draft.save(fake_store)
        assert outcome.message == NO_CHANGES_MESSAGE
        assert not outcome.changed
        assert fake_store.upserts == []
        assert fake_store.deletes == []

    def test_failed_upsert_aborts_before_delete(self):
        store = FakeBookedDayStore(["2024-01-05"], fail_upsert=True)
        draft = _loaded(store)
        draft.toggle("2024-01-05")
        draft.toggle("2024-01-08")

        with pytest.raises(AvailabilitySaveError) as excinfo:
            draft.save(store)

        assert excinfo.value.added_committed is False
        assert store.deletes == []
        assert draft.is_dirty

    def test_failed_delete_reports_committed_additions(self):
        store = FakeBookedDayStore(["2024-01-05"], fail_delete=True)
        draft = _loaded(store)
        draft.toggle("2024-01-05")
        draft.toggle("2024-01-08")

        with pytest.raises(AvailabilitySaveError) as excinfo:
            draft.save(store)

        assert excinfo.value.added_committed is True
        assert excinfo.value.committed == ["2024-01-08"]
        assert "2024-01-08" in store.rows
        assert draft.is_dirty

    def test_failed_delete_without_additions(self):
        store = FakeBookedDayStore(["2024-01-05"], fail_delete=True)
        draft = _loaded(store)
        draft.toggle("2024-01-05")

        with pytest.raises(AvailabilitySaveError) as excinfo:
            draft.save(store)

        assert excinfo.value.added_committed is False
        assert excinfo.value.committed == []


class TestMonths:
    def test_navigating_away_keeps_unsaved_edits(self, fake_store):
        draft = _loaded(fake_store)
        draft.toggle("2024-01-10")

        draft.ensure_month(fake_store, 2024, 2)
        draft.load_month(fake_store, 2024, 1)

        assert draft.is_booked("2024-01-10")
        assert draft.month_is_dirty("2024-01")
        assert not draft.month_is_dirty("2024-02")

    def test_refetch_updates_server_copy_only(self, fake_store):
        draft = _loaded(fake_store)
        fake_store.rows.add("2024-01-15")

        draft.load_month(fake_store, 2024, 1)

        assert "2024-01-15" in draft.server_dates
        assert "2024-01-15" not in draft.local_dates
        assert draft.is_dirty

    def test_discard_resets_one_month(self, fake_store):
        draft = _loaded(fake_store)
        draft.ensure_month(fake_store, 2024, 2)
        draft.toggle("2024-01-10")
        draft.toggle("2024-02-14")

        draft.discard_month(fake_store, 2024, 1)

        assert not draft.is_booked("2024-01-10")
        assert draft.is_booked("2024-02-14")
        assert draft.month_is_dirty("2024-02")
        assert not draft.month_is_dirty("2024-01")

    def test_ensure_month_fetches_once(self, fake_store):
        draft = AvailabilityDraft()
        draft.ensure_month(fake_store, 2024, 1)
        draft.ensure_month(fake_store, 2024, 1)
        assert len(fake_store.fetches) == 1

    def test_month_booked_count(self, fake_store):
        draft = _loaded(fake_store)
        draft.toggle("2024-01-20")
        assert draft.month_booked_count("2024-01") == 3
        assert draft.month_booked_count("2024-02") == 0


def test_session_round_trip(fake_store):
    draft = _loaded(fake_store)
    draft.toggle("2024-01-09")
    session = {}

    draft.to_session(session)
    restored = AvailabilityDraft.from_session(session)

    assert restored.local_dates == draft.local_dates
    assert restored.server_dates == draft.server_dates
    assert restored.loaded_months == {"2024-01"}
    assert restored.is_dirty
