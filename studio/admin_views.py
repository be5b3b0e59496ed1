"""
Back-office screens under /studio/.

Every view is wrapped in ``admin_required``; the write paths call into
services that check admin rights again.
"""
from __future__ import annotations

import logging
from datetime import date as date_type

from django.contrib import messages
from django.db import DatabaseError
from django.shortcuts import redirect, render
from django.urls import reverse
from django.views.decorators.http import require_http_methods

from accounts.decorators import admin_required

from . import storage
from .availability import AvailabilityDraft, AvailabilitySaveError, month_key, month_key_from_iso
from .forms import (
    AvailabilitySlotForm,
    GalleryUploadForm,
    PackageForm,
    PhotographyTypeForm,
    PortfolioPhotoForm,
    SiteSettingsForm,
)
from .manager import EntityListManager, first_form_error
from .models import AvailabilitySlot, BookedDay, GalleryImage, Package, PhotographyType, PortfolioPhoto, SiteSettings
from .models import SlotStatus
from .public_calendar import WEEKDAY_HEADERS, month_label, month_weeks, parse_month, shift_month
from .services import (
    BookedDayStore,
    StoreError,
    StudioError,
    create_availability_slot,
    delete_availability_slot,
    ensure_admin,
    set_slot_status,
    update_availability_slot,
)


logger = logging.getLogger(__name__)

OUTSIDE_MONTH_MESSAGE = "That date is not in the displayed month."


class SlotManager(EntityListManager):
    """Slots go through the service layer so collisions get a readable message."""

    def create(self, *, user, form) -> list:
        return [create_availability_slot(user=user, data=form.to_input())]

    def update(self, *, user, form):
        return update_availability_slot(user=user, slot_id=form.instance.id, data=form.to_input())

    def toggle(self, *, user, obj):
        status = SlotStatus.AVAILABLE if obj.status == SlotStatus.BOOKED else SlotStatus.BOOKED
        return set_slot_status(user=user, slot_id=obj.id, status=status)

    def delete(self, *, user, obj) -> None:
        delete_availability_slot(user=user, slot_id=obj.id)


gallery_manager = EntityListManager(
    slug="gallery",
    title="Gallery",
    model=GalleryImage,
    form_class=GalleryUploadForm,
    row_template="studio/manage/rows/gallery.html",
    allow_all_categories=True,
    bucket=storage.GALLERY_BUCKET,
    url_field="url",
    upload_path=lambda cleaned, upload: storage.build_gallery_path(cleaned.get("category"), upload.name),
    description="Upload images for the public gallery. Several files may be selected at once.",
    created_message="Uploaded ✅",
    delete_prompt="Delete this image? This cannot be undone.",
)

portfolio_manager = EntityListManager(
    slug="portfolio",
    title="Portfolio",
    model=PortfolioPhoto,
    form_class=PortfolioPhotoForm,
    row_template="studio/manage/rows/portfolio.html",
    bucket=storage.PORTFOLIO_BUCKET,
    url_field="image_url",
    upload_path=lambda cleaned, upload: storage.build_portfolio_path(
        cleaned["category"], cleaned["title"], upload.name
    ),
    description="Portfolio photos shown per category on the home page.",
    created_message="Uploaded ✅",
    delete_prompt="Delete this photo? This cannot be undone.",
)

packages_manager = EntityListManager(
    slug="packages",
    title="Packages",
    model=Package,
    form_class=PackageForm,
    row_template="studio/manage/rows/package.html",
    description="Priced packages per category. Features: 1 line = 1 bullet.",
    delete_prompt="Delete this package? This cannot be undone.",
)

types_manager = EntityListManager(
    slug="types",
    title="Photography Types",
    model=PhotographyType,
    form_class=PhotographyTypeForm,
    row_template="studio/manage/rows/type.html",
    category_field=None,
    description="The category taxonomy used by packages, portfolio, gallery and slots.",
    delete_prompt="Delete this type? Rows using its slug keep the slug.",
)

slots_manager = SlotManager(
    slug="slots",
    title="Availability Slots",
    model=AvailabilitySlot,
    form_class=AvailabilitySlotForm,
    row_template="studio/manage/rows/slot.html",
    category_field="service_type",
    allow_all_categories=True,
    ordering=("date", "-is_full_day", "slot_time"),
    sortable=False,
    description="Timed or full-day slots. A booked full-day slot blocks the date on the public calendar.",
    created_message="Slot added ✅",
    delete_prompt="Delete this slot?",
)

MANAGERS = [gallery_manager, portfolio_manager, packages_manager, types_manager, slots_manager]


@admin_required
def dashboard_view(request):
    counts = {
        "booked_days": BookedDay.objects.count(),
        "slots": AvailabilitySlot.objects.count(),
        "packages": Package.objects.filter(is_active=True).count(),
        "portfolio": PortfolioPhoto.objects.filter(is_active=True).count(),
        "gallery": GalleryImage.objects.filter(is_active=True).count(),
        "types": PhotographyType.objects.filter(is_active=True).count(),
    }
    return render(request, "studio/dashboard.html", {"counts": counts, "managers": MANAGERS})


def toggle_date(draft: AvailabilityDraft, value: str, key: str) -> bool:
    """
    Toggle a date of the displayed month. Other months are not loaded into
    the draft yet, so an edit there would be lost on their first load.
    """
    iso = date_type.fromisoformat(value).isoformat()
    if month_key_from_iso(iso) != key:
        raise StudioError(OUTSIDE_MONTH_MESSAGE)
    return draft.toggle(iso)


def _availability_redirect(key: str):
    return redirect(f"{reverse('studio:availability')}?month={key}")


@admin_required
@require_http_methods(["GET", "POST"])
def availability_view(request):
    """
    Booked-day calendar with a session-held draft.

    Toggles only touch the draft; "save" pushes the minimal diff, while
    "discard" and "refresh" re-read the month from the database.
    """
    store = BookedDayStore(request.user)
    draft = AvailabilityDraft.from_session(request.session)
    year, month = parse_month(request.POST.get("month") or request.GET.get("month"))
    key = month_key(year, month)

    if request.method == "POST":
        action = request.POST.get("action", "")
        try:
            draft.ensure_month(store, year, month)
            if action == "toggle":
                toggle_date(draft, request.POST.get("date", ""), key)
            elif action == "save":
                outcome = draft.save(store)
                if outcome.changed:
                    messages.success(request, outcome.message)
                else:
                    messages.info(request, outcome.message)
            elif action in ("discard", "refresh"):
                draft.discard_month(store, year, month)
                if action == "discard":
                    messages.info(request, "Month changes discarded.")
            else:
                messages.error(request, "Unknown action.")
        except AvailabilitySaveError as exc:
            messages.error(request, str(exc))
            if exc.added_committed:
                messages.warning(
                    request,
                    "Booked dates were added ({}) but removals were not saved.".format(", ".join(exc.committed)),
                )
        except ValueError:
            messages.error(request, "Invalid date.")
        except StudioError as exc:
            messages.error(request, str(exc))
        draft.to_session(request.session)
        return _availability_redirect(key)

    # Every display refetches the server slice; local edits survive unless this is the first visit.
    load_error = ""
    try:
        draft.load_month(store, year, month)
    except StoreError as exc:
        load_error = str(exc)
    draft.to_session(request.session)

    added, removed = draft.pending_changes()
    weeks = [
        [{"date": d, "iso": d.isoformat(), "booked": draft.is_booked(d.isoformat())} if d else None for d in week]
        for week in month_weeks(year, month)
    ]
    return render(
        request,
        "studio/availability.html",
        {
            "month_key": key,
            "month_label": month_label(year, month),
            "prev_key": month_key(*shift_month(year, month, -1)),
            "next_key": month_key(*shift_month(year, month, 1)),
            "weekday_headers": WEEKDAY_HEADERS,
            "weeks": weeks,
            "is_dirty": draft.is_dirty,
            "month_dirty": draft.month_is_dirty(key),
            "booked_count": draft.month_booked_count(key),
            "pending_added": added,
            "pending_removed": removed,
            "load_error": load_error,
        },
    )


def save_site_settings(*, user, form) -> SiteSettings:
    """
    Persist the settings singleton. Logo and banner uploads land in the
    site-assets bucket and replace the stored URL.
    """
    ensure_admin(user)
    obj = form.instance
    for file_field, url_field, folder in (("logo_file", "logo_url", "logo"), ("banner_file", "banner_url", "banner")):
        upload = form.cleaned_data.get(file_field)
        if upload:
            stored_path = storage.upload(
                storage.SITE_ASSETS_BUCKET, storage.build_asset_path(folder, upload.name), upload
            )
            setattr(obj, url_field, storage.public_url(storage.SITE_ASSETS_BUCKET, stored_path))
    try:
        return form.save()
    except DatabaseError as exc:
        logger.exception("Saving site settings failed")
        raise StoreError(str(exc)) from exc


@admin_required
@require_http_methods(["GET", "POST"])
def settings_view(request):
    instance = SiteSettings.load()
    if request.method == "POST":
        form = SiteSettingsForm(request.POST, request.FILES, instance=instance)
        if form.is_valid():
            try:
                save_site_settings(user=request.user, form=form)
            except StudioError as exc:
                messages.error(request, str(exc))
            else:
                messages.success(request, "Settings saved ✅")
                return redirect("studio:settings")
        else:
            messages.error(request, first_form_error(form))
    else:
        form = SiteSettingsForm(instance=instance)
    return render(request, "studio/settings.html", {"form": form, "settings_obj": instance})
