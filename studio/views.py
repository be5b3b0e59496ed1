from __future__ import annotations

from django.conf import settings
from django.http import Http404
from django.shortcuts import render
from django.utils import timezone

from .models import GalleryImage, Package, PortfolioPhoto
from .providers import category_label, category_options, get_photography_types, get_site_settings, resolve_category
from .public_calendar import ANY_TIME, WEEKDAY_HEADERS, load_public_month, parse_iso_date, parse_month
from .seo import (
    DEFAULT_SEO_DESCRIPTION,
    DEFAULT_SEO_TITLE,
    SERVICE_SEO,
    breadcrumb_schema,
    build_page_metadata,
    service_schema,
    services_list_schema,
    to_json_ld,
)
from .services import StoreError
from .whatsapp import (
    BookingSummary,
    WhatsAppNotConfiguredError,
    compose_booking_link,
    display_number,
    inquiry_link,
    quote_link,
    whatsapp_number_for,
)


def _selected_package(packages: list[Package], raw: str | None) -> Package | None:
    raw = (raw or "").strip()
    if not raw.isdigit():
        return None
    return next((p for p in packages if p.id == int(raw)), None)


def home_view(request):
    """
    Landing page: hero, portfolio tabs, packages for the selected category,
    the public availability calendar and the WhatsApp booking summary.

    Everything is driven by query params (category, package, month, date) so
    the page works as plain links.
    """
    site_settings = get_site_settings()
    brand = settings.STUDIO_SITE_NAME
    types = get_photography_types()
    options = category_options(types)
    category = resolve_category(request.GET.get("category"), options)
    current_label = category_label(category, types)

    portfolio = list(PortfolioPhoto.objects.filter(is_active=True, category=category).order_by("sort_order", "created_at"))
    packages = list(Package.objects.filter(is_active=True, category=category).order_by("sort_order", "created_at"))
    package = _selected_package(packages, request.GET.get("package"))

    today = timezone.localdate()
    selected_date = parse_iso_date(request.GET.get("date"))
    year, month = parse_month(request.GET.get("month"), default=selected_date or today)

    calendar_error = ""
    try:
        public_month = load_public_month(year, month, selected=selected_date)
    except StoreError:
        calendar_error = "Availability could not be loaded. Please try again later."
        public_month = None

    selected_details = []
    selected_blocked = False
    if public_month is not None and selected_date is not None:
        iso = selected_date.isoformat()
        selected_details = public_month.details_for(iso)
        selected_blocked = public_month.is_fully_booked(iso)

    booking_summary = None
    booking_url = ""
    booking_error = ""
    if package is not None and selected_date is not None:
        booking_summary = BookingSummary(
            category_label=current_label,
            package_name=package.name,
            date=selected_date,
            price=package.price,
        )
        try:
            booking_url = compose_booking_link(site_settings, booking_summary, default_brand=brand)
        except WhatsAppNotConfiguredError as exc:
            booking_error = str(exc)

    metadata = build_page_metadata(title=DEFAULT_SEO_TITLE, description=DEFAULT_SEO_DESCRIPTION, path="/")

    return render(
        request,
        "studio/home.html",
        {
            "meta": metadata,
            "site_settings": site_settings,
            "category_options": options,
            "current_category": category,
            "current_category_label": current_label,
            "portfolio": portfolio,
            "packages": packages,
            "selected_package": package,
            "public_month": public_month,
            "weekday_headers": WEEKDAY_HEADERS,
            "calendar_error": calendar_error,
            "today": today,
            "selected_date": selected_date,
            "selected_details": selected_details,
            "selected_blocked": selected_blocked,
            "any_time": ANY_TIME,
            "booking_summary": booking_summary,
            "booking_url": booking_url,
            "booking_error": booking_error,
            "inquiry_url": inquiry_link(site_settings, selected_date=selected_date, default_brand=brand),
            "quote_url": quote_link(site_settings, category_label=current_label, default_brand=brand),
            "whatsapp_display": display_number(whatsapp_number_for(site_settings)),
        },
    )


def services_view(request):
    metadata = build_page_metadata(
        title="Photography Services in Kuala Lumpur & Selangor | Raygraphy",
        description=(
            "Explore Raygraphy photography services for portrait, convocation, and event sessions in "
            "Kuala Lumpur and Selangor."
        ),
        path="/services/",
        keywords=["photography services Kuala Lumpur", "jurugambar Selangor"],
    )
    return render(
        request,
        "studio/services.html",
        {
            "meta": metadata,
            "services": list(SERVICE_SEO.values()),
            "json_ld": [to_json_ld(services_list_schema())],
        },
    )


def service_detail_view(request, slug: str):
    service = SERVICE_SEO.get(slug)
    if service is None:
        raise Http404
    metadata = build_page_metadata(
        title=service.title,
        description=service.description,
        path=f"/services/{service.slug}/",
        keywords=service.keywords,
    )
    return render(
        request,
        "studio/service_detail.html",
        {
            "meta": metadata,
            "service": service,
            "json_ld": [to_json_ld(service_schema(service)), to_json_ld(breadcrumb_schema(service))],
        },
    )


def gallery_view(request):
    types = get_photography_types()
    options = category_options(types)
    requested = (request.GET.get("category") or "").strip()
    images = GalleryImage.objects.filter(is_active=True).order_by("sort_order", "created_at")
    if requested:
        images = images.filter(category=requested)

    metadata = build_page_metadata(
        title="Photo Gallery | Raygraphy",
        description="Recent portrait, convocation, and event photography by Raygraphy in Kuala Lumpur and Selangor.",
        path="/gallery/",
    )
    return render(
        request,
        "studio/gallery.html",
        {
            "meta": metadata,
            "images": list(images),
            "category_options": options,
            "current_category": requested,
        },
    )
