from __future__ import annotations

from django.conf import settings
from django.http import JsonResponse
from django.views.decorators.http import require_GET

from .models import Package
from .providers import category_label, get_photography_types, get_site_settings
from .public_calendar import load_public_month, parse_iso_date
from .services import StoreError
from .whatsapp import BookingSummary, WhatsAppNotConfiguredError, compose_booking_link


def _parse_month_param(value: str) -> tuple[int, int] | None:
    try:
        year_str, month_str = value.split("-", 1)
        year, month = int(year_str), int(month_str)
    except ValueError:
        return None
    if not (1 <= month <= 12 and 1 <= year <= 9999):
        return None
    return year, month


@require_GET
def availability_api(request):
    """
    GET /api/availability/?month=YYYY-MM

    Per-day availability for one month. Dates without rows are available.
    """
    month_str = request.GET.get("month", "").strip()
    if not month_str:
        return JsonResponse({"error": "Missing required query param: month"}, status=400)

    parsed = _parse_month_param(month_str)
    if parsed is None:
        return JsonResponse({"error": "Invalid month. Expected YYYY-MM."}, status=400)

    try:
        public_month = load_public_month(*parsed)
    except StoreError:
        return JsonResponse({"error": "Availability could not be loaded."}, status=503)

    return JsonResponse(public_month.as_dict())


@require_GET
def booking_link_api(request):
    """
    GET /api/booking-link/?package=<id>&date=YYYY-MM-DD

    Composes the WhatsApp booking link for an active package and a date.
    """
    package_id = request.GET.get("package", "").strip()
    date_str = request.GET.get("date", "").strip()
    if not package_id:
        return JsonResponse({"error": "Missing required query param: package"}, status=400)
    if not package_id.isdigit():
        return JsonResponse({"error": "Invalid package. Expected an integer."}, status=400)
    if not date_str:
        return JsonResponse({"error": "Missing required query param: date"}, status=400)

    target_date = parse_iso_date(date_str)
    if target_date is None:
        return JsonResponse({"error": "Invalid date. Expected YYYY-MM-DD."}, status=400)

    package = Package.objects.filter(id=int(package_id), is_active=True).first()
    if package is None:
        return JsonResponse({"error": "Package not found."}, status=404)

    summary = BookingSummary(
        category_label=category_label(package.category, get_photography_types()),
        package_name=package.name,
        date=target_date,
        price=package.price,
    )
    try:
        url = compose_booking_link(get_site_settings(), summary, default_brand=settings.STUDIO_SITE_NAME)
    except WhatsAppNotConfiguredError as exc:
        return JsonResponse({"error": str(exc)}, status=409)

    return JsonResponse(
        {
            "url": url,
            "category": summary.category_label,
            "package": summary.package_name,
            "date": summary.long_date,
            "time": summary.time,
        }
    )
