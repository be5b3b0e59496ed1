from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date as date_type
from urllib.parse import quote

from .public_calendar import ANY_TIME
from .services import StudioError


WA_BASE_URL = "https://wa.me/"
INQUIRY_ANCHOR = "#inquiry"
NOT_CONFIGURED_MESSAGE = (
    "WhatsApp booking is not available right now. "
    "Please reach us through the inquiry section below."
)


class WhatsAppNotConfiguredError(StudioError):
    """Raised when no WhatsApp number is configured in site settings."""


def digits_only(value: str | None) -> str:
    return re.sub(r"\D", "", value or "")


def format_long_date(value) -> str:
    """2024-03-10 -> "Sunday, March 10, 2024"."""
    d = value if isinstance(value, date_type) else date_type.fromisoformat(str(value))
    return f"{d:%A}, {d:%B} {d.day}, {d.year}"


def display_number(value: str | None) -> str:
    if not value:
        return ""
    return value if value.startswith("+") else f"+{value}"


def whatsapp_number_for(site_settings) -> str:
    """
    Digits of the booking number. The dedicated WhatsApp number wins over the
    contact phone.
    """
    if site_settings is None:
        return ""
    return digits_only(site_settings.whatsapp_number) or digits_only(site_settings.contact_phone)


def build_wa_url(number: str, message: str) -> str:
    digits = digits_only(number)
    if not digits:
        raise WhatsAppNotConfiguredError(NOT_CONFIGURED_MESSAGE)
    return f"{WA_BASE_URL}{digits}?text={quote(message, safe='')}"


def _brand(site_settings, default: str) -> str:
    return (getattr(site_settings, "brand_name", "") or default).strip()


@dataclass(frozen=True)
class BookingSummary:
    category_label: str
    package_name: str
    date: date_type
    price: str = ""
    time: str = ANY_TIME

    @property
    def long_date(self) -> str:
        return format_long_date(self.date)


def build_booking_message(summary: BookingSummary, *, brand: str) -> str:
    lines = [
        f"Hi {brand}!",
        "",
        "I would like to book a photography session.",
        "",
        f"Category: {summary.category_label}",
        f"Package: {summary.package_name}",
    ]
    if summary.price:
        lines.append(f"Price: {summary.price}")
    lines += [
        f"Date: {summary.long_date}",
        "Time: ",
        "Pax: ",
        "",
        "Thank you!",
    ]
    return "\n".join(lines)


def compose_booking_link(site_settings, summary: BookingSummary, *, default_brand: str = "Raygraphy") -> str:
    number = whatsapp_number_for(site_settings)
    if not number:
        raise WhatsAppNotConfiguredError(NOT_CONFIGURED_MESSAGE)
    return build_wa_url(number, build_booking_message(summary, brand=_brand(site_settings, default_brand)))


def build_inquiry_message(
    *, brand: str, selected_date: date_type | None = None, selected_time: str | None = None
) -> str:
    message = f"Hi {brand}!\n\nI'm interested in your photography services.\n\n"
    if selected_date:
        message += f"Preferred Date: {format_long_date(selected_date)}\n"
        time_text = selected_time if selected_time and selected_time != ANY_TIME else "Flexible / Any time"
        message += f"Preferred Time: {time_text}\n\n"
    message += "Please let me know about availability and next steps.\n\nThank you!"
    return message


def inquiry_link(site_settings, *, selected_date=None, selected_time=None, default_brand: str = "Raygraphy") -> str:
    """Inquiry link, or the inquiry anchor when no number is configured."""
    number = whatsapp_number_for(site_settings)
    if not number:
        return INQUIRY_ANCHOR
    message = build_inquiry_message(
        brand=_brand(site_settings, default_brand),
        selected_date=selected_date,
        selected_time=selected_time,
    )
    return build_wa_url(number, message)


def build_quote_message(*, brand: str, category_label: str) -> str:
    return (
        f"Hi {brand}!\n\n"
        f"I'm interested in your {category_label} package.\n\n"
        "Please share availability and pricing details.\n\n"
        "Thank you!"
    )


def quote_link(site_settings, *, category_label: str, default_brand: str = "Raygraphy") -> str:
    number = whatsapp_number_for(site_settings)
    if not number:
        return INQUIRY_ANCHOR
    return build_wa_url(
        number, build_quote_message(brand=_brand(site_settings, default_brand), category_label=category_label)
    )
