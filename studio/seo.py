from __future__ import annotations

import json
import re
from dataclasses import dataclass, field

from django.conf import settings


SERVICE_AREAS = ["Kuala Lumpur", "Selangor"]

DEFAULT_SEO_TITLE = "Raygraphy | Portrait, Convocation & Event Photography in Kuala Lumpur & Selangor"
DEFAULT_SEO_DESCRIPTION = (
    "Raygraphy provides portrait, convocation, and event photography in Kuala Lumpur and Selangor. "
    "Tempah sesi fotografi anda sekarang melalui WhatsApp."
)
DEFAULT_OG_IMAGE = "/static/raygraphy-og.svg"

BASE_KEYWORDS = [
    "Raygraphy",
    "photography Kuala Lumpur",
    "photography Selangor",
    "portrait photography",
    "convocation photography",
    "event photography",
    "fotografi Kuala Lumpur",
    "fotografi Selangor",
]


@dataclass(frozen=True)
class ServicePackage:
    name: str
    description: str


@dataclass(frozen=True)
class ServiceSeo:
    slug: str
    name_en: str
    name_ms: str
    title: str
    description: str
    hero_title: str
    hero_description: str
    keywords: list[str] = field(default_factory=list)
    packages: list[ServicePackage] = field(default_factory=list)


SERVICE_SEO: dict[str, ServiceSeo] = {
    "portrait": ServiceSeo(
        slug="portrait",
        name_en="Portrait Photography",
        name_ms="Fotografi Potret",
        title="Portrait Photography in Kuala Lumpur & Selangor | Fotografi Potret KL",
        description=(
            "Professional portrait photography in Kuala Lumpur and Selangor for personal branding, "
            "individuals, and families. Sesi potret profesional dengan tempahan WhatsApp."
        ),
        hero_title="Portrait Photography / Fotografi Potret",
        hero_description=(
            "Studio-style and outdoor portrait sessions for individuals, couples, and families across KL and Selangor."
        ),
        keywords=[
            "portrait photography Kuala Lumpur",
            "portrait photographer Selangor",
            "fotografi potret KL",
            "professional portrait photoshoot Malaysia",
        ],
        packages=[
            ServicePackage(
                "Personal Portrait Session",
                "Individual portrait session with guided posing and professionally edited final photos.",
            ),
            ServicePackage(
                "Family Portrait Session",
                "Family-focused portrait coverage with natural and formal group compositions.",
            ),
            ServicePackage(
                "Branding Portrait Session",
                "Portraits for creators and professionals for social profiles and marketing use.",
            ),
        ],
    ),
    "convocation": ServiceSeo(
        slug="convocation",
        name_en="Convocation Photography",
        name_ms="Fotografi Konvokesyen",
        title="Convocation Photography in Kuala Lumpur & Selangor | Fotografi Konvo",
        description=(
            "Book convocation photography in Kuala Lumpur and Selangor for graduation day portraits and group "
            "photos. Tempah jurugambar konvokesyen melalui WhatsApp."
        ),
        hero_title="Convocation Photography / Fotografi Konvokesyen",
        hero_description=(
            "Capture graduation milestones with polished solo portraits and memorable group photos around your campus."
        ),
        keywords=[
            "convocation photographer Kuala Lumpur",
            "graduation photography Selangor",
            "fotografi konvokesyen",
            "jurugambar konvo KL",
        ],
        packages=[
            ServicePackage(
                "Solo Convocation Package",
                "Focused graduation portrait session for the graduate with a curated set of edited images.",
            ),
            ServicePackage(
                "Friends Group Convocation Package",
                "Group coverage designed for classmates and friends with multiple pose sets.",
            ),
            ServicePackage(
                "Family Convocation Package",
                "Convocation day portraits with parents and siblings at key campus locations.",
            ),
        ],
    ),
    "event": ServiceSeo(
        slug="event",
        name_en="Event Photography",
        name_ms="Fotografi Acara",
        title="Event Photography in Kuala Lumpur & Selangor | Fotografi Event",
        description=(
            "Event photography services in Kuala Lumpur and Selangor for corporate, community, and private "
            "events. Jurugambar acara profesional dengan tempahan WhatsApp."
        ),
        hero_title="Event Photography / Fotografi Acara",
        hero_description=(
            "Reliable event coverage for conferences, celebrations, and branded activations with fast delivery "
            "workflow."
        ),
        keywords=[
            "event photographer Kuala Lumpur",
            "event photography Selangor",
            "corporate event photographer Malaysia",
            "fotografi acara KL",
        ],
        packages=[
            ServicePackage(
                "Corporate Event Coverage",
                "Professional documentation for conferences, launches, and networking events.",
            ),
            ServicePackage(
                "Private Event Coverage",
                "Photography for birthdays, dinners, and personal celebrations with candid storytelling.",
            ),
            ServicePackage(
                "Half-Day Event Package",
                "Short-format event package tailored for compact schedules and key moments.",
            ),
        ],
    ),
}

SERVICE_SLUGS = list(SERVICE_SEO)


def site_url() -> str:
    return settings.STUDIO_SITE_URL


def absolute_url(path: str) -> str:
    if re.match(r"^https?://", path, flags=re.IGNORECASE):
        return path
    if not path.startswith("/"):
        return f"{site_url()}/{path}"
    return f"{site_url()}{path}"


def build_page_metadata(
    *,
    title: str,
    description: str,
    path: str,
    keywords: list[str] | None = None,
    image_path: str = DEFAULT_OG_IMAGE,
) -> dict:
    """
    Head metadata for one page: canonical + hreflang alternates, Open Graph,
    Twitter card and robots directives.
    """
    canonical = absolute_url(path)
    og_image = absolute_url(image_path)
    site_name = settings.STUDIO_SITE_NAME
    return {
        "title": title,
        "description": description,
        "keywords": [*BASE_KEYWORDS, *(keywords or [])],
        "canonical": canonical,
        "alternates": {"en-MY": canonical, "ms-MY": canonical, "x-default": canonical},
        "open_graph": {
            "type": "website",
            "locale": settings.STUDIO_SITE_LOCALE,
            "alternate_locale": [settings.STUDIO_ALT_LOCALE],
            "site_name": site_name,
            "url": canonical,
            "title": title,
            "description": description,
            "image": {
                "url": og_image,
                "width": 1200,
                "height": 630,
                "alt": f"{site_name} photography services in Kuala Lumpur and Selangor",
            },
        },
        "twitter": {
            "card": "summary_large_image",
            "title": title,
            "description": description,
            "image": og_image,
        },
        "robots": "index, follow, max-image-preview:large, max-snippet:-1, max-video-preview:-1",
    }


def to_json_ld(data) -> str:
    return json.dumps(data, ensure_ascii=False).replace("<", "\\u003c")


def label_from_slug(slug: str) -> str:
    return " ".join(part[:1].upper() + part[1:] for part in slug.split("-") if part)


def breadcrumb_schema(service: ServiceSeo) -> dict:
    base = site_url()
    return {
        "@context": "https://schema.org",
        "@type": "BreadcrumbList",
        "itemListElement": [
            {"@type": "ListItem", "position": 1, "name": "Home", "item": base},
            {"@type": "ListItem", "position": 2, "name": "Services", "item": f"{base}/services/"},
            {"@type": "ListItem", "position": 3, "name": service.name_en, "item": f"{base}/services/{service.slug}/"},
        ],
    }


def service_schema(service: ServiceSeo) -> dict:
    url = f"{site_url()}/services/{service.slug}/"
    return {
        "@context": "https://schema.org",
        "@type": "Service",
        "@id": f"{url}#service",
        "name": f"{service.name_en} in Kuala Lumpur & Selangor",
        "alternateName": service.name_ms,
        "description": service.description,
        "serviceType": service.name_en,
        "areaServed": [{"@type": "City", "name": area} for area in SERVICE_AREAS],
        "provider": {"@type": "LocalBusiness", "name": settings.STUDIO_SITE_NAME, "url": site_url()},
        "hasOfferCatalog": {
            "@type": "OfferCatalog",
            "name": f"{service.name_en} Packages",
            "itemListElement": [
                {
                    "@type": "Offer",
                    "itemOffered": {"@type": "Service", "name": pkg.name, "description": pkg.description},
                }
                for pkg in service.packages
            ],
        },
    }


def services_list_schema() -> dict:
    return {
        "@context": "https://schema.org",
        "@type": "ItemList",
        "name": f"{settings.STUDIO_SITE_NAME} Service Categories",
        "itemListElement": [
            {
                "@type": "ListItem",
                "position": index,
                "name": f"{service.name_en} / {service.name_ms}",
                "url": f"{site_url()}/services/{service.slug}/",
            }
            for index, service in enumerate(SERVICE_SEO.values(), start=1)
        ],
    }
