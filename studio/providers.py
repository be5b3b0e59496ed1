from __future__ import annotations

import logging

from django.conf import settings
from django.db import DatabaseError

from .models import PhotographyType, SiteSettings, capitalize_slug


logger = logging.getLogger(__name__)


def get_site_settings() -> SiteSettings | None:
    try:
        return SiteSettings.load()
    except DatabaseError:
        logger.exception("Loading site settings failed")
        return None


def get_photography_types(*, active_only: bool = True) -> list[PhotographyType]:
    qs = PhotographyType.objects.all()
    if active_only:
        qs = qs.filter(is_active=True)
    try:
        return list(qs.order_by("sort_order", "created_at"))
    except DatabaseError:
        logger.exception("Error loading photography types")
        return []


def default_categories() -> list[tuple[str, str]]:
    return [(slug, label) for slug, label in getattr(settings, "STUDIO_DEFAULT_CATEGORIES", [])]


def category_options(types: list[PhotographyType] | None = None) -> list[tuple[str, str]]:
    """
    (slug, label) pairs for category pickers. Falls back to the configured
    default taxonomy while no type exists.
    """
    if types is None:
        types = get_photography_types()
    if types:
        return [(t.slug, t.name) for t in types]
    return default_categories()


def category_label(slug: str | None, types: list[PhotographyType] | None = None) -> str:
    if not slug:
        return ""
    for t in types or []:
        if t.slug == slug:
            return t.name
    for default_slug, label in default_categories():
        if default_slug == slug:
            return label
    return capitalize_slug(slug)


def resolve_category(requested: str | None, options: list[tuple[str, str]]) -> str | None:
    """Keep the requested slug when it is offered, otherwise the first option."""
    slugs = [slug for slug, _ in options]
    if requested and requested in slugs:
        return requested
    return slugs[0] if slugs else None
