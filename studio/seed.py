from __future__ import annotations

from dataclasses import dataclass

from django.conf import settings
from django.db import transaction

from .models import PhotographyType, SiteSettings


@dataclass(frozen=True)
class TypeSeed:
    name: str
    slug: str
    sort_order: int


def default_type_seeds() -> list[TypeSeed]:
    return [
        TypeSeed(name=label, slug=slug, sort_order=(index + 1) * 10)
        for index, (slug, label) in enumerate(settings.STUDIO_DEFAULT_CATEGORIES)
    ]


def seed_studio(*, update_existing: bool = False) -> dict[str, int]:
    """
    Idempotently seed the default photography types and the settings row.

    - If update_existing is False: creates missing types only (does not overwrite edits).
    - If update_existing is True: resets existing types to the default name and order.
    """
    created = 0
    updated = 0
    skipped = 0

    with transaction.atomic():
        for seed in default_type_seeds():
            defaults = {"name": seed.name, "sort_order": seed.sort_order, "is_active": True}
            if update_existing:
                _, was_created = PhotographyType.objects.update_or_create(slug=seed.slug, defaults=defaults)
                if was_created:
                    created += 1
                else:
                    updated += 1
            else:
                _, was_created = PhotographyType.objects.get_or_create(slug=seed.slug, defaults=defaults)
                if was_created:
                    created += 1
                else:
                    skipped += 1

        _, settings_created = SiteSettings.objects.get_or_create(
            id=SiteSettings.SINGLETON_ID,
            defaults={"brand_name": settings.STUDIO_SITE_NAME},
        )

    return {"created": created, "updated": updated, "skipped": skipped, "settings_created": int(settings_created)}
