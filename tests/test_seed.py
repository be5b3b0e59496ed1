from __future__ import annotations

import pytest
from django.core.management import call_command

from studio.models import PhotographyType, SiteSettings
from studio.seed import seed_studio


pytestmark = pytest.mark.django_db


def test_seed_is_idempotent():
    first = seed_studio()
    second = seed_studio()

    assert first == {"created": 3, "updated": 0, "skipped": 0, "settings_created": 1}
    assert second == {"created": 0, "updated": 0, "skipped": 3, "settings_created": 0}
    assert list(PhotographyType.objects.values_list("slug", flat=True)) == ["convocation", "wedding", "event"]
    assert SiteSettings.objects.get().brand_name == "Raygraphy"


def test_seed_keeps_edits_unless_asked():
    seed_studio()
    PhotographyType.objects.filter(slug="wedding").update(name="Weddings & Engagements")

    seed_studio()
    assert PhotographyType.objects.get(slug="wedding").name == "Weddings & Engagements"

    result = seed_studio(update_existing=True)
    assert result["updated"] == 3
    assert PhotographyType.objects.get(slug="wedding").name == "Wedding"


def test_seed_command(capsys):
    call_command("seed_studio")
    assert "created=3" in capsys.readouterr().out
