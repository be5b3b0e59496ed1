import os

os.environ.setdefault("DJANGO_SECRET_KEY", "test-only-secret-key")
os.environ.setdefault("USE_SQLITE", "1")

from .settings import *  # noqa: E402,F401,F403
from .settings import STORAGE_BUCKETS  # noqa: E402


DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

STORAGES = {
    "default": {"BACKEND": "django.core.files.storage.InMemoryStorage"},
    "staticfiles": {"BACKEND": "django.contrib.staticfiles.storage.StaticFilesStorage"},
    **{
        bucket: {
            "BACKEND": "django.core.files.storage.InMemoryStorage",
            "OPTIONS": {"base_url": f"/media/{bucket}/"},
        }
        for bucket in STORAGE_BUCKETS
    },
}

STATICFILES_DIRS = []

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

STUDIO_PUBLIC_CALENDAR_USES_BOOKED_DAYS = True
