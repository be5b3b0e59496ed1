from django.conf import settings

from studio.providers import get_site_settings


def oauth_flags(request):
    return {
        "GOOGLE_OAUTH_ENABLED": getattr(settings, "GOOGLE_OAUTH_ENABLED", False),
    }


def site_settings(request):
    return {
        "site_settings": get_site_settings(),
        "SITE_NAME": settings.STUDIO_SITE_NAME,
    }
