from urllib.parse import urlsplit

from django.conf import settings
from django.contrib.sitemaps import Sitemap
from django.urls import reverse

from .seo import SERVICE_SLUGS


class StudioSitemap(Sitemap):
    """Absolute URLs come from STUDIO_SITE_URL instead of the Sites framework."""

    changefreq = "weekly"

    @property
    def protocol(self):
        return urlsplit(settings.STUDIO_SITE_URL).scheme or "https"

    def get_domain(self, site=None):
        return urlsplit(settings.STUDIO_SITE_URL).netloc


class StaticPagesSitemap(StudioSitemap):
    _priorities = {"studio:home": 1.0, "studio:services": 0.9, "studio:gallery": 0.8}

    def items(self):
        return list(self._priorities)

    def location(self, item):
        return reverse(item)

    def priority(self, item):
        return self._priorities[item]


class ServicePagesSitemap(StudioSitemap):
    priority = 0.85

    def items(self):
        return SERVICE_SLUGS

    def location(self, item):
        return reverse("studio:service_detail", args=[item])


sitemaps = {
    "static": StaticPagesSitemap,
    "services": ServicePagesSitemap,
}
