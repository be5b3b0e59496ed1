from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.contrib.sitemaps.views import sitemap
from django.urls import include, path
from django.utils.module_loading import autodiscover_modules

from studio.sitemaps import sitemaps


# Autodiscover first so allauth has registered its models before we drop them.
autodiscover_modules("admin", register_to=admin.site)


def unregister_irrelevant_admin_models():
    """Remove Site and allauth models from admin index."""
    from allauth.socialaccount.models import SocialAccount, SocialApp, SocialToken
    from django.contrib.sites.models import Site

    for model in (Site, SocialAccount, SocialApp, SocialToken):
        try:
            admin.site.unregister(model)
        except admin.sites.NotRegistered:
            pass


unregister_irrelevant_admin_models()


urlpatterns = [
    path("admin/", admin.site.urls),
    path("accounts/", include("accounts.urls")),
    path("social/", include("allauth.urls")),
    path("sitemap.xml", sitemap, {"sitemaps": sitemaps}, name="sitemap"),
    path("", include("studio.urls")),
]

if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
