from django.conf import settings
from django.contrib import messages
from django.contrib.auth.views import LoginView, LogoutView
from django.core.exceptions import NON_FIELD_ERRORS
from django.http import HttpResponseRedirect
from django.shortcuts import redirect
from django.urls import reverse, reverse_lazy

from studio.services import is_admin

from .forms import AdminLoginForm


class AppLoginView(LoginView):
    template_name = "accounts/login.html"
    authentication_form = AdminLoginForm

    def dispatch(self, request, *args, **kwargs):
        # Signed-in admins skip the form; a signed-in non-admin may switch account.
        if is_admin(request.user):
            return redirect(self.get_success_url())
        return super().dispatch(request, *args, **kwargs)

    def form_valid(self, form):
        messages.success(self.request, "Welcome back.")
        return super().form_valid(form)

    def form_invalid(self, form):
        if form.has_error(NON_FIELD_ERRORS, "not_admin"):
            messages.error(self.request, form.error_messages["not_admin"])
        else:
            messages.error(self.request, "Login failed. Please check your credentials.")
        return super().form_invalid(form)


class AppLogoutView(LogoutView):
    next_page = reverse_lazy("accounts:login")

    def post(self, request, *args, **kwargs):
        response = super().post(request, *args, **kwargs)
        messages.info(request, "Signed out.")
        return response


def google_login_redirect(request):
    """
    Google sign-in entry point under /accounts/; allauth itself is mounted at /social/.
    Only staff accounts get past the studio guard afterwards.
    """
    if not getattr(settings, "GOOGLE_OAUTH_ENABLED", False):
        messages.info(request, "Google Sign-In is not configured yet.")
        return redirect("accounts:login")

    target = reverse("google_login")
    if request.GET:
        target = f"{target}?{request.GET.urlencode()}"
    return HttpResponseRedirect(target)
