from django import forms
from django.contrib.auth.forms import AuthenticationForm
from django.core.exceptions import ValidationError

from studio.services import is_admin


class AdminLoginForm(AuthenticationForm):
    """Sign-in for the studio back-office; valid credentials alone are not enough."""

    error_messages = {
        **AuthenticationForm.error_messages,
        "not_admin": "This account does not have admin access.",
    }

    username = forms.CharField(
        label="Username",
        widget=forms.TextInput(attrs={"autocomplete": "username", "autofocus": True}),
    )
    password = forms.CharField(
        strip=False,
        widget=forms.PasswordInput(attrs={"autocomplete": "current-password"}),
    )

    def confirm_login_allowed(self, user):
        super().confirm_login_allowed(user)
        if not is_admin(user):
            raise ValidationError(self.error_messages["not_admin"], code="not_admin")
