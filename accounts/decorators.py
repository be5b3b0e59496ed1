from functools import wraps

from django.contrib import messages
from django.contrib.auth.views import redirect_to_login

from studio.services import is_admin


def admin_required(view_func):
    """
    No session -> login. Signed in without admin rights -> login as well,
    with an explanation. Writes are re-checked in the service layer.
    """

    @wraps(view_func)
    def _wrapped(request, *args, **kwargs):
        if not request.user.is_authenticated:
            return redirect_to_login(request.get_full_path())
        if not is_admin(request.user):
            messages.error(request, "This account does not have admin access.")
            return redirect_to_login(request.get_full_path())
        return view_func(request, *args, **kwargs)

    return _wrapped
