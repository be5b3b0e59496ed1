from django.urls import path

from . import views


app_name = "accounts"

# Admin-only sign-in; visitors never authenticate.
urlpatterns = [
    path("sign-in/", views.AppLoginView.as_view(), name="login"),
    path("sign-out/", views.AppLogoutView.as_view(), name="logout"),
    path("sign-in/google/", views.google_login_redirect, name="google_sign_in"),
]
