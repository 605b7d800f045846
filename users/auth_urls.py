"""Authentication routes: JWT sign-in, refresh and sign-out (blacklist)."""

from django.urls import path

from .views import RefreshView, SignInView, SignOutView

urlpatterns = [
    path("signin/", SignInView.as_view(), name="signin"),
    path("refresh/", RefreshView.as_view(), name="token_refresh"),
    path("signout/", SignOutView.as_view(), name="signout"),
]
