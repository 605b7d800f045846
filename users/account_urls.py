from django.urls import path

from .views import current_user, password_reset_confirm, password_reset_request, register

urlpatterns = [
    path("profile/", current_user, name="profile"),
    path("register/", register, name="register"),
    path("password-reset/", password_reset_request, name="password_reset_request"),
    path("password-reset/confirm/", password_reset_confirm, name="password_reset_confirm"),
]
