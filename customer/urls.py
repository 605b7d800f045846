"""URL routes for the customer app."""

from django.urls import path

from .views import AddressDetailView, AddressListCreateView, AddressSetDefaultView, DefaultAddressView, ProfileView

app_name = "customer"

urlpatterns = [
    path("profile/", ProfileView.as_view(), name="profile"),
    path("addresses/", AddressListCreateView.as_view(), name="address-list-create"),
    path("addresses/default/", DefaultAddressView.as_view(), name="address-default"),
    path("addresses/<int:pk>/", AddressDetailView.as_view(), name="address-detail"),
    path("addresses/<int:pk>/set-default/", AddressSetDefaultView.as_view(), name="address-set-default"),
]
