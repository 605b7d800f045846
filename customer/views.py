"""Customer API views for profile and addresses.

Endpoints are authenticated and scoped to the current user. Views stay thin
and delegate business rules to services/selectors.
"""

from drf_spectacular.utils import OpenApiExample, extend_schema
from rest_framework import generics, permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from .models import Address
from .selectors import get_default_address, get_profile, list_addresses
from .serializers import AddressSerializer, ProfileSerializer
from .services import delete_address, set_default_address


class ProfileView(generics.RetrieveUpdateAPIView):
    """Retrieve and update the authenticated user's profile."""

    permission_classes = [permissions.IsAuthenticated]
    serializer_class = ProfileSerializer
    throttle_scope = "customer"

    def get_object(self):
        return get_profile(user=self.request.user)

    @extend_schema(tags=["Customer Endpoints"], summary="Get current user's profile")
    def get(self, request, *args, **kwargs):
        return super().get(request, *args, **kwargs)

    @extend_schema(
        tags=["Customer Endpoints"],
        summary="Update profile",
        examples=[OpenApiExample("Update", value={"full_name": "Asha Rao", "sms_opt_in": False}, request_only=True)],
    )
    def patch(self, request, *args, **kwargs):
        return super().patch(request, *args, **kwargs)

    @extend_schema(tags=["Customer Endpoints"], summary="Replace profile")
    def put(self, request, *args, **kwargs):
        return super().put(request, *args, **kwargs)


class AddressListCreateView(generics.ListCreateAPIView):
    """List (default first) and create addresses for the current user."""

    permission_classes = [permissions.IsAuthenticated]
    serializer_class = AddressSerializer
    pagination_class = None
    filter_backends = []
    throttle_scope = "customer"

    def get_queryset(self):
        return list_addresses(user=self.request.user)

    @extend_schema(tags=["Customer Endpoints"], summary="List current user's addresses")
    def get(self, request, *args, **kwargs):
        return super().get(request, *args, **kwargs)

    @extend_schema(
        tags=["Customer Endpoints"],
        summary="Create a new address",
        description="Setting `is_default` clears the flag on the user's other addresses.",
    )
    def post(self, request, *args, **kwargs):
        return super().post(request, *args, **kwargs)


class AddressDetailView(generics.RetrieveUpdateDestroyAPIView):
    """Retrieve, update, or delete an address owned by the authenticated user."""

    permission_classes = [permissions.IsAuthenticated]
    serializer_class = AddressSerializer
    throttle_scope = "customer"

    def get_queryset(self):
        return Address.objects.filter(user=self.request.user)

    @extend_schema(tags=["Customer Endpoints"], summary="Get an address")
    def get(self, request, *args, **kwargs):
        return super().get(request, *args, **kwargs)

    @extend_schema(tags=["Customer Endpoints"], summary="Update an address")
    def patch(self, request, *args, **kwargs):
        return super().patch(request, *args, **kwargs)

    @extend_schema(tags=["Customer Endpoints"], summary="Replace an address")
    def put(self, request, *args, **kwargs):
        return super().put(request, *args, **kwargs)

    @extend_schema(tags=["Customer Endpoints"], summary="Delete an address")
    def delete(self, request, *args, **kwargs):
        return super().delete(request, *args, **kwargs)

    def perform_destroy(self, instance: Address) -> None:
        delete_address(user=self.request.user, address_id=instance.id)


class AddressSetDefaultView(APIView):
    permission_classes = [permissions.IsAuthenticated]
    throttle_scope = "customer"

    @extend_schema(tags=["Customer Endpoints"], summary="Make an address the default", responses=AddressSerializer)
    def post(self, request, pk: int):
        address = set_default_address(user=request.user, address_id=pk)
        return Response(AddressSerializer(address).data, status=status.HTTP_200_OK)


class DefaultAddressView(APIView):
    permission_classes = [permissions.IsAuthenticated]
    throttle_scope = "customer"

    @extend_schema(tags=["Customer Endpoints"], summary="Get the default address", responses=AddressSerializer)
    def get(self, request):
        address = get_default_address(user=request.user)
        if address is None:
            return Response({"detail": "No default address."}, status=status.HTTP_404_NOT_FOUND)
        return Response(AddressSerializer(address).data)
