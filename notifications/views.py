"""Notification endpoints for the signed-in user."""

from common.choices import NotificationType
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema, inline_serializer
from rest_framework import generics, status
from rest_framework import serializers as rf_serializers
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from .selectors import list_notifications, unread_count
from .serializers import NotificationSerializer
from .services import delete_notification, mark_all_as_read, mark_as_read


class NotificationListView(generics.ListAPIView):
    permission_classes = [IsAuthenticated]
    serializer_class = NotificationSerializer
    filter_backends = []
    throttle_scope = "notifications"

    def get_queryset(self):
        params = self.request.query_params
        read = params.get("read")
        return list_notifications(
            user=self.request.user,
            type=params.get("type") or None,
            read=None if read is None else read.lower() in ("1", "true", "yes"),
        )

    @extend_schema(
        tags=["Notification Endpoints"],
        summary="List notifications",
        parameters=[
            OpenApiParameter("type", OpenApiTypes.STR, enum=NotificationType.values),
            OpenApiParameter("read", OpenApiTypes.BOOL),
        ],
    )
    def get(self, request, *args, **kwargs):
        return super().get(request, *args, **kwargs)


class UnreadCountView(APIView):
    permission_classes = [IsAuthenticated]
    throttle_scope = "notifications"

    @extend_schema(
        tags=["Notification Endpoints"],
        summary="Unread notification count",
        responses=inline_serializer(name="UnreadCount", fields={"count": rf_serializers.IntegerField()}),
    )
    def get(self, request):
        return Response({"count": unread_count(user=request.user)})


class MarkReadView(APIView):
    permission_classes = [IsAuthenticated]
    throttle_scope = "notifications"

    @extend_schema(
        tags=["Notification Endpoints"],
        summary="Mark one notification read",
        request=None,
        responses=NotificationSerializer,
    )
    def post(self, request, notification_id: int):
        notification = mark_as_read(user=request.user, notification_id=notification_id)
        return Response(NotificationSerializer(notification).data)


class MarkAllReadView(APIView):
    permission_classes = [IsAuthenticated]
    throttle_scope = "notifications"

    @extend_schema(
        tags=["Notification Endpoints"],
        summary="Mark all notifications read",
        request=None,
        responses=inline_serializer(name="MarkAllRead", fields={"updated": rf_serializers.IntegerField()}),
    )
    def post(self, request):
        return Response({"updated": mark_all_as_read(user=request.user)})


class NotificationDeleteView(APIView):
    permission_classes = [IsAuthenticated]
    throttle_scope = "notifications"

    @extend_schema(tags=["Notification Endpoints"], summary="Delete a notification", responses={204: None})
    def delete(self, request, notification_id: int):
        delete_notification(user=request.user, notification_id=notification_id)
        return Response(status=status.HTTP_204_NO_CONTENT)
