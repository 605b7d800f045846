from django.urls import path

from .views import MarkAllReadView, MarkReadView, NotificationDeleteView, NotificationListView, UnreadCountView

app_name = "notifications"

urlpatterns = [
    path("", NotificationListView.as_view(), name="notification-list"),
    path("unread-count/", UnreadCountView.as_view(), name="unread-count"),
    path("read-all/", MarkAllReadView.as_view(), name="read-all"),
    path("<int:notification_id>/read/", MarkReadView.as_view(), name="mark-read"),
    path("<int:notification_id>/", NotificationDeleteView.as_view(), name="notification-delete"),
]
