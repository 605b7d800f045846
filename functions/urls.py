from django.urls import path

from .views import CreateOrderFunction, SearchProductsFunction, SendNotificationFunction

app_name = "functions"

urlpatterns = [
    path("create-order", CreateOrderFunction.as_view(), name="create-order"),
    path("search-products", SearchProductsFunction.as_view(), name="search-products"),
    path("send-notification", SendNotificationFunction.as_view(), name="send-notification"),
]
