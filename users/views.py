"""Users app API views: profile, registration, password reset and JWT auth."""

from common.throttling import SettingsScopedRateThrottle
from django.contrib.auth import get_user_model
from django.contrib.auth.password_validation import validate_password
from django.contrib.auth.tokens import default_token_generator
from django.core.exceptions import ValidationError as DjangoValidationError
from django.utils.encoding import force_str
from django.utils.http import urlsafe_base64_decode
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes, throttle_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.tokens import RefreshToken, TokenError
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from .logging import log_auth_event
from .serializers import (
    EmailOrPhoneTokenObtainPairSerializer,
    PasswordResetConfirmSerializer,
    RegistrationSerializer,
    UserMeSerializer,
)
from .services import send_password_reset_email

_RESET_ACK = "If the email exists, a reset will be sent."


@extend_schema(
    operation_id="users_current_user",
    summary="Get current user profile",
    description="Returns the authenticated user's account fields. 401 without credentials.",
    tags=["User Endpoints"],
    responses={
        200: OpenApiResponse(description="User profile", response=UserMeSerializer),
        401: OpenApiResponse(description="Unauthorized"),
    },
)
@api_view(["GET"])
@permission_classes([IsAuthenticated])
@throttle_classes([SettingsScopedRateThrottle])
def current_user(request):
    return Response(UserMeSerializer(request.user).data)


current_user.throttle_scope = "profile"


@extend_schema(tags=["User Endpoints"], request=RegistrationSerializer, responses={201: UserMeSerializer})
@api_view(["POST"])
@permission_classes([AllowAny])
@throttle_classes([SettingsScopedRateThrottle])
def register(request):
    serializer = RegistrationSerializer(data=request.data)
    if not serializer.is_valid():
        log_auth_event("register", request, status="invalid")
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    user = serializer.save()
    log_auth_event("register", request, user=user)
    return Response(UserMeSerializer(user).data, status=status.HTTP_201_CREATED)


register.throttle_scope = "register"


@extend_schema(tags=["User Endpoints"])
@api_view(["POST"])
@permission_classes([AllowAny])
@throttle_classes([SettingsScopedRateThrottle])
def password_reset_request(request):
    """Start a password reset; the response never reveals whether the account exists."""
    email = (request.data.get("email") or "").strip().lower()
    user = get_user_model().objects.filter(email=email, is_active=True).first() if email else None
    if user is None:
        log_auth_event("password_reset_request", request, status="not_found")
        return Response({"detail": _RESET_ACK})
    uid, _token = send_password_reset_email(user)
    log_auth_event("password_reset_request", request, user=user, status="sent", extra={"uid": uid})
    return Response({"detail": _RESET_ACK})


password_reset_request.throttle_scope = "password_reset"


@extend_schema(tags=["User Endpoints"], request=PasswordResetConfirmSerializer)
@api_view(["POST"])
@permission_classes([AllowAny])
@throttle_classes([SettingsScopedRateThrottle])
def password_reset_confirm(request):
    serializer = PasswordResetConfirmSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    User = get_user_model()
    try:
        uid = force_str(urlsafe_base64_decode(data["uid"]))
        user = User.objects.get(pk=uid)
    except (TypeError, ValueError, OverflowError, User.DoesNotExist):
        log_auth_event("password_reset_confirm", request, status="invalid")
        return Response({"detail": "Invalid link."}, status=status.HTTP_400_BAD_REQUEST)

    if not default_token_generator.check_token(user, data["token"]):
        log_auth_event("password_reset_confirm", request, user=user, status="invalid_token")
        return Response({"detail": "Invalid or expired token."}, status=status.HTTP_400_BAD_REQUEST)

    try:
        validate_password(data["new_password"], user=user)
    except DjangoValidationError as exc:
        log_auth_event("password_reset_confirm", request, user=user, status="invalid_password")
        return Response({"detail": " ".join(exc.messages)}, status=status.HTTP_400_BAD_REQUEST)

    user.set_password(data["new_password"])
    user.save(update_fields=["password"])
    log_auth_event("password_reset_confirm", request, user=user)
    return Response({"detail": "Password has been reset."})


password_reset_confirm.throttle_scope = "password_reset"


class SignOutView(APIView):
    """Blacklist a refresh token."""

    throttle_classes = [SettingsScopedRateThrottle]
    throttle_scope = "signout"
    permission_classes = [AllowAny]

    @extend_schema(tags=["User Endpoints"])
    def post(self, request):
        refresh = request.data.get("refresh")
        if not refresh:
            return Response({"detail": "Refresh token is required."}, status=status.HTTP_400_BAD_REQUEST)
        try:
            RefreshToken(refresh).blacklist()
        except TokenError:
            log_auth_event("signout", request, status="invalid_token")
            return Response({"detail": "Invalid token."}, status=status.HTTP_400_BAD_REQUEST)
        log_auth_event("signout", request)
        return Response({"detail": "Signed out."}, status=status.HTTP_205_RESET_CONTENT)


class SignInView(TokenObtainPairView):
    throttle_classes = [SettingsScopedRateThrottle]
    throttle_scope = "signin"
    serializer_class = EmailOrPhoneTokenObtainPairSerializer

    @extend_schema(tags=["User Endpoints"])
    def post(self, request, *args, **kwargs):
        resp = super().post(request, *args, **kwargs)
        log_auth_event("signin", request, status="success" if resp.status_code == 200 else "failed")
        return resp


class RefreshView(TokenRefreshView):
    throttle_classes = [SettingsScopedRateThrottle]
    throttle_scope = "token_refresh"

    @extend_schema(tags=["User Endpoints"])
    def post(self, request, *args, **kwargs):
        resp = super().post(request, *args, **kwargs)
        log_auth_event("token_refresh", request, status="success" if resp.status_code == 200 else "failed")
        return resp
