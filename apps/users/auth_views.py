"""Views for authentication flows (register, login, phone verification)."""

from __future__ import annotations

import logging

from django.db import IntegrityError  # type: ignore
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.tokens import RefreshToken  # type: ignore

from .auth_serializers import LoginSerializer, OtpVerifySerializer, RegisterSerializer
from .serializers import UserSerializer
from .verification import get_verification_service

logger = logging.getLogger(__name__)


def _tokens_for_user(user) -> dict[str, str]:
    refresh = RefreshToken.for_user(user)
    refresh["email"] = user.email
    refresh["role"] = user.role
    return {"refresh": str(refresh), "access": str(refresh.access_token)}


USER_EXISTS = {"detail": "User already exists with this email"}


class RegisterView(APIView):
    permission_classes = [AllowAny]

    def post(self, request):  # type: ignore
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        if serializer.email_taken():
            return Response(USER_EXISTS, status=status.HTTP_409_CONFLICT)
        try:
            user = serializer.save()
        except IntegrityError:
            # a concurrent registration took the email after the check
            logger.warning("Registration lost a race on a duplicate email")
            return Response(USER_EXISTS, status=status.HTTP_409_CONFLICT)
        logger.info(f"Registered {user.role} {user.id}")
        data = {
            "user": UserSerializer(user).data,
            "tokens": _tokens_for_user(user),
        }
        return Response(data, status=status.HTTP_201_CREATED)


class LoginView(APIView):
    permission_classes = [AllowAny]

    def post(self, request):  # type: ignore
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.validated_data["user"]
        data = {
            "user": UserSerializer(user).data,
            "tokens": _tokens_for_user(user),
        }
        return Response(data, status=status.HTTP_200_OK)


class OtpSendView(APIView):
    permission_classes = [IsAuthenticated]
    verification_service_factory = staticmethod(get_verification_service)

    def post(self, request):  # type: ignore
        result = self.verification_service_factory().send_code(request.user.phone)
        if result.failed:
            return Response({"detail": result.error}, status=status.HTTP_502_BAD_GATEWAY)
        return Response({"status": result.status.value}, status=status.HTTP_202_ACCEPTED)


class OtpVerifyView(APIView):
    permission_classes = [IsAuthenticated]
    verification_service_factory = staticmethod(get_verification_service)

    def post(self, request):  # type: ignore
        serializer = OtpVerifySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = request.user

        result = self.verification_service_factory().check_code(user.phone, serializer.validated_data["code"])
        if result.failed:
            return Response({"detail": result.error}, status=status.HTTP_502_BAD_GATEWAY)
        if not result.approved:
            return Response({"detail": result.error}, status=status.HTTP_400_BAD_REQUEST)

        user.mark_phone_verified()
        logger.info(f"Phone verified for user {user.id}")
        return Response(
            {"status": result.status.value, "user": UserSerializer(user).data},
            status=status.HTTP_200_OK,
        )
