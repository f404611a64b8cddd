"""Serializers for authentication flows (register, login, phone verification)."""

from __future__ import annotations

from typing import Any

from django.contrib.auth import get_user_model  # type: ignore
from django.db import transaction  # type: ignore
from rest_framework import serializers  # type: ignore

from .models import PHONE_VALIDATOR


User = get_user_model()


class RegisterSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=150)
    email = serializers.EmailField()
    phone = serializers.CharField(validators=[PHONE_VALIDATOR])
    role = serializers.ChoiceField(choices=User.RoleChoices.choices)
    password = serializers.CharField(min_length=6, write_only=True)
    image = serializers.URLField(required=False, allow_blank=True)

    def validate_email(self, value: str) -> str:
        return User.objects.normalize_email(value)

    def email_taken(self) -> bool:
        return User.objects.filter(email__iexact=self.validated_data["email"]).exists()

    @transaction.atomic
    def create(self, validated_data: dict[str, Any]):  # type: ignore
        password = validated_data.pop("password")
        return User.objects.create_user(password=password, **validated_data)


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:  # type: ignore
        try:
            user = User.objects.get(email__iexact=attrs.get("email", ""))
        except User.DoesNotExist:
            raise serializers.ValidationError({"non_field_errors": ["Invalid email or password."]})

        if not user.is_active or not user.check_password(attrs.get("password", "")):
            raise serializers.ValidationError({"non_field_errors": ["Invalid email or password."]})

        attrs["user"] = user
        return attrs


class OtpVerifySerializer(serializers.Serializer):
    code = serializers.RegexField(regex=r"^\d{4,10}$")
