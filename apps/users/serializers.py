"""Serializers for user-related API endpoints."""

from __future__ import annotations

from django.contrib.auth import get_user_model  # type: ignore
from rest_framework import serializers  # type: ignore

User = get_user_model()


class UserSummarySerializer(serializers.ModelSerializer):
    """Short owner/booker block embedded in product and booking responses."""

    class Meta:
        model = User
        fields = ["id", "name", "email"]


class UserSerializer(serializers.ModelSerializer):
    """Main user serializer (never exposes the password)."""

    class Meta:
        model = User
        fields = [
            "id",
            "name",
            "email",
            "phone",
            "role",
            "image",
            "is_phone_verified",
            "created_at",
            "updated_at",
        ]
        read_only_fields = [
            "id",
            "email",
            "role",
            "is_phone_verified",
            "created_at",
            "updated_at",
        ]
