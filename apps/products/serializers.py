"""Serializers for the products domain."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from apps.users.serializers import UserSummarySerializer

from .models import Product


class ProductSummarySerializer(serializers.ModelSerializer):
    """Product block embedded in booking responses."""

    class Meta:
        model = Product
        fields = ["id", "name", "description", "images", "address"]


class ProductSerializer(serializers.ModelSerializer):
    owner = UserSummarySerializer(read_only=True)

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "description",
            "images",
            "address",
            "owner",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "owner", "created_at", "updated_at"]


class ProductWriteSerializer(serializers.ModelSerializer):
    name = serializers.CharField(max_length=255)
    description = serializers.CharField()
    images = serializers.ListField(child=serializers.URLField(max_length=500))
    address = serializers.CharField(max_length=255)

    class Meta:
        model = Product
        fields = ["name", "description", "images", "address"]

    def create(self, validated_data):  # type: ignore
        request = self.context["request"]
        return Product.objects.create(owner=request.user, **validated_data)
