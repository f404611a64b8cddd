"""Serializers for the booking domain."""

from __future__ import annotations

from django.utils import timezone  # type: ignore
from rest_framework import serializers  # type: ignore

from apps.bookings.domain.entities import derive_status
from apps.products.serializers import ProductSummarySerializer
from apps.users.serializers import UserSummarySerializer

from .models import Booking
from .repositories import booking_from_model


class BookingCreateSerializer(serializers.Serializer):
    """Shape of a booking request; admission rules live in the checker."""

    product = serializers.UUIDField()
    starts_at = serializers.DateTimeField()
    ends_at = serializers.DateTimeField()
    booking_query = serializers.CharField(required=False, allow_blank=True, default="")
    contact_number = serializers.CharField(max_length=32)
    address = serializers.CharField(max_length=255)


class BookingSerializer(serializers.ModelSerializer):
    """Booking with product and booker summaries."""

    product = ProductSummarySerializer(read_only=True)
    user = UserSummarySerializer(read_only=True)
    status = serializers.SerializerMethodField()

    class Meta:
        model = Booking
        fields = [
            "id",
            "product",
            "user",
            "starts_at",
            "ends_at",
            "status",
            "booking_query",
            "contact_number",
            "address",
            "created_at",
        ]

    def get_status(self, obj: Booking) -> str:
        now = self.context.get("now") or timezone.now()
        return derive_status(booking_from_model(obj), now).value
