"""Admin registration for bookings."""

from __future__ import annotations

from django.contrib import admin

from .models import Booking


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "product",
        "user",
        "starts_at",
        "ends_at",
        "contact_number",
        "created_at",
    )
    list_filter = ("starts_at", "ends_at")
    search_fields = ("product__name", "user__email", "contact_number")
    readonly_fields = (
        "id",
        "product",
        "user",
        "starts_at",
        "ends_at",
        "booking_query",
        "contact_number",
        "address",
        "created_at",
    )

    def has_add_permission(self, request):  # type: ignore
        # rows are only created through the admission checker
        return False
