"""Booking models for Rentshare."""

from __future__ import annotations

import uuid

from django.conf import settings  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Booking(models.Model):
    """A borrower's reservation of a product for [starts_at, ends_at].

    Rows are inserted only by the admission checker and deleted only by
    cancellation; there is no update path.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    product = models.ForeignKey(
        "products.Product",
        on_delete=models.CASCADE,
        related_name="bookings",
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="bookings",
    )
    starts_at = models.DateTimeField(_("From"))
    ends_at = models.DateTimeField(_("To"))
    booking_query = models.TextField(blank=True)
    contact_number = models.CharField(max_length=32)
    address = models.CharField(max_length=255)
    created_at = models.DateTimeField(editable=False)

    class Meta:
        verbose_name = _("Booking")
        verbose_name_plural = _("Bookings")
        ordering = ["-created_at"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(ends_at__gt=models.F("starts_at")),
                name="booking_valid_period",
            ),
        ]
        indexes = [
            models.Index(fields=["product", "starts_at", "ends_at"], name="booking_product_period_idx"),
            models.Index(fields=["user", "created_at"], name="booking_user_created_idx"),
        ]

    def __str__(self) -> str:
        return f"Booking {self.id} for {self.product_id}"
