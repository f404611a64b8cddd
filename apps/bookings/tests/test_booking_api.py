"""Integration tests for booking API endpoints."""

from __future__ import annotations

from datetime import timedelta
from unittest import mock

from django.db import OperationalError
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.models import Booking
from apps.products.models import Product
from apps.users.models import User


class BookingAPITests(APITestCase):
    """Covers creation, conflicts, status and cancellation of bookings."""

    def setUp(self) -> None:
        self.borrower = User.objects.create_user(
            email="borrower@example.com",
            name="Bea Borrower",
            phone="5550000002",
            password="BorrowPass1",
            role=User.RoleChoices.BORROWER,
        )
        self.other_borrower = User.objects.create_user(
            email="other@example.com",
            name="Otto Other",
            phone="5550000004",
            password="OtherPass1",
            role=User.RoleChoices.BORROWER,
        )
        self.lender = User.objects.create_user(
            email="lender@example.com",
            name="Lee Lender",
            phone="5550000003",
            password="LenderPass1",
            role=User.RoleChoices.LENDER,
        )
        self.product = Product.objects.create(
            owner=self.lender,
            name="Camping tent",
            description="Four person tent with rain fly.",
            images=["https://example.com/tent.jpg"],
            address="12 Elm Street",
        )
        self.client.force_authenticate(self.borrower)
        self.list_url = reverse("booking-list")
        self.start = (timezone.now() + timedelta(days=10)).replace(microsecond=0)

    def _payload(self, starts_at, ends_at, product=None) -> dict[str, str]:
        return {
            "product": str(product or self.product.id),
            "starts_at": starts_at.isoformat(),
            "ends_at": ends_at.isoformat(),
            "contact_number": "5550000002",
            "address": "7 Oak Avenue",
            "booking_query": "Need it for the weekend",
        }

    def _book(self, starts_at, ends_at, user=None):
        self.client.force_authenticate(user or self.borrower)
        return self.client.post(self.list_url, self._payload(starts_at, ends_at), format="json")

    def test_borrower_can_create_booking(self) -> None:
        response = self._book(self.start, self.start + timedelta(days=3))

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(Booking.objects.count(), 1)
        self.assertEqual(response.data["product"]["name"], "Camping tent")
        self.assertEqual(response.data["user"]["email"], self.borrower.email)
        self.assertEqual(response.data["status"], "upcoming")
        booking = Booking.objects.get()
        self.assertEqual(booking.user, self.borrower)
        self.assertEqual(booking.booking_query, "Need it for the weekend")

    def test_touching_interval_conflicts(self) -> None:
        first = self._book(self.start, self.start + timedelta(days=2))
        self.assertEqual(first.status_code, status.HTTP_201_CREATED, first.data)

        response = self._book(
            self.start + timedelta(days=2),
            self.start + timedelta(days=4),
            user=self.other_borrower,
        )

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT, response.data)
        self.assertEqual(response.data["code"], "conflict")
        self.assertIn("conflict", response.data)
        self.assertEqual(Booking.objects.count(), 1)

    def test_adjacent_interval_is_admitted(self) -> None:
        self._book(self.start, self.start + timedelta(days=2))

        response = self._book(
            self.start + timedelta(days=2, seconds=1),
            self.start + timedelta(days=4),
            user=self.other_borrower,
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(Booking.objects.count(), 2)

    def test_reversed_interval_is_rejected(self) -> None:
        response = self._book(self.start + timedelta(days=2), self.start)

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["code"], "invalid_interval")

    def test_past_interval_is_rejected(self) -> None:
        past = timezone.now() - timedelta(days=2)

        response = self._book(past, past + timedelta(days=1))

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["code"], "invalid_interval")

    def test_unknown_product_returns_404(self) -> None:
        payload = self._payload(
            self.start,
            self.start + timedelta(days=1),
            product="00000000-0000-0000-0000-000000000000",
        )

        response = self.client.post(self.list_url, payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["detail"], "Product not found")

    def test_missing_fields_return_validation_errors(self) -> None:
        response = self.client.post(self.list_url, {"product": str(self.product.id)}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("starts_at", response.data)
        self.assertIn("contact_number", response.data)

    def test_lender_cannot_create_booking(self) -> None:
        response = self._book(self.start, self.start + timedelta(days=1), user=self.lender)

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data["detail"], "Only borrowers can access this")

    def test_owner_cannot_book_own_product(self) -> None:
        self.product.owner = self.borrower
        self.product.save(update_fields=["owner"])

        response = self._book(self.start, self.start + timedelta(days=1))

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["code"], "self_booking_forbidden")

    def test_anonymous_request_is_unauthorized(self) -> None:
        self.client.force_authenticate(None)

        response = self.client.post(self.list_url, self._payload(self.start, self.start + timedelta(days=1)), format="json")

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_store_failure_returns_500(self) -> None:
        with mock.patch(
            "apps.bookings.repositories.DjangoBookingRepository.add",
            side_effect=OperationalError("disk I/O error"),
        ):
            response = self._book(self.start, self.start + timedelta(days=1))

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.data["code"], "store_failure")
        self.assertFalse(Booking.objects.exists())

    def test_mine_lists_only_own_bookings(self) -> None:
        self._book(self.start, self.start + timedelta(days=1))
        self._book(self.start + timedelta(days=5), self.start + timedelta(days=6), user=self.other_borrower)

        self.client.force_authenticate(self.borrower)
        response = self.client.get(reverse("booking-mine"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["count"], 1)
        self.assertEqual(response.data["results"][0]["user"]["id"], self.borrower.id)

    def test_retrieve_restricted_to_booker(self) -> None:
        created = self._book(self.start, self.start + timedelta(days=1))
        url = reverse("booking-detail", args=[created.data["id"]])

        self.assertEqual(self.client.get(url).status_code, status.HTTP_200_OK)

        self.client.force_authenticate(self.other_borrower)
        self.assertEqual(self.client.get(url).status_code, status.HTTP_403_FORBIDDEN)

    def test_status_reflects_current_time(self) -> None:
        now = timezone.now()
        booking = Booking.objects.create(
            product=self.product,
            user=self.borrower,
            starts_at=now - timedelta(days=1),
            ends_at=now + timedelta(days=1),
            contact_number="5550000002",
            address="7 Oak Avenue",
            created_at=now - timedelta(days=3),
        )

        response = self.client.get(reverse("booking-detail", args=[booking.id]))

        self.assertEqual(response.data["status"], "active")

    def test_cancel_upcoming_booking(self) -> None:
        created = self._book(self.start, self.start + timedelta(days=1))

        response = self.client.delete(reverse("booking-detail", args=[created.data["id"]]))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["detail"], "Booking deleted successfully")
        self.assertFalse(Booking.objects.exists())

    def test_cancel_someone_elses_booking(self) -> None:
        created = self._book(self.start, self.start + timedelta(days=1))

        self.client.force_authenticate(self.other_borrower)
        response = self.client.delete(reverse("booking-detail", args=[created.data["id"]]))

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data["code"], "forbidden")
        self.assertEqual(Booking.objects.count(), 1)

    def test_cancel_started_booking(self) -> None:
        now = timezone.now()
        booking = Booking.objects.create(
            product=self.product,
            user=self.borrower,
            starts_at=now - timedelta(days=1),
            ends_at=now + timedelta(days=1),
            contact_number="5550000002",
            address="7 Oak Avenue",
            created_at=now - timedelta(days=3),
        )

        response = self.client.delete(reverse("booking-detail", args=[booking.id]))

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["code"], "too_late_to_cancel")
        self.assertTrue(Booking.objects.filter(pk=booking.id).exists())

    def test_cancel_unknown_booking(self) -> None:
        response = self.client.delete(
            reverse("booking-detail", args=["00000000-0000-0000-0000-000000000000"])
        )

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
