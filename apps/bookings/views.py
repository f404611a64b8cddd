"""API views for the booking domain."""

from __future__ import annotations

from uuid import UUID

from rest_framework import mixins, permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.users.permissions import IsBorrower

from .application.admission import AdmitBookingCommand, CancelBookingCommand
from .domain.errors import AdmissionError, AdmissionErrorKind
from .models import Booking
from .serializers import BookingCreateSerializer, BookingSerializer
from .services import build_admission_checker

ERROR_STATUS = {
    AdmissionErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    AdmissionErrorKind.SELF_BOOKING_FORBIDDEN: status.HTTP_400_BAD_REQUEST,
    AdmissionErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    AdmissionErrorKind.INVALID_INTERVAL: status.HTTP_400_BAD_REQUEST,
    AdmissionErrorKind.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    AdmissionErrorKind.TOO_LATE_TO_CANCEL: status.HTTP_400_BAD_REQUEST,
    AdmissionErrorKind.STORE_FAILURE: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def error_response(error: AdmissionError) -> Response:
    return Response(error.to_dict(), status=ERROR_STATUS[error.kind])


class IsBooker(permissions.BasePermission):
    message = "You can only view your own bookings"

    def has_object_permission(self, request, view, obj: Booking):  # type: ignore
        return obj.user_id == request.user.id


class BookingViewSet(
    mixins.CreateModelMixin,
    mixins.RetrieveModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    """Create, inspect and cancel bookings.

    Creation and cancellation go through the admission checker; this
    view only translates its results into HTTP responses.
    """

    queryset = Booking.objects.select_related("product", "user").all()
    lookup_value_regex = r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}"
    checker_factory = staticmethod(build_admission_checker)

    def get_permissions(self):  # type: ignore
        if self.action in {"create", "destroy"}:
            return [IsBorrower()]
        if self.action == "retrieve":
            return [permissions.IsAuthenticated(), IsBooker()]
        return [permissions.IsAuthenticated()]

    def get_serializer_class(self):  # type: ignore
        if self.action == "create":
            return BookingCreateSerializer
        return BookingSerializer

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        result = self.checker_factory().try_admit_booking(AdmitBookingCommand(
            product_id=data["product"],
            requester_id=request.user.id,
            starts_at=data["starts_at"],
            ends_at=data["ends_at"],
            contact_number=data["contact_number"],
            address=data["address"],
            booking_query=data.get("booking_query", ""),
        ))
        if isinstance(result, AdmissionError):
            return error_response(result)

        booking = self.get_queryset().get(pk=result.id)
        read_serializer = BookingSerializer(booking, context=self.get_serializer_context())
        return Response(read_serializer.data, status=status.HTTP_201_CREATED)

    def destroy(self, request, *args, **kwargs):  # type: ignore
        result = self.checker_factory().try_cancel_booking(CancelBookingCommand(
            booking_id=UUID(kwargs["pk"]),
            requester_id=request.user.id,
        ))
        if isinstance(result, AdmissionError):
            return error_response(result)
        return Response({"detail": "Booking deleted successfully"}, status=status.HTTP_200_OK)

    @action(detail=False, methods=["get"])
    def mine(self, request):
        """Bookings of the current user, newest first."""
        qs = self.get_queryset().filter(user=request.user).order_by("-created_at")
        page = self.paginate_queryset(qs)
        if page is not None:
            serializer = BookingSerializer(page, many=True, context=self.get_serializer_context())
            return self.get_paginated_response(serializer.data)
        return Response(BookingSerializer(qs, many=True, context=self.get_serializer_context()).data)
