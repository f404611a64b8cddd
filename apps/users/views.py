"""User API views."""

from __future__ import annotations

from rest_framework import permissions, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from .serializers import UserSerializer


class UserViewSet(viewsets.GenericViewSet):
    """Profile of the current user.

    - `GET me/` returns the profile
    - `PATCH me/` updates name, phone and image; changing the phone
      resets phone verification
    """

    serializer_class = UserSerializer
    permission_classes = [permissions.IsAuthenticated]

    @action(detail=False, methods=["get", "patch"])
    def me(self, request):
        user = request.user
        if request.method == "GET":
            return Response(UserSerializer(user).data)

        serializer = UserSerializer(user, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        phone_changed = "phone" in serializer.validated_data and serializer.validated_data["phone"] != user.phone
        if phone_changed:
            serializer.save(is_phone_verified=False)
        else:
            serializer.save()
        return Response(serializer.data)
