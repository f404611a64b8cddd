"""Product API views."""

from __future__ import annotations

import logging

from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.filters import OrderingFilter  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.users.permissions import IsLender

from .filters import ProductFilterSet
from .models import Product
from .serializers import ProductSerializer, ProductWriteSerializer

logger = logging.getLogger(__name__)


class IsProductOwner(permissions.BasePermission):
    """Only the lender who listed a product may change or remove it."""

    def has_object_permission(self, request, view, obj: Product):  # type: ignore
        if request.method in permissions.SAFE_METHODS:
            return True
        if obj.owner_id == request.user.id:
            return True
        verb = "delete" if request.method == "DELETE" else "update"
        self.message = f"You can only {verb} your own products"
        return False


class ProductViewSet(viewsets.ModelViewSet):
    """Listing CRUD. Reads need authentication, writes need the lender role."""

    queryset = Product.objects.select_related("owner").all()
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_class = ProductFilterSet
    ordering_fields = ["created_at", "name"]
    ordering = ["-created_at"]

    def get_permissions(self):  # type: ignore
        if self.action == "create":
            return [IsLender()]
        if self.action in {"update", "partial_update", "destroy"}:
            return [IsLender(), IsProductOwner()]
        return [permissions.IsAuthenticated()]

    def get_serializer_class(self):  # type: ignore
        if self.action in {"create", "update", "partial_update"}:
            return ProductWriteSerializer
        return ProductSerializer

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        product = serializer.save()
        logger.info(f"Product {product.id} listed by user {request.user.id}")
        read_serializer = ProductSerializer(product, context=self.get_serializer_context())
        return Response(read_serializer.data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):  # type: ignore
        partial = kwargs.pop("partial", False)
        product = self.get_object()
        serializer = self.get_serializer(product, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        product = serializer.save()
        return Response(ProductSerializer(product, context=self.get_serializer_context()).data)

    def destroy(self, request, *args, **kwargs):  # type: ignore
        product = self.get_object()
        product_id = product.id
        product.delete()
        logger.info(f"Product {product_id} deleted by user {request.user.id}")
        return Response({"detail": "Product deleted successfully"}, status=status.HTTP_200_OK)

    @action(detail=False, methods=["get"])
    def mine(self, request):
        """Products listed by the current user."""
        qs = self.filter_queryset(self.get_queryset().filter(owner=request.user))
        return self._paginated(qs)

    @action(detail=False, methods=["get"], url_path=r"user/(?P<user_id>\d+)")
    def by_user(self, request, user_id=None):
        """Products listed by one user."""
        qs = self.filter_queryset(self.get_queryset().filter(owner_id=user_id))
        return self._paginated(qs)

    def _paginated(self, qs):
        page = self.paginate_queryset(qs)
        if page is not None:
            serializer = ProductSerializer(page, many=True, context=self.get_serializer_context())
            return self.get_paginated_response(serializer.data)
        return Response(ProductSerializer(qs, many=True, context=self.get_serializer_context()).data)
