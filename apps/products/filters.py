"""FilterSet definitions for product listing."""

from __future__ import annotations

import django_filters  # type: ignore

from .models import Product


class ProductFilterSet(django_filters.FilterSet):
    name = django_filters.CharFilter(field_name="name", lookup_expr="icontains")
    address = django_filters.CharFilter(field_name="address", lookup_expr="icontains")
    owner = django_filters.NumberFilter(field_name="owner_id", lookup_expr="exact")

    class Meta:
        model = Product
        fields = ["name", "address", "owner"]
