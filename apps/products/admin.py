"""Admin registration for products."""

from __future__ import annotations

from django.contrib import admin

from .models import Product


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ("name", "owner", "address", "created_at")
    search_fields = ("name", "address", "owner__email")
    readonly_fields = ("id", "created_at", "updated_at")
