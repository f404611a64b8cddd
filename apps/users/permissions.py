"""Role-based permission classes."""

from __future__ import annotations

from rest_framework import permissions  # type: ignore


class RolePermission(permissions.BasePermission):
    """Allows access only to authenticated users holding ``role``."""

    role: str = ""

    def holds_role(self, user) -> bool:  # type: ignore
        raise NotImplementedError

    def has_permission(self, request, view) -> bool:  # type: ignore
        user = request.user
        if not user or not user.is_authenticated:
            return False
        if not self.holds_role(user):
            self.message = f"Only {self.role}s can access this"
            return False
        return True


class IsLender(RolePermission):
    role = "lender"

    def holds_role(self, user) -> bool:  # type: ignore
        return user.is_lender()


class IsBorrower(RolePermission):
    role = "borrower"

    def holds_role(self, user) -> bool:  # type: ignore
        return user.is_borrower()
