"""Requester roles and the ownership checks shared by orders and invoices."""

from enum import Enum

from storefront.exceptions import Forbidden


class Role(Enum):
    ADMIN = "admin"
    CUSTOMER = "customer"


def is_admin(role: str | None) -> bool:
    return role == Role.ADMIN.value


def ensure_admin(role: str | None, action: str = "this action") -> None:
    if not is_admin(role):
        raise Forbidden(f"Admin access required for {action}")


def ensure_owner_or_admin(owner_id, requester_id, role: str | None) -> None:
    """Allow the owning account or any admin; everyone else is refused."""
    if is_admin(role):
        return
    if requester_id is None or str(owner_id) != str(requester_id):
        raise Forbidden("Unauthorized")
