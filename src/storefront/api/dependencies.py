"""Requester identity forwarded by the upstream authentication layer."""

from dataclasses import dataclass

from fastapi import Header, HTTPException

from storefront.access import Role


@dataclass(frozen=True)
class Requester:
    account_id: str
    role: str


def current_requester(
    x_account_id: str | None = Header(None),
    x_account_role: str | None = Header(None),
) -> Requester:
    """Resolve the authenticated account; 401 when the id header is missing."""
    if not x_account_id:
        raise HTTPException(status_code=401, detail="Authentication required")
    return Requester(account_id=x_account_id, role=(x_account_role or Role.CUSTOMER.value).lower())
