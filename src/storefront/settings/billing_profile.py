"""Company billing profile — the seller details printed on invoices.

There is at most one stored profile. Until an admin saves one, readers get
a default profile carrying only the company name and country.
"""

import json
from datetime import UTC, datetime

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.access import ensure_admin
from storefront.domain import storefront

logger = structlog.get_logger(__name__)

DEFAULT_COMPANY_NAME = "Vasstra Fashion"
DEFAULT_COMPANY_COUNTRY = "India"

PROFILE_FIELDS = ("logo", "name", "gst", "address", "city", "state", "zip_code", "country", "phone", "email")


@storefront.event(part_of="CompanyBillingProfile")
class BillingProfileUpdated:
    __version__ = 1

    profile_id = Identifier(required=True)
    name = String()
    updated_at = DateTime(required=True)


@storefront.aggregate
class CompanyBillingProfile:
    logo = Text()  # URL or base64 data URI
    name = String(max_length=255, default=DEFAULT_COMPANY_NAME)
    gst = String(max_length=50)
    address = String(max_length=500)
    city = String(max_length=100)
    state = String(max_length=100)
    zip_code = String(max_length=20)
    country = String(max_length=100, default=DEFAULT_COMPANY_COUNTRY)
    phone = String(max_length=30)
    email = String(max_length=254)
    updated_at = DateTime()

    def revise(self, **changes) -> None:
        now = datetime.now(UTC)
        for field, value in changes.items():
            setattr(self, field, value)
        # Blank name or country falls back to the defaults
        self.name = self.name or DEFAULT_COMPANY_NAME
        self.country = self.country or DEFAULT_COMPANY_COUNTRY
        self.updated_at = now

        self.raise_(BillingProfileUpdated(profile_id=str(self.id), name=self.name, updated_at=now))

    def snapshot(self) -> dict:
        return {field: getattr(self, field) or "" for field in PROFILE_FIELDS}


@storefront.repository(part_of=CompanyBillingProfile)
class CompanyBillingProfileRepository:
    def stored(self) -> CompanyBillingProfile | None:
        results = self._dao.query.limit(1).all().items
        return results[0] if results else None


def current_billing_profile() -> CompanyBillingProfile:
    """The stored profile, or an unsaved default one."""
    profile = current_domain.repository_for(CompanyBillingProfile).stored()
    if profile is None:
        return CompanyBillingProfile(name=DEFAULT_COMPANY_NAME, country=DEFAULT_COMPANY_COUNTRY)
    return profile


@storefront.command(part_of="CompanyBillingProfile")
class UpdateBillingProfile:
    changes = Text(required=True)  # JSON object of profile fields
    requester_role = String(max_length=20)


@storefront.command_handler(part_of=CompanyBillingProfile)
class BillingProfileHandler:
    @handle(UpdateBillingProfile)
    def update_profile(self, command):
        ensure_admin(command.requester_role, "billing settings")

        changes = json.loads(command.changes) if isinstance(command.changes, str) else command.changes
        unknown = set(changes) - set(PROFILE_FIELDS)
        if unknown:
            raise ValidationError({"changes": [f"Unknown profile fields: {', '.join(sorted(unknown))}"]})

        repo = current_domain.repository_for(CompanyBillingProfile)
        profile = repo.stored() or CompanyBillingProfile()
        profile.revise(**changes)
        repo.add(profile)

        logger.info("Billing profile updated", fields=sorted(changes))
        return str(profile.id)
