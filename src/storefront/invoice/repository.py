"""Repository for the Invoice aggregate."""

from storefront.domain import storefront
from storefront.invoice.invoice import Invoice

_MAX_RESULTS = 1000


@storefront.repository(part_of=Invoice)
class InvoiceRepository:
    def find_for_order(self, order_id: str) -> Invoice | None:
        results = self._dao.query.filter(order_id=str(order_id)).limit(1).all().items
        return results[0] if results else None

    def for_buyer(self, buyer_id: str) -> list[Invoice]:
        return (
            self._dao.query.filter(buyer_id=str(buyer_id))
            .order_by("-created_at")
            .limit(_MAX_RESULTS)
            .all()
            .items
        )

    def page(self, page: int = 1, limit: int = 10):
        return self._dao.query.order_by("-created_at").offset((page - 1) * limit).limit(limit).all()
