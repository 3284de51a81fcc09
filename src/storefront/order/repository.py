"""Repository for the Order aggregate."""

from protean.exceptions import ObjectNotFoundError

from storefront.domain import storefront
from storefront.order.order import Order

_MAX_RESULTS = 1000


@storefront.repository(part_of=Order)
class OrderRepository:
    def for_buyer(self, buyer_id: str) -> list[Order]:
        """All of a buyer's orders, newest first."""
        return (
            self._dao.query.filter(buyer_id=str(buyer_id))
            .order_by("-created_at")
            .limit(_MAX_RESULTS)
            .all()
            .items
        )

    def find_by_tracking_id(self, tracking_id: str) -> Order:
        results = self._dao.query.filter(tracking_id=tracking_id).limit(1).all().items
        if not results:
            raise ObjectNotFoundError("Order not found with this tracking ID")
        return results[0]

    def page(self, status: str | None = None, page: int = 1, limit: int = 10):
        """One page of orders, newest first, with the total match count."""
        query = self._dao.query
        if status:
            query = query.filter(status=status)
        return query.order_by("-created_at").offset((page - 1) * limit).limit(limit).all()

    def count_with_status(self, status: str) -> int:
        return self._dao.query.filter(status=status).limit(_MAX_RESULTS).all().total

    def delete_order(self, order: Order) -> None:
        self._dao.delete(order)
