"""JSON-document implementation of OrderRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from ecom.domain.model.order import Order, OrderLineItem, OrderStatus
from ecom.domain.model.value_objects import Money
from ecom.domain.repository.order_repository import OrderRepository
from ecom.infrastructure.persistence.json_repository import JsonRepository


class JsonOrderRepository(JsonRepository[Order], OrderRepository):

    collection = "orders"

    def list_by_user(self, user_id: str) -> list[Order]:
        orders = [o for o in self._all() if o.user_id == user_id]
        return sorted(orders, key=lambda o: o.created_at)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "id": order.id,
            "user_id": order.user_id,
            "status": order.status.value,
            "tracking_number": order.tracking_number,
            "created_at": order.created_at.isoformat(),
            "items": [
                {
                    "product_id": item.product_id,
                    "variant_id": item.variant_id,
                    "product_name": item.product_name,
                    "sku": item.sku,
                    "quantity": item.quantity,
                    "unit_price": str(item.unit_price.amount),
                    "currency": item.unit_price.currency,
                }
                for item in order.items
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        items = [
            OrderLineItem(
                product_id=i["product_id"],
                product_name=i["product_name"],
                quantity=i["quantity"],
                unit_price=Money(Decimal(i["unit_price"]), i.get("currency", "USD")),
                variant_id=i.get("variant_id"),
                sku=i.get("sku"),
            )
            for i in raw["items"]
        ]
        return Order(
            id=raw["id"],
            user_id=raw.get("user_id"),
            items=items,
            status=OrderStatus(raw["status"]),
            tracking_number=raw.get("tracking_number"),
            created_at=datetime.fromisoformat(raw["created_at"]),
        )
