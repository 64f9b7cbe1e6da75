"""JSON-document implementation of CartRepository."""

from __future__ import annotations

from ecom.domain.model.aggregate import to_json_value
from ecom.domain.model.cart import Cart, CartItem
from ecom.domain.repository.cart_repository import CartRepository
from ecom.infrastructure.persistence.json_repository import JsonRepository


class JsonCartRepository(JsonRepository[Cart], CartRepository):

    collection = "carts"

    def get_by_user(self, user_id: str) -> Cart | None:
        for cart in self._all():
            if cart.user_id == user_id:
                return cart
        return None

    @staticmethod
    def _to_raw(cart: Cart) -> dict:
        return {
            "id": cart.id,
            "user_id": cart.user_id,
            "items": [
                {
                    "id": item.id,
                    "product_id": item.product_id,
                    "variant_id": item.variant_id,
                    "quantity": item.quantity,
                }
                for item in cart.items
            ],
            "metadata": to_json_value(cart.metadata),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Cart:
        return Cart(
            id=raw["id"],
            user_id=raw.get("user_id"),
            items=[
                CartItem(
                    id=i["id"],
                    product_id=i["product_id"],
                    quantity=i["quantity"],
                    variant_id=i.get("variant_id"),
                )
                for i in raw.get("items", [])
            ],
            metadata=dict(raw.get("metadata", {})),
        )
