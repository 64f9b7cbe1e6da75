"""Domain -> DTO mapping shared by the handlers."""

from __future__ import annotations

from ecom.application.dto import (
    AttributeDTO,
    AuditLogDTO,
    CartDTO,
    CartItemDTO,
    CategoryDTO,
    OrderDTO,
    OrderLineItemDTO,
    ProductDTO,
    ProductVariantDTO,
)
from ecom.domain.model.attribute import Attribute
from ecom.domain.model.audit_log import AuditLog
from ecom.domain.model.cart import Cart
from ecom.domain.model.category import Category
from ecom.domain.model.order import Order
from ecom.domain.model.product import Product
from ecom.domain.model.product_variant import ProductVariant
from ecom.domain.model.value_objects import Money


def category_to_dto(category: Category) -> CategoryDTO:
    return CategoryDTO(
        id=category.id,
        name=category.name,
        slug=category.slug.value,
        description=category.description,
        parent_id=category.parent_id,
        level=category.level,
        path=category.path,
        is_active=category.is_active,
        version=category.version,
    )


def attribute_to_dto(attribute: Attribute) -> AttributeDTO:
    return AttributeDTO(
        id=attribute.id,
        name=attribute.name,
        display_name=attribute.display_name,
        type=attribute.type.value,
        filterable=attribute.filterable,
        searchable=attribute.searchable,
        is_variant=attribute.is_variant,
        configuration=attribute.configuration_map,
        version=attribute.version,
    )


def product_to_dto(product: Product) -> ProductDTO:
    return ProductDTO(
        id=product.id,
        name=product.name,
        slug=product.slug.value,
        sku=product.sku,
        base_price=str(product.base_price),
        description=product.description,
        is_active=product.is_active,
        category_ids=list(product.category_ids),
        attributes={
            attr_id: product.attribute_value(attr_id) for attr_id in product.attributes
        },
        metadata=dict(product.metadata),
        version=product.version,
    )


def variant_to_dto(variant: ProductVariant, base_price: Money) -> ProductVariantDTO:
    return ProductVariantDTO(
        id=variant.id,
        product_id=variant.product_id,
        sku=variant.sku,
        price=str(variant.effective_price(base_price)),
        has_price_override=variant.price is not None,
        stock_quantity=variant.stock_quantity,
        is_active=variant.is_active,
        attribute_values=variant.values(),
        metadata=dict(variant.metadata),
        version=variant.version,
    )


def cart_to_dto(cart: Cart) -> CartDTO:
    return CartDTO(
        id=cart.id,
        user_id=cart.user_id,
        items=[
            CartItemDTO(
                id=item.id,
                product_id=item.product_id,
                variant_id=item.variant_id,
                quantity=item.quantity,
            )
            for item in cart.items
        ],
        total_quantity=cart.total_quantity,
        version=cart.version,
    )


def order_to_dto(order: Order) -> OrderDTO:
    return OrderDTO(
        id=order.id,
        user_id=order.user_id,
        status=order.status.value,
        items=[
            OrderLineItemDTO(
                product_name=item.product_name,
                sku=item.sku,
                quantity=item.quantity,
                unit_price=str(item.unit_price),
                line_total=str(item.line_total),
            )
            for item in order.items
        ],
        total=str(order.total),
        tracking_number=order.tracking_number,
        created_at=order.created_at.strftime("%Y-%m-%d %H:%M UTC"),
        version=order.version,
    )


def audit_log_to_dto(log: AuditLog) -> AuditLogDTO:
    return AuditLogDTO(
        id=log.id,
        entity_type=log.entity_type,
        entity_id=log.entity_id,
        action=log.action.value,
        changed_fields=list(log.changed_fields),
        old_values=dict(log.old_values),
        new_values=dict(log.new_values),
        created_at=log.created_at.strftime("%Y-%m-%d %H:%M:%S UTC"),
    )
