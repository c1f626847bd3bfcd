"""Order detail: full denormalized view of a placed order."""

from datetime import datetime

from pydantic import BaseModel


class OrderLineView(BaseModel):
    product_id: str
    name: str
    quantity: int
    unit_price: str
    line_total: str


class OrderDetail(BaseModel):
    order_id: int
    status: str
    status_label: str
    items: list[OrderLineView]
    subtotal: str
    delivery_fee: str
    total: str
    total_display: str
    currency: str
    address: str
    payment_method: str
    customer_name: str | None = None
    customer_email: str | None = None
    created_at: datetime
    updated_at: datetime | None = None


def order_detail(order) -> OrderDetail:
    return OrderDetail(
        order_id=order.id,
        status=order.status.value,
        status_label=order.status.label,
        items=[
            OrderLineView(
                product_id=item.product_id,
                name=item.name,
                quantity=item.quantity,
                unit_price=str(item.unit_price.amount),
                line_total=str(item.line_total.amount),
            )
            for item in order.items
        ],
        subtotal=str(order.subtotal.amount),
        delivery_fee=str(order.delivery_fee.amount),
        total=str(order.total.amount),
        total_display=order.total.format(),
        currency=order.total.currency,
        address=order.address,
        payment_method=order.payment_method.value,
        customer_name=order.customer_name,
        customer_email=order.customer_email,
        created_at=order.created_at,
        updated_at=order.updated_at,
    )
