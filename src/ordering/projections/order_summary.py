"""Order summary: lightweight listing/history view."""

from datetime import datetime

from pydantic import BaseModel


class OrderSummary(BaseModel):
    order_id: int
    status: str
    status_label: str
    item_count: int
    total: str
    total_display: str
    created_at: datetime
    headline: str  # "#100000 • preparando"
    caption: str  # "2 itens • R$ 28,90"


def summarize(order) -> OrderSummary:
    return OrderSummary(
        order_id=order.id,
        status=order.status.value,
        status_label=order.status.label,
        item_count=order.item_count,
        total=str(order.total.amount),
        total_display=order.total.format(),
        created_at=order.created_at,
        headline=f"#{order.id} • {order.status.label}",
        caption=f"{order.item_count} itens • {order.total.format()}",
    )


def order_history(orders) -> list[OrderSummary]:
    return [summarize(order) for order in orders]
