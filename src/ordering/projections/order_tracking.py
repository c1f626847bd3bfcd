"""Order tracking: the step list shown while an order is on its way."""

from pydantic import BaseModel

from ordering.order.order import status_sequence


class TrackingStep(BaseModel):
    status: str
    label: str
    reached: bool


class OrderTracking(BaseModel):
    order_id: int
    current_step: int
    delivered: bool
    steps: list[TrackingStep]


def tracking_for(order) -> OrderTracking:
    current = order.status.step
    return OrderTracking(
        order_id=order.id,
        current_step=current,
        delivered=order.is_delivered,
        steps=[
            TrackingStep(status=status.value, label=status.label.upper(), reached=status.step <= current)
            for status in status_sequence()
        ],
    )
