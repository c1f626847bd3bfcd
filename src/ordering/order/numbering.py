"""Order number generation.

Order numbers are six digits, as shown to customers ("Pedido #100042").
They come from a monotonic per-engine sequence, so two orders placed in the
same session can never share a number.
"""

import itertools
import threading

FIRST_ORDER_NUMBER = 100000


class OrderNumberSequence:
    def __init__(self, start: int = FIRST_ORDER_NUMBER) -> None:
        self._counter = itertools.count(start)
        self._lock = threading.Lock()

    def next(self) -> int:
        with self._lock:
            return next(self._counter)
