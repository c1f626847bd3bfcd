"""Ordering bounded context: shopping cart, checkout and order tracking.

Configuration is read by protean from ``domain.toml`` at the project root.
``PROTEAN_ENV`` picks the overlay (``[test]``, ``[production]``) that is
applied on top of the base tables.
"""

from protean.domain import Domain

ordering = Domain(name="ordering")
