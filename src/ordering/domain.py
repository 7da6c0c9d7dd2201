"""Ordering bounded context: Cart Ledger, Cart Service and Checkout.

Each user owns one cart aggregate holding their entries. Every write to it is
conditional on the aggregate version, and checkout settles the cart into an
immutable receipt within a single unit of work.
"""

import structlog
from protean.domain import Domain

from shared.logging import configure_logging

configure_logging()

ordering = Domain(name="ordering")

logger = structlog.get_logger(__name__)
