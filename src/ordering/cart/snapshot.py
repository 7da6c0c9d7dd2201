"""Cart snapshot: the recomputed view returned by every cart operation.

Snapshots are never stored. Line totals are summed as exact decimals and the
result is rounded to cents only once, when the snapshot is built.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from ordering.catalog.port import ProductRecord

CENT = Decimal("0.01")


def to_decimal(amount) -> Decimal:
    """Exact decimal for a price as written (``99.99`` stays ``99.99``)."""
    return Decimal(str(amount))


def round_money(amount: Decimal) -> float:
    return float(amount.quantize(CENT, rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class SnapshotLine:
    """A ledger entry resolved against the catalog."""

    entry_id: str
    product: ProductRecord
    quantity: int

    @property
    def subtotal(self) -> Decimal:
        return to_decimal(self.product.price) * self.quantity


def total_of(lines) -> float:
    return round_money(sum((line.subtotal for line in lines), Decimal("0")))


@dataclass(frozen=True)
class CartSnapshot:
    lines: tuple[SnapshotLine, ...]
    total: float

    @classmethod
    def from_lines(cls, lines) -> "CartSnapshot":
        lines = tuple(lines)
        return cls(lines=lines, total=total_of(lines))

    @classmethod
    def empty(cls) -> "CartSnapshot":
        return cls(lines=(), total=0.0)

    @property
    def is_empty(self) -> bool:
        return not self.lines

    def quantity_of(self, product_id) -> int:
        return sum(line.quantity for line in self.lines if line.product.id == str(product_id))
