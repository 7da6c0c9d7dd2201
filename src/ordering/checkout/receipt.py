"""Receipt aggregate: the immutable record of a settled cart."""

import json
from datetime import UTC, datetime
from enum import Enum

from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, Text

from ordering.checkout.events import ReceiptIssued
from ordering.domain import ordering


class ReceiptStatus(Enum):
    CONFIRMED = "confirmed"


@ordering.entity(part_of="Receipt")
class ReceiptLine:
    product_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=1)
    position = Integer(required=True)


@ordering.aggregate
class Receipt:
    """What the user bought at checkout, priced as the cart showed it.

    Receipts expose no mutators; once issued they are only read.
    """

    order_id = String(required=True, max_length=64, unique=True)
    user_id = Identifier(required=True)
    customer = Text()  # JSON: opaque customer info, passed through as given
    lines = HasMany(ReceiptLine)
    total = Float(required=True, min_value=0.0)
    status = String(choices=ReceiptStatus, default=ReceiptStatus.CONFIRMED.value)
    created_at = DateTime(required=True)

    @classmethod
    def issue(cls, order_id, user_id, customer, lines, total, created_at=None):
        """Issue a receipt.

        Args:
            lines: list of dicts with product_id, name, price, quantity.
        """
        created_at = created_at or datetime.now(UTC)
        receipt = cls(
            order_id=order_id,
            user_id=user_id,
            customer=json.dumps(customer) if customer is not None else None,
            total=total,
            status=ReceiptStatus.CONFIRMED.value,
            created_at=created_at,
        )
        for position, line in enumerate(lines, start=1):
            receipt.add_lines(
                ReceiptLine(
                    product_id=line["product_id"],
                    name=line["name"],
                    price=line["price"],
                    quantity=line["quantity"],
                    position=position,
                )
            )

        receipt.raise_(
            ReceiptIssued(
                receipt_id=str(receipt.id),
                order_id=order_id,
                user_id=str(user_id),
                item_count=len(lines),
                total=total,
                issued_at=created_at,
            )
        )
        return receipt

    @property
    def customer_info(self):
        return json.loads(self.customer) if self.customer else None

    @property
    def ordered_lines(self):
        return sorted(self.lines, key=lambda line: line.position)
