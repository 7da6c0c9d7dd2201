"""Domain events for the Receipt aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from ordering.domain import ordering


@ordering.event(part_of="Receipt")
class ReceiptIssued:
    """A cart was settled at checkout and a receipt was issued for it."""

    __version__ = 1

    receipt_id = Identifier(required=True)
    order_id = String(required=True, max_length=64)
    user_id = Identifier(required=True)
    item_count = Integer(required=True)
    total = Float(required=True)
    issued_at = DateTime(required=True)
