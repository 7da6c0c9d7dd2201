"""Pydantic request/response schemas for the Ordering API.

These are external contracts (anti-corruption layer), separate from the
internal Protean commands. The wire format is camelCase.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from ordering.cart.snapshot import CartSnapshot
from ordering.checkout.receipt import Receipt

_CAMEL = {"populate_by_name": True}


# ---------------------------------------------------------------------------
# Cart Request Schemas
# ---------------------------------------------------------------------------
class AddToCartRequest(BaseModel):
    model_config = {
        **_CAMEL,
        "json_schema_extra": {"examples": [{"productId": "0f0c5b7e-5d4c-4b7a-9a3e-6f6a1f2d9c11", "quantity": 2}]},
    }

    product_id: str = Field(..., alias="productId")
    quantity: int = 1


class UpdateQuantityRequest(BaseModel):
    quantity: int


class CheckoutRequest(BaseModel):
    model_config = {
        **_CAMEL,
        "json_schema_extra": {
            "examples": [
                {"customerInfo": {"name": "Alice", "email": "alice@example.com", "address": "1 Main St"}},
            ]
        },
    }

    customer_info: Any = Field(None, alias="customerInfo")


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class CartItemSchema(BaseModel):
    model_config = _CAMEL

    id: str
    name: str
    price: float
    image: str
    quantity: int
    cart_item_id: str = Field(..., alias="cartItemId")


class CartSnapshotResponse(BaseModel):
    items: list[CartItemSchema]
    total: float

    @classmethod
    def from_snapshot(cls, snapshot: CartSnapshot) -> "CartSnapshotResponse":
        return cls(
            items=[
                CartItemSchema(
                    id=line.product.id,
                    name=line.product.name,
                    price=line.product.price,
                    image=line.product.image,
                    quantity=line.quantity,
                    cart_item_id=line.entry_id,
                )
                for line in snapshot.lines
            ],
            total=snapshot.total,
        )


class ReceiptItemSchema(BaseModel):
    id: str
    name: str
    price: float
    quantity: int


class ReceiptResponse(BaseModel):
    model_config = _CAMEL

    order_id: str = Field(..., alias="orderId")
    customer: Any = None
    items: list[ReceiptItemSchema]
    total: float
    timestamp: datetime
    status: str

    @classmethod
    def from_receipt(cls, receipt: Receipt) -> "ReceiptResponse":
        return cls(
            order_id=receipt.order_id,
            customer=receipt.customer_info,
            items=[
                ReceiptItemSchema(
                    id=str(line.product_id),
                    name=line.name,
                    price=line.price,
                    quantity=line.quantity,
                )
                for line in receipt.ordered_lines
            ],
            total=receipt.total,
            timestamp=receipt.created_at,
            status=receipt.status,
        )
