"""FastAPI routes for the Ordering domain: the cart and checkout."""

from fastapi import APIRouter, Depends

from identity.api.dependencies import current_user
from identity.provider import AuthenticatedUser
from ordering.api.dependencies import get_cart_service, get_checkout_processor
from ordering.api.schemas import (
    AddToCartRequest,
    CartSnapshotResponse,
    CheckoutRequest,
    ReceiptResponse,
    UpdateQuantityRequest,
)
from ordering.cart.service import CartService
from ordering.checkout.processor import CheckoutProcessor

# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/api/cart", tags=["cart"])


@cart_router.get("", response_model=CartSnapshotResponse)
async def view_cart(
    user: AuthenticatedUser = Depends(current_user),
    service: CartService = Depends(get_cart_service),
) -> CartSnapshotResponse:
    return CartSnapshotResponse.from_snapshot(service.view_cart(user.id))


@cart_router.post("", response_model=CartSnapshotResponse)
async def add_to_cart(
    body: AddToCartRequest,
    user: AuthenticatedUser = Depends(current_user),
    service: CartService = Depends(get_cart_service),
) -> CartSnapshotResponse:
    snapshot = service.add_to_cart(user.id, body.product_id, body.quantity)
    return CartSnapshotResponse.from_snapshot(snapshot)


@cart_router.put("/{entry_id}", response_model=CartSnapshotResponse)
async def update_quantity(
    entry_id: str,
    body: UpdateQuantityRequest,
    user: AuthenticatedUser = Depends(current_user),
    service: CartService = Depends(get_cart_service),
) -> CartSnapshotResponse:
    snapshot = service.update_quantity(user.id, entry_id, body.quantity)
    return CartSnapshotResponse.from_snapshot(snapshot)


@cart_router.delete("/{entry_id}", response_model=CartSnapshotResponse)
async def remove_from_cart(
    entry_id: str,
    user: AuthenticatedUser = Depends(current_user),
    service: CartService = Depends(get_cart_service),
) -> CartSnapshotResponse:
    return CartSnapshotResponse.from_snapshot(service.remove_from_cart(user.id, entry_id))


# ---------------------------------------------------------------------------
# Checkout Router
# ---------------------------------------------------------------------------
checkout_router = APIRouter(prefix="/api/checkout", tags=["checkout"])


@checkout_router.post("", response_model=ReceiptResponse)
async def checkout(
    body: CheckoutRequest,
    user: AuthenticatedUser = Depends(current_user),
    processor: CheckoutProcessor = Depends(get_checkout_processor),
) -> ReceiptResponse:
    receipt = processor.checkout(user.id, body.customer_info)
    return ReceiptResponse.from_receipt(receipt)
