"""FastAPI dependencies that hand the ordering services to routers."""

from fastapi import Request

from ordering.cart.service import CartService
from ordering.checkout.processor import CheckoutProcessor


def get_cart_service(request: Request) -> CartService:
    return request.app.state.cart_service


def get_checkout_processor(request: Request) -> CheckoutProcessor:
    return request.app.state.checkout_processor
