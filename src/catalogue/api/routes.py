"""FastAPI endpoints for the Catalogue domain."""

from fastapi import APIRouter
from protean.utils.globals import current_domain

from catalogue.api.schemas import ProductSchema
from catalogue.product.product import Product

product_router = APIRouter(prefix="/api/products", tags=["products"])


@product_router.get("", response_model=list[ProductSchema])
async def list_products() -> list[ProductSchema]:
    products = current_domain.repository_for(Product).listing()
    return [
        ProductSchema(
            id=str(product.id),
            name=product.name,
            price=product.price,
            image=product.image,
            description=product.description,
        )
        for product in products
    ]
