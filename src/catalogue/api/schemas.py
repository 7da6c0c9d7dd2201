"""Pydantic response schemas for the Catalogue API."""

from __future__ import annotations

from pydantic import BaseModel


class ProductSchema(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "id": "0f0c5b7e-5d4c-4b7a-9a3e-6f6a1f2d9c11",
                    "name": "Wireless Headphones",
                    "price": 99.99,
                    "image": "https://example.com/headphones.jpg",
                    "description": "High-quality wireless headphones with noise cancellation",
                }
            ]
        }
    }

    id: str
    name: str
    price: float
    image: str
    description: str | None = None
