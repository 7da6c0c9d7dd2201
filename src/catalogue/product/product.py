"""Product aggregate: a priced catalog record the cart refers to by id."""

from datetime import UTC, datetime

from protean.fields import DateTime, Float, String, Text

from catalogue.domain import catalogue
from catalogue.product.events import ProductAdded


@catalogue.aggregate
class Product:
    """A sellable item with a single non-negative price.

    The cart never mutates products; it only looks them up by identifier.
    """

    name: String(required=True, max_length=255)
    price: Float(required=True, min_value=0.0)
    image: String(required=True, max_length=1024)
    description: Text()
    created_at: DateTime()

    @classmethod
    def create(cls, name, price, image, description=None):
        product = cls(
            name=name,
            price=price,
            image=image,
            description=description,
            created_at=datetime.now(UTC),
        )
        product.raise_(
            ProductAdded(
                product_id=str(product.id),
                name=product.name,
                price=product.price,
            )
        )
        return product
