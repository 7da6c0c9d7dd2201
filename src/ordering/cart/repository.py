"""Repository for the Cart aggregate."""

from protean.exceptions import ObjectNotFoundError

from ordering.cart.cart import Cart
from ordering.domain import ordering


@ordering.repository(part_of=Cart)
class CartRepository:
    def for_user(self, user_id) -> Cart:
        """The user's cart, or a fresh empty one if they never had one."""
        try:
            return self.get(user_id)
        except ObjectNotFoundError:
            return Cart.open(user_id)
