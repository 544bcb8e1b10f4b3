class CartItemProductMissingError(Exception):
    """Raised when a cart item references a product that cannot be loaded."""

    def __init__(self, product_id):
        super().__init__(f"Product (Id={product_id}) cannot be loaded")
        self.product_id = product_id


class ProductNotFoundError(Exception):
    """Raised when a raw add-to-cart payload names an unknown product."""
