"""Cart models"""

from pydantic import BaseModel, Field
from typing import Optional


class ProductImage(BaseModel):
    """Image reference attached to a product"""
    id: Optional[int] = None
    url: str
    alt_text: Optional[str] = None


class ProductRef(BaseModel):
    """Catalog product as carried in the cart"""
    id: int
    name: str
    sku: Optional[str] = None
    price: float = Field(ge=0)
    images: list[ProductImage] = []


class CartItem(BaseModel):
    """Line in the shopping cart"""
    product: ProductRef
    quantity: int = Field(ge=1)

    @property
    def line_total(self) -> float:
        return self.product.price * self.quantity

    def to_payload(self) -> dict:
        """Wire shape used by the order endpoints"""
        return {
            "product": {
                "id": self.product.id,
                "name": self.product.name,
                "sku": self.product.sku,
                "price": self.product.price,
            },
            "quantity": self.quantity,
        }
