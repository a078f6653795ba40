"""Application service: Add Product use case (catalog management)."""

from __future__ import annotations

from shopbot.domain.exceptions import ValidationError
from shopbot.domain.model.product import Product
from shopbot.domain.model.value_objects import Money
from shopbot.domain.repository.product_repository import ProductRepository


class AddProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        item_id: str,
        name: str,
        price: str | int,
        stock: int = 0,
        description: str = "",
    ) -> Product:
        """Add a new product to the catalog."""
        if not name or not name.strip():
            raise ValidationError("Product name is required")

        if self._product_repo.get_by_id(item_id) is not None:
            raise ValidationError(f"Product '{item_id}' already exists")

        product = Product(
            id=item_id.strip(),
            name=name.strip(),
            price=Money.of(price),
            stock=stock,
            description=description.strip(),
        )
        self._product_repo.save(product)
        return product
