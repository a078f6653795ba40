"""Application service: View Cart use case (query).

Prices shown here are today's catalog prices; the price actually paid is
fixed at checkout.  Items that were removed from the catalog stay visible
but are flagged unavailable and left out of the total.
"""

from __future__ import annotations

from shopbot.application.dto import CartDTO, CartLineDTO
from shopbot.domain.model.value_objects import Money
from shopbot.domain.repository.cart_repository import CartRepository
from shopbot.domain.repository.product_repository import ProductRepository


class ViewCartHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._cart_repo = cart_repo
        self._product_repo = product_repo

    def handle(self, user_id: str) -> CartDTO:
        cart = self._cart_repo.get_active_cart(user_id)

        lines: list[CartLineDTO] = []
        total = Money.zero()
        for item_id, qty in cart.items.items():
            product = self._product_repo.get_by_id(item_id)
            if product is None:
                lines.append(
                    CartLineDTO(
                        item_id=item_id,
                        item_name=item_id,
                        quantity=qty,
                        unit_price="-",
                        line_total="-",
                        available=False,
                    )
                )
                continue

            line_total = product.price * qty
            total = total + line_total
            lines.append(
                CartLineDTO(
                    item_id=item_id,
                    item_name=product.name,
                    quantity=qty,
                    unit_price=str(product.price),
                    line_total=str(line_total),
                )
            )

        return CartDTO(
            user_id=user_id,
            items=lines,
            total=str(total),
            total_amount=total.amount,
        )
