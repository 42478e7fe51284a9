import logging
from datetime import datetime, timezone
from typing import Any, Callable, Iterable, Optional, Tuple
from .catalog import DiscountCatalog
from .domain import DiscountCode, Product
from .errors import ExpiredError, NotFoundError, ValidationError
from .transforms import (
    apply_discount,
    decrement_product,
    discount_value,
    index_of,
    is_expired,
    merge_product,
    parse_product,
    product_count,
    subtotal,
)

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def system_clock() -> datetime:
    return datetime.now(timezone.utc)


class CartService:
    """
    Фасад корзины: хранит позиции и одну применённую скидку.
    Все изменения идут через чистые функции из transforms,
    состояние заменяется только после успешной операции.
    """

    def __init__(
        self,
        catalog: DiscountCatalog,
        items: Optional[Iterable[Any]] = None,
        clock: Optional[Clock] = None,
    ):
        self.catalog = catalog
        self.clock: Clock = clock or system_clock
        self.applied_discount: Optional[DiscountCode] = None
        self._items: Tuple[Product, ...] = ()

        for item in items or ():
            self.add_product(item)

    @property
    def items(self) -> Tuple[Product, ...]:
        """Позиции в порядке добавления"""
        return self._items

    def add_product(self, product: Any) -> None:
        """Проверяет товар и добавляет его (или сливает с существующей позицией)"""
        parsed = parse_product(product)
        if parsed.is_left:
            raise ValidationError(parsed.value)

        self._items = merge_product(self._items, parsed.value)
        logger.debug("Added %s x%s", parsed.value.id, parsed.value.quantity)

    def remove_product(self, product_id: str) -> None:
        """Убирает одну единицу товара, позиция с количеством 1 удаляется"""
        found = index_of(self._items, product_id)
        if found.is_none():
            raise NotFoundError("You cannot remove an item that is not in the cart")

        self._items = decrement_product(self._items, found.get_or_else(-1))
        logger.debug("Removed one unit of %s", product_id)

    def get_product_count(self) -> float:
        return product_count(self._items)

    def get_total(self) -> float:
        return apply_discount(subtotal(self._items), self.applied_discount)

    def apply_discount(self, code: str) -> None:
        """
        Применяет код скидки, заменяя предыдущий.
        NotFoundError - кода нет в каталоге, ExpiredError - срок истёк.
        """
        discount = self.catalog.find_by_code(code)
        if discount is None:
            logger.warning("Unknown discount code %r", code)
            raise NotFoundError("This discount code doesn't exist")

        if is_expired(discount, self.clock()):
            logger.warning("Expired discount code %r", code)
            raise ExpiredError("This discount code is expired")

        self.applied_discount = discount
        logger.info("Applied %s discount %r", discount.kind, discount.code)

    def clear_discount(self) -> None:
        self.applied_discount = None

    def summary(self) -> dict:
        """Снимок корзины для отображения"""
        base = subtotal(self._items)
        discount = self.applied_discount
        return {
            "items": self._items,
            "count": product_count(self._items),
            "subtotal": base,
            "discount_code": discount.code if discount else None,
            "discount": discount_value(base, discount) if discount else 0,
            "total": apply_discount(base, discount),
        }
