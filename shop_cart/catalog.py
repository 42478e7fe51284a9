from typing import Iterable, Optional, Tuple
from .domain import DiscountCode


class DiscountCatalog:
    """Каталог кодов скидок (только чтение)"""

    def __init__(self, discounts: Optional[Iterable[DiscountCode]] = None):
        self.discounts: Optional[Tuple[DiscountCode, ...]] = (
            tuple(discounts) if discounts is not None else None
        )

    def list_all(self) -> Optional[Tuple[DiscountCode, ...]]:
        """Все коды; None, если каталог не заполнен"""
        return self.discounts

    def find_by_code(self, code: str) -> Optional[DiscountCode]:
        """
        Первый код с точным совпадением (с учётом регистра).
        При дубликатах побеждает первый по порядку хранения.
        """
        return next((d for d in self.discounts or () if d.code == code), None)

    def __len__(self) -> int:
        return len(self.discounts or ())
