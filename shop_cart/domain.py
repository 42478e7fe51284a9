from dataclasses import dataclass, field
from datetime import datetime
from typing import Union


@dataclass(frozen=True)
class Product:
    id: str
    name: str
    price: float
    quantity: float


@dataclass(frozen=True)
class PercentageDiscount:
    code: str
    expiration_date: datetime
    percentage: float  # 0..100
    kind: str = field(default="percentage", init=False)


@dataclass(frozen=True)
class AmountDiscount:
    code: str
    expiration_date: datetime
    amount: float
    kind: str = field(default="amount", init=False)


DiscountCode = Union[PercentageDiscount, AmountDiscount]
