import json
import logging
import math
import numbers
from decimal import Decimal
from datetime import date, datetime, timezone
from functools import reduce
from typing import Any, Callable, Mapping, Optional, Tuple
from .catalog import DiscountCatalog
from .domain import AmountDiscount, DiscountCode, PercentageDiscount, Product
from .errors import CatalogError
from .ftypes import Either, Maybe

logger = logging.getLogger(__name__)


# ============ Разбор и валидация входных данных ============


def _field(raw: Any, name: str) -> Any:
    """Читает поле из словаря или из атрибута объекта"""
    if isinstance(raw, Mapping):
        return raw.get(name)
    return getattr(raw, name, None)


def parse_number(value: Any, label: str, subject: str = "Product") -> Either[str, float]:
    """
    Явное приведение к числу на границе.
    Принимает любые вещественные числа (int, float, Decimal, Fraction, numpy)
    и числовые строки; bool, NaN, inf и не влезающие во float значения
    отклоняются. Обычный int возвращается без изменений.
    """
    error = Either.left(f"{subject} {label} must be a number")

    if isinstance(value, bool) or not isinstance(value, (numbers.Real, Decimal, str)):
        return error

    try:
        number = float(value.strip() if isinstance(value, str) else value)
    except (OverflowError, ValueError):
        return error

    if not math.isfinite(number):
        return error
    return Either.right(value if type(value) is int else number)


def require_positive(label: str) -> Callable[[Any], Either[str, float]]:
    """Замыкание-валидатор: число и строго больше нуля"""

    def check(value: Any) -> Either[str, float]:
        return parse_number(value, label).bind(
            lambda n: Either.right(n)
            if n > 0
            else Either.left(f"You cannot add a product with a negative {label}")
        )

    return check


def require_text(label: str) -> Callable[[Any], Either[str, str]]:
    """Замыкание-валидатор: непустая строка"""

    def check(value: Any) -> Either[str, str]:
        if isinstance(value, str) and value.strip():
            return Either.right(value)
        return Either.left(f"Product {label} must be a non-empty string")

    return check


# Порядок важен: сообщается только первая ошибка
PRODUCT_RULES: Tuple[Tuple[str, Callable[[Any], Either]], ...] = (
    ("id", require_text("id")),
    ("name", require_text("name")),
    ("price", require_positive("price")),
    ("quantity", require_positive("quantity")),
)


def parse_product(raw: Any) -> Either[str, Product]:
    """
    Разбирает товар из Product, словаря или объекта с атрибутами.
    Left(сообщение) при первой ошибке, Right(Product) при успехе.
    """

    def accumulate(acc: Either[str, dict], rule) -> Either[str, dict]:
        name, check = rule
        return acc.bind(
            lambda fields: check(_field(raw, name)).map(
                lambda value: {**fields, name: value}
            )
        )

    return reduce(accumulate, PRODUCT_RULES, Either.right({})).map(
        lambda fields: Product(**fields)
    )


# ============ Операции над позициями (чистые функции) ============


def index_of(items: Tuple[Product, ...], product_id: str) -> Maybe[int]:
    """Безопасный поиск позиции по ID"""
    return Maybe.of(
        next((i for i, item in enumerate(items) if item.id == product_id), None)
    )


def merge_product(items: Tuple[Product, ...], product: Product) -> Tuple[Product, ...]:
    """
    Добавляет товар в конец или увеличивает количество существующей позиции.
    Имя и цена существующей позиции не меняются.
    """
    found = index_of(items, product.id)
    if found.is_none():
        return items + (product,)

    index = found.get_or_else(-1)
    existing = items[index]
    merged = Product(
        id=existing.id,
        name=existing.name,
        price=existing.price,
        quantity=existing.quantity + product.quantity,
    )
    return items[:index] + (merged,) + items[index + 1 :]


def decrement_product(items: Tuple[Product, ...], index: int) -> Tuple[Product, ...]:
    """Уменьшает количество на 1; позиция с количеством <= 1 удаляется"""
    item = items[index]
    if item.quantity <= 1:
        return items[:index] + items[index + 1 :]

    decremented = Product(
        id=item.id, name=item.name, price=item.price, quantity=item.quantity - 1
    )
    return items[:index] + (decremented,) + items[index + 1 :]


# ============ Агрегация ============


def product_count(items: Tuple[Product, ...]) -> float:
    """Сумма количеств через reduce"""
    return reduce(lambda acc, p: acc + p.quantity, items, 0)


def subtotal(items: Tuple[Product, ...]) -> float:
    """Сумма quantity * price слева направо, без скидки"""
    return reduce(lambda acc, p: acc + p.quantity * p.price, items, 0)


def discount_value(base: float, discount: DiscountCode) -> float:
    """Размер скидки для суммы base"""
    if isinstance(discount, PercentageDiscount):
        return base * discount.percentage / 100
    if isinstance(discount, AmountDiscount):
        return discount.amount
    raise TypeError(f"Unknown discount type: {type(discount).__name__}")


def apply_discount(base: float, discount: Optional[DiscountCode]) -> float:
    """Итог со скидкой; ниже нуля не обрезается"""
    if discount is None:
        return base
    return base - discount_value(base, discount)


# ============ Время ============


def as_utc(moment: datetime) -> datetime:
    """Наивное время считается UTC"""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def is_expired(discount: DiscountCode, now: datetime) -> bool:
    """Истёк, если дата окончания строго раньше now"""
    return as_utc(discount.expiration_date) < as_utc(now)


# ============ Загрузка каталога скидок ============


def parse_date(value: Any, code: str) -> datetime:
    if isinstance(value, datetime):
        return as_utc(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    if isinstance(value, str):
        try:
            return as_utc(datetime.fromisoformat(value.strip()))
        except ValueError as exc:
            raise CatalogError(
                f"Discount {code!r} has an invalid expiration_date: {value!r}"
            ) from exc
    raise CatalogError(f"Discount {code!r} is missing an expiration_date")


def parse_discount(raw: Mapping) -> DiscountCode:
    """
    Строит нужный вариант скидки из словаря.
    Должно быть ровно одно из полей percentage / amount.
    """
    if not isinstance(raw, Mapping):
        raise CatalogError(f"Discount entry must be an object, got {type(raw).__name__}")

    code = raw.get("code")
    if not isinstance(code, str) or not code:
        raise CatalogError("Discount code must be a non-empty string")

    expiration_date = parse_date(raw.get("expiration_date"), code)

    has_percentage = "percentage" in raw
    has_amount = "amount" in raw
    if has_percentage == has_amount:
        raise CatalogError(
            f"Discount {code!r} must define exactly one of percentage or amount"
        )

    label = "percentage" if has_percentage else "amount"
    parsed = parse_number(raw[label], label, subject=f"Discount {code!r}")
    if parsed.is_left:
        raise CatalogError(parsed.value)

    if has_percentage:
        return PercentageDiscount(
            code=code, expiration_date=expiration_date, percentage=parsed.value
        )
    return AmountDiscount(code=code, expiration_date=expiration_date, amount=parsed.value)


def load_discounts(path: str) -> DiscountCatalog:
    """Загружает JSON вида {"discounts": [...]} и возвращает каталог"""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, Mapping):
        raise CatalogError(f"{path}: expected a JSON object at the top level")

    discounts = tuple(map(parse_discount, data.get("discounts", [])))
    logger.info("Loaded %d discount codes from %s", len(discounts), path)
    return DiscountCatalog(discounts)
