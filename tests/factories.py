import random
import time
from shop_cart.domain import Product


def _unique() -> str:
    return str(time.time_ns() + random.randint(1, 100))


def product_factory(**overrides) -> Product:
    """Товар со случайными значениями; переданные поля переопределяют их"""
    fields = {
        "id": _unique(),
        "name": f"Product {_unique()}",
        "quantity": random.randint(1, 100),
        "price": random.randint(1, 100),
    }
    fields.update(overrides)
    return Product(**fields)
