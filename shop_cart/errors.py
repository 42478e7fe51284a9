class CartError(Exception):
    """Базовая ошибка корзины, сообщение можно показывать пользователю"""


class ValidationError(CartError):
    """Товар не прошёл проверку при добавлении"""


class NotFoundError(CartError):
    """Нет такого товара в корзине или такого кода скидки"""


class ExpiredError(CartError):
    """Срок действия кода скидки истёк"""


class CatalogError(CartError):
    """Некорректные данные каталога скидок"""
