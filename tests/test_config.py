import sys
import os

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import logging
import pytest
from shop_cart import config
from shop_cart.logging_config import setup_logging


def test_defaults(monkeypatch):
    """Проверка настроек по умолчанию"""
    for key in ("DISCOUNTS_PATH", "SHOP_CART_DISCOUNTS", "LOG_LEVEL", "CURRENCY", "DECIMALS"):
        monkeypatch.delenv(key, raising=False)

    s = config.load_settings()

    assert s.discounts_path.endswith(os.path.join("data", "discounts.json"))
    assert s.log_level == "INFO"
    assert s.currency == "USD"
    assert s.decimals == 2


def test_env_overrides(monkeypatch):
    """Переменные окружения переопределяют настройки"""
    monkeypatch.delenv("DISCOUNTS_PATH", raising=False)
    monkeypatch.setenv("SHOP_CART_DISCOUNTS", "/tmp/codes.json")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("CURRENCY", "EUR")
    monkeypatch.setenv("DECIMALS", "0")

    s = config.load_settings()

    assert s.discounts_path == "/tmp/codes.json"
    assert s.log_level == "DEBUG"
    assert s.currency == "EUR"
    assert s.decimals == 0


def test_blank_values_fall_back(monkeypatch):
    """Пустое значение пропускается в пользу следующего ключа"""
    monkeypatch.setenv("DISCOUNTS_PATH", "   ")
    monkeypatch.setenv("SHOP_CART_DISCOUNTS", "/srv/d.json")
    assert config.load_settings().discounts_path == "/srv/d.json"


def test_bad_int_raises(monkeypatch):
    monkeypatch.setenv("DECIMALS", "two")
    with pytest.raises(ValueError):
        config.load_settings()


def test_setup_logging_configures_package_logger():
    """Повторная настройка логов не дублирует обработчики"""
    logger = setup_logging("debug")
    handlers = len(logger.handlers)

    setup_logging("warning")

    assert logger.name == "shop_cart"
    assert logger.level == logging.WARNING
    assert len(logger.handlers) == handlers
