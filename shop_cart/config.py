from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ROOT_DIR = Path(__file__).resolve().parents[1]  # .../shop-cart
load_dotenv(dotenv_path=ROOT_DIR / ".env")


def _get_env(*keys: str, default: str | None = None) -> str | None:
    for k in keys:
        v = os.getenv(k)
        if v is not None and str(v).strip() != "":
            return v.strip()
    return default


def _get_int(*keys: str, default: int | None = None) -> int | None:
    v = _get_env(*keys, default=None)
    if v is None:
        return default
    return int(v)


@dataclass(frozen=True)
class Settings:
    discounts_path: str
    log_level: str
    currency: str
    decimals: int


def load_settings() -> Settings:
    return Settings(
        discounts_path=_get_env(
            "DISCOUNTS_PATH", "SHOP_CART_DISCOUNTS", default=str(ROOT_DIR / "data" / "discounts.json")
        )
        or "",
        log_level=(_get_env("LOG_LEVEL", default="INFO") or "INFO").upper(),
        currency=_get_env("CURRENCY", default="USD") or "USD",
        decimals=_get_int("DECIMALS", default=2),
    )


settings = load_settings()
