"""
Settings: environment-driven configuration.

    from storefront.config import settings

    settings.cart_storage_key    # "shopping-cart"
    settings.currency_symbol     # "$"

Values come from the process environment, after `.env` in the working
directory (or the path in STOREFRONT_ENV_FILE) has been loaded.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ROOT_DIR = Path(__file__).resolve().parents[1]

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


# ═══════════════════════════════════════════════════════════════════════════════
# Env Helpers
# ═══════════════════════════════════════════════════════════════════════════════

def _get_env(*keys: str, default: str | None = None) -> str | None:
    for k in keys:
        v = os.getenv(k)
        if v is not None and str(v).strip() != "":
            return v.strip()
    return default


def _get_int(*keys: str, default: int) -> int:
    v = _get_env(*keys, default=None)
    if v is None:
        return default
    return int(v)


def _get_float(*keys: str, default: float) -> float:
    v = _get_env(*keys, default=None)
    if v is None:
        return default
    return float(v)


def _get_ids(*keys: str, default: tuple[int, ...]) -> frozenset[int]:
    v = _get_env(*keys, default=None)
    if v is None:
        return frozenset(default)
    return frozenset(int(part) for part in v.split(",") if part.strip())


# ═══════════════════════════════════════════════════════════════════════════════
# Settings
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True, slots=True)
class Settings:
    api_base_url: str
    http_timeout: float
    cart_storage_key: str
    legacy_cart_storage_key: str
    storage_path: str
    currency_symbol: str
    decimals: int
    max_quantity: int
    trouser_garment_ids: frozenset[int]
    skirt_dress_garment_ids: frozenset[int]
    log_level: str


def load_settings(env_file: str | os.PathLike[str] | None = None) -> Settings:
    """Read settings from the environment (and `.env`, if present)."""
    load_dotenv(dotenv_path=env_file or _get_env("STOREFRONT_ENV_FILE", default=None))

    return Settings(
        api_base_url=_get_env("STOREFRONT_API_URL", "API_BASE_URL", default="http://localhost:5000") or "",
        http_timeout=_get_float("HTTP_TIMEOUT", default=10.0),
        cart_storage_key=_get_env("CART_STORAGE_KEY", default="shopping-cart") or "shopping-cart",
        legacy_cart_storage_key=_get_env(
            "LEGACY_CART_STORAGE_KEY", default="uniformes-laguna-cart"
        ) or "uniformes-laguna-cart",
        storage_path=_get_env(
            "STOREFRONT_STORAGE_PATH", "STORAGE_PATH", default=str(ROOT_DIR / "data" / "storage.json")
        ) or "",
        currency_symbol=_get_env("CURRENCY_SYMBOL", default="$") or "$",
        decimals=_get_int("DECIMALS", default=2),
        max_quantity=_get_int("MAX_QUANTITY", default=999),
        trouser_garment_ids=_get_ids("TROUSER_GARMENT_IDS", default=(4,)),
        skirt_dress_garment_ids=_get_ids("SKIRT_DRESS_GARMENT_IDS", default=(10, 11)),
        log_level=(_get_env("LOG_LEVEL", default="INFO") or "INFO").upper(),
    )


def configure_logging(level: str | None = None) -> None:
    """Install the root handler used by scripts and examples."""
    logging.basicConfig(
        level=level or settings.log_level,
        format=LOG_FORMAT,
    )


settings = load_settings()


__all__ = ("Settings", "settings", "load_settings", "configure_logging")
