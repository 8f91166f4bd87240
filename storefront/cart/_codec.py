"""
Cart codec: CartLine records as persisted JSON.

Wire format (one JSON array under the cart key):

    [{"variantKey": "12:M:Azul:", "productId": 12, "productName": "Polo",
      "unitPrice": "249.90", "quantity": 2, "size": "M", "color": "Azul",
      "gender": null, "image": null, "sku": null}]
"""

from __future__ import annotations

import json
import logging
from decimal import InvalidOperation
from typing import Any

from storefront._types import to_money
from storefront.cart._types import CartLine, variant_key

logger = logging.getLogger(__name__)


def encode_lines(lines: tuple[CartLine, ...] | list[CartLine]) -> str:
    return json.dumps([_encode_line(line) for line in lines], ensure_ascii=False)


def _encode_line(line: CartLine) -> dict[str, Any]:
    return {
        "variantKey": line.variant_key,
        "productId": line.product_id,
        "productName": line.product_name,
        "unitPrice": str(line.unit_price),
        "quantity": line.quantity,
        "size": line.size,
        "color": line.color,
        "gender": line.gender,
        "image": line.image,
        "sku": line.sku,
    }


def decode_lines(raw: str | None) -> list[CartLine]:
    """
    Parse a persisted payload.

    Absent, non-JSON, too deeply nested or non-array payloads decode to [].
    Records that cannot be read are skipped. The variant key is always
    recomputed from the record's fields, never trusted from storage.
    """
    if raw is None:
        return []
    try:
        data = json.loads(raw)
    except (ValueError, TypeError, RecursionError):
        logger.warning("Discarding unparseable cart payload")
        return []
    if not isinstance(data, list):
        logger.warning("Discarding cart payload of type %s", type(data).__name__)
        return []

    lines: list[CartLine] = []
    for index, record in enumerate(data):
        line = decode_line(record)
        if line is None:
            logger.warning("Skipping malformed cart record #%d", index)
            continue
        lines.append(line)
    return lines


def decode_line(record: object) -> CartLine | None:
    if not isinstance(record, dict):
        return None
    try:
        product_id = record["productId"]
        quantity = record["quantity"]
        size = str(record.get("size") or "")
        color = str(record.get("color") or "")
        gender = record.get("gender") or None
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
            return None
        if not isinstance(product_id, int | str) or isinstance(product_id, bool):
            return None
        unit_price = to_money(record["unitPrice"])
        if not unit_price.is_finite() or unit_price < 0:
            return None
        return CartLine(
            variant_key=variant_key(product_id, size, color, gender),
            product_id=product_id,
            product_name=str(record.get("productName") or ""),
            unit_price=unit_price,
            quantity=quantity,
            size=size,
            color=color,
            gender=str(gender) if gender is not None else None,
            image=record.get("image") or None,
            sku=record.get("sku") or None,
        )
    except (KeyError, TypeError, ValueError, InvalidOperation):
        return None


__all__ = ("encode_lines", "decode_lines", "decode_line")
