# catalog/core.py
import enum
import json
import math
import re
import uuid
from typing import Any, Dict, Optional

from pydantic import ValidationError

from .models import ProductBody

# Error kinds, validation and the product helpers shared by the route logic.

PRODUCT_FIELDS = ("name", "description", "price", "category", "inStock")

_INT_PREFIX = re.compile(r"([+-]?)(?:(0[xX])([0-9a-fA-F]+)|([0-9]+))")


class ErrorKind(enum.Enum):
    UNAUTHORIZED = 401
    INVALID_INPUT = 400
    NOT_FOUND = 404
    INTERNAL = 500


class CatalogError(Exception):
    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

    @classmethod
    def not_found(cls) -> "CatalogError":
        return cls(ErrorKind.NOT_FOUND, "Product not found")

    @classmethod
    def invalid_input(cls) -> "CatalogError":
        return cls(ErrorKind.INVALID_INPUT, "Invalid product data")

    @classmethod
    def unauthorized(cls) -> "CatalogError":
        return cls(ErrorKind.UNAUTHORIZED, "Unauthorized")


def _finite_float(raw: str) -> float:
    value = float(raw)
    if not math.isfinite(value):
        raise ValueError(f"number out of range: {raw}")
    return value


def _reject_constant(name: str):
    raise ValueError(f"invalid JSON constant: {name}")


def parse_body(raw: bytes) -> Any:
    """
    Strict JSON decoding for request bodies: ``NaN``/``Infinity`` literals
    and floats that overflow (``1e400``) raise ValueError, since they could
    not be written back out as JSON.
    """
    return json.loads(raw, parse_float=_finite_float, parse_constant=_reject_constant)


def validate_product(payload: Any) -> Dict[str, Any]:
    """
    Checks a create/update body against ``ProductBody``: it must be an
    object with a truthy ``name`` and a finite numeric ``price``. Other
    fields are not looked at. Returns the body unchanged.
    """
    try:
        ProductBody.model_validate(payload)
    except ValidationError:
        raise CatalogError.invalid_input()
    return payload


def parse_int(raw: Optional[str]) -> Optional[int]:
    """
    Lenient integer parsing for query strings: reads the leading integer
    ("12abc" -> 12, "1.5" -> 1, "0x10" -> 16) and returns None when there
    is none.
    """
    if raw is None:
        return None
    m = _INT_PREFIX.match(raw.lstrip())
    if not m:
        return None
    sign, _, hex_digits, dec_digits = m.groups()
    value = int(hex_digits, 16) if hex_digits else int(dec_digits)
    return -value if sign == "-" else value


def int_or_default(raw: Optional[str], default: int) -> int:
    # zero counts as "not given", same as a missing value
    return parse_int(raw) or default


def new_product_id() -> str:
    return str(uuid.uuid4())


def make_product(product_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
    product = {"id": product_id}
    for field in PRODUCT_FIELDS:
        if field in payload:
            product[field] = payload[field]
    return product


def merge_product(existing: Dict[str, Any], changes: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(existing)
    merged.update({k: v for k, v in changes.items() if k != "id"})
    return merged
