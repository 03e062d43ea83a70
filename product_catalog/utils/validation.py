from decimal import Decimal
from typing import Optional

from pydantic import AnyUrl, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from product_catalog.utils.money import MAX_MONEY, to_decimal

# Largest value of the 32-bit INTEGER column on every supported backend
MAX_STOCK_QUANTITY = 2 ** 31 - 1

_url_adapter = TypeAdapter(AnyUrl)


def is_valid_url(value: str) -> bool:
    """Check that a string is an absolute URL with a scheme."""
    try:
        _url_adapter.validate_python(value)
    except PydanticValidationError:
        return False
    return True


def check_name(value: str) -> str:
    if not value:
        raise ValueError('must not be empty')
    return value


def check_url(value: Optional[str]) -> Optional[str]:
    """Validate an optional URL, returning it unchanged (no normalisation)."""
    if value is not None and not is_valid_url(value):
        raise ValueError(f'{value!r} is not a valid URL')
    return value


def check_price(value) -> Decimal:
    """Convert a price through the money codec and require it to be positive."""
    amount = to_decimal(value)
    if amount <= 0:
        raise ValueError('must be greater than 0')
    if amount > MAX_MONEY:
        raise ValueError(f'must not exceed {MAX_MONEY}')
    return amount


def check_stock_quantity(value: int) -> int:
    if value < 0:
        raise ValueError('must be a non-negative integer')
    if value > MAX_STOCK_QUANTITY:
        raise ValueError(f'must not exceed {MAX_STOCK_QUANTITY}')
    return value
