"""Money codec.

Prices live as ``decimal.Decimal`` quantized to two places everywhere in the
application. Floats handed in by callers are converted through their shortest
repr (``29.99`` -> ``Decimal('29.99')``), never through their binary value.
The ``Money`` column type persists the same Decimal as NUMERIC(10, 2), or as
integer cents on SQLite, which has no exact decimal storage.
"""
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from numbers import Integral

from sqlalchemy import BigInteger, Numeric
from sqlalchemy.types import TypeDecorator

MONEY_PRECISION = 10
MONEY_SCALE = 2
CENT = Decimal(1).scaleb(-MONEY_SCALE)
MAX_MONEY = Decimal(10) ** (MONEY_PRECISION - MONEY_SCALE) - CENT


def to_decimal(value) -> Decimal:
    """Convert a caller-supplied amount into an exact, two-place Decimal.

    Args:
        value: Decimal, int, float or numeric string

    Returns:
        Decimal quantized to cents (half-up)

    Raises:
        ValueError: if the value is not a finite number or is too large
            to carry cents
    """
    if isinstance(value, bool):
        raise ValueError("Boolean is not a monetary amount")

    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, Integral):
        amount = Decimal(int(value))
    elif isinstance(value, float):
        amount = Decimal(repr(value))
    elif isinstance(value, str):
        try:
            amount = Decimal(value.strip())
        except InvalidOperation:
            raise ValueError(f"Not a monetary amount: {value!r}")
    else:
        raise ValueError(f"Not a monetary amount: {value!r}")

    if not amount.is_finite():
        raise ValueError(f"Monetary amount must be finite, got {value!r}")

    try:
        return amount.quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise ValueError(f"Monetary amount out of range: {value!r}")


def to_cents(amount: Decimal) -> int:
    """Encode a quantized amount as integer minor units."""
    return int(to_decimal(amount).scaleb(MONEY_SCALE))


def from_cents(cents: int) -> Decimal:
    """Decode integer minor units back into a two-place Decimal."""
    return Decimal(int(cents)).scaleb(-MONEY_SCALE).quantize(CENT)


class Money(TypeDecorator):
    """Exact two-place money column.

    NUMERIC(10, 2) where the backend has a native decimal type; BIGINT cents
    on SQLite.
    """

    impl = Numeric(MONEY_PRECISION, MONEY_SCALE, asdecimal=True)
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == 'sqlite':
            return dialect.type_descriptor(BigInteger())
        return dialect.type_descriptor(Numeric(MONEY_PRECISION, MONEY_SCALE, asdecimal=True))

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if dialect.name == 'sqlite':
            return to_cents(value)
        return to_decimal(value)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        if dialect.name == 'sqlite':
            return from_cents(value)
        return to_decimal(value)
