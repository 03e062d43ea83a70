from .date_utils import utcnow, next_timestamp
from .money import to_decimal, to_cents, from_cents, Money
from .validation import is_valid_url

__all__ = [
    'utcnow',
    'next_timestamp',
    'to_decimal',
    'to_cents',
    'from_cents',
    'Money',
    'is_valid_url'
]
