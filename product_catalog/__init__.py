from .config import config
from .logging_setup import logger, get_logger
from .db import db, session_scope
from .exceptions import (
    CatalogError, ValidationError, NotFoundError,
    ConstraintViolationError, InvalidReferenceError, DatabaseError
)

__all__ = [
    'config',
    'db',
    'session_scope',
    'logger',
    'get_logger',
    'CatalogError',
    'ValidationError',
    'NotFoundError',
    'ConstraintViolationError',
    'InvalidReferenceError',
    'DatabaseError'
]
