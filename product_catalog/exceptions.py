class CatalogError(Exception):
    """Base exception for Product Catalog errors."""

    def __init__(self, message=None, code=None, details=None):
        """Initialize the exception.

        Args:
            message: Error message
            code: Error code
            details: Additional error details (offending entity, id, field)
        """
        self.message = message or "An error occurred in the Product Catalog"
        self.code = code
        self.details = details
        super().__init__(self.message)

    def __str__(self):
        """String representation of the error."""
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message

    def to_dict(self):
        """Convert the exception to a dictionary."""
        error_dict = {
            'error': self.__class__.__name__,
            'message': self.message,
        }

        if self.code:
            error_dict['code'] = self.code

        if self.details:
            error_dict['details'] = self.details

        return error_dict


class ConfigError(CatalogError):
    """Exception raised for configuration errors."""

    def __init__(self, message=None, code=None, details=None):
        message = message or "Configuration error"
        super().__init__(message, code, details)


class DatabaseError(CatalogError):
    """Exception raised for database-related errors."""

    def __init__(self, message=None, code=None, details=None):
        message = message or "Database error"
        super().__init__(message, code, details)


class ValidationError(CatalogError):
    """Exception raised for malformed input (empty name, bad URL, non-positive price)."""

    def __init__(self, message=None, code=None, details=None):
        message = message or "Validation error"
        code = code or 'VALIDATION_ERROR'
        super().__init__(message, code, details)


class NotFoundError(CatalogError):
    """Exception raised when a requested entity is not found."""

    def __init__(self, message=None, code=None, details=None):
        message = message or "Resource not found"
        code = code or 'NOT_FOUND'
        super().__init__(message, code, details)

    @classmethod
    def for_entity(cls, entity, entity_id):
        return cls(
            f"{entity} with id {entity_id} not found",
            details={'entity': entity, 'id': entity_id}
        )


class ConstraintViolationError(CatalogError):
    """Exception raised when a cross-entity reference is broken at write time."""

    def __init__(self, message=None, code=None, details=None):
        message = message or "Constraint violation"
        code = code or 'CONSTRAINT_VIOLATION'
        super().__init__(message, code, details)


class InvalidReferenceError(NotFoundError, ConstraintViolationError):
    """A write names an entity id that does not exist.

    Caught as either NotFoundError or ConstraintViolationError.
    """

    def __init__(self, message=None, code=None, details=None):
        message = message or "Referenced entity does not exist"
        code = code or 'INVALID_REFERENCE'
        super().__init__(message, code, details)

    @classmethod
    def for_entity(cls, entity, entity_id, field=None):
        details = {'entity': entity, 'id': entity_id}
        if field:
            details['field'] = field
        return cls(f"{entity} with id {entity_id} does not exist", details=details)
