"""Input models for catalog operations.

Create inputs carry every field. Update inputs default each field to UNSET, so
"not provided" stays distinct from "provided as None" (which clears a
nullable column). ``changes()`` returns only the provided fields.
"""
from decimal import Decimal
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, StrictInt, field_validator
from pydantic import ValidationError as PydanticValidationError

from product_catalog.exceptions import ValidationError
from product_catalog.utils.validation import (
    check_name, check_price, check_stock_quantity, check_url
)


class UnsetType:
    """Marker for an update field the caller did not provide."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return 'UNSET'

    def __bool__(self):
        return False

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self


UNSET = UnsetType()


def _skip_unset(check):
    def validate(cls, value):
        if isinstance(value, UnsetType):
            return value
        return check(value)
    return validate


class InputModel(BaseModel):
    model_config = ConfigDict(extra='forbid', arbitrary_types_allowed=True)

    @classmethod
    def parse(cls, **data):
        """Build the model, translating pydantic errors into ValidationError."""
        try:
            return cls(**data)
        except PydanticValidationError as e:
            errors = [
                {
                    'field': str(error['loc'][0]) if error['loc'] else '',
                    'message': error['msg']
                }
                for error in e.errors()
            ]
            fields = ', '.join(sorted({error['field'] for error in errors if error['field']}))
            raise ValidationError(
                f"Invalid {cls.__name__}: {fields}" if fields else f"Invalid {cls.__name__}",
                details={'errors': errors}
            )


class UpdateModel(InputModel):

    def changes(self) -> Dict[str, Any]:
        """Fields the caller provided, excluding the target id."""
        return {
            name: getattr(self, name)
            for name in type(self).model_fields
            if name != 'id' and not isinstance(getattr(self, name), UnsetType)
        }


class CreateCategoryInput(InputModel):
    name: str
    description: Optional[str] = None

    validate_name = field_validator('name')(classmethod(_skip_unset(check_name)))


class UpdateCategoryInput(UpdateModel):
    id: StrictInt
    name: Union[str, UnsetType] = UNSET
    description: Union[Optional[str], UnsetType] = UNSET

    validate_name = field_validator('name')(classmethod(_skip_unset(check_name)))


class CreateProductInput(InputModel):
    name: str
    description: Optional[str] = None
    image_url: Optional[str] = None
    category_ids: Optional[List[StrictInt]] = None

    validate_name = field_validator('name')(classmethod(_skip_unset(check_name)))
    validate_image_url = field_validator('image_url')(classmethod(_skip_unset(check_url)))


class UpdateProductInput(UpdateModel):
    id: StrictInt
    name: Union[str, UnsetType] = UNSET
    description: Union[Optional[str], UnsetType] = UNSET
    image_url: Union[Optional[str], UnsetType] = UNSET
    category_ids: Union[List[StrictInt], UnsetType] = UNSET

    validate_name = field_validator('name')(classmethod(_skip_unset(check_name)))
    validate_image_url = field_validator('image_url')(classmethod(_skip_unset(check_url)))


class CreateProductVariationInput(InputModel):
    product_id: StrictInt
    variation_name: str
    color: Optional[str] = None
    size: Optional[str] = None
    material: Optional[str] = None
    unit_price: Decimal
    wholesale_price: Decimal
    stock_quantity: StrictInt

    validate_name = field_validator('variation_name')(classmethod(_skip_unset(check_name)))
    validate_prices = field_validator(
        'unit_price', 'wholesale_price', mode='before'
    )(classmethod(_skip_unset(check_price)))
    validate_stock = field_validator('stock_quantity')(classmethod(_skip_unset(check_stock_quantity)))


class UpdateProductVariationInput(UpdateModel):
    id: StrictInt
    variation_name: Union[str, UnsetType] = UNSET
    color: Union[Optional[str], UnsetType] = UNSET
    size: Union[Optional[str], UnsetType] = UNSET
    material: Union[Optional[str], UnsetType] = UNSET
    unit_price: Union[Decimal, UnsetType] = UNSET
    wholesale_price: Union[Decimal, UnsetType] = UNSET
    stock_quantity: Union[StrictInt, UnsetType] = UNSET

    validate_name = field_validator('variation_name')(classmethod(_skip_unset(check_name)))
    validate_prices = field_validator(
        'unit_price', 'wholesale_price', mode='before'
    )(classmethod(_skip_unset(check_price)))
    validate_stock = field_validator('stock_quantity')(classmethod(_skip_unset(check_stock_quantity)))
