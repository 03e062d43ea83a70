"""
Tests for input validation and partial-update inputs.
"""
import unittest
from decimal import Decimal

from product_catalog.exceptions import ValidationError
from product_catalog.schemas import (
    UNSET,
    CreateCategoryInput,
    CreateProductInput,
    CreateProductVariationInput,
    UpdateProductInput,
    UpdateProductVariationInput
)
from product_catalog.utils.validation import MAX_STOCK_QUANTITY, is_valid_url


def variation_fields(**overrides):
    fields = {
        'product_id': 1,
        'variation_name': 'Black 128GB',
        'unit_price': 699.99,
        'wholesale_price': 500,
        'stock_quantity': 50
    }
    fields.update(overrides)
    return fields


class TestValidation(unittest.TestCase):

    def assertInvalid(self, schema, field, **data):
        with self.assertRaises(ValidationError) as ctx:
            schema.parse(**data)
        fields = [error['field'] for error in ctx.exception.details['errors']]
        self.assertIn(field, fields)
        return ctx.exception

    def test_empty_names_rejected(self):
        self.assertInvalid(CreateCategoryInput, 'name', name='')
        self.assertInvalid(CreateProductInput, 'name', name='')
        self.assertInvalid(CreateProductVariationInput, 'variation_name', **variation_fields(variation_name=''))

    def test_image_url_must_be_a_url(self):
        self.assertInvalid(CreateProductInput, 'image_url', name='Phone', image_url='not a url')
        self.assertInvalid(UpdateProductInput, 'image_url', id=1, image_url='example.com/x.png')

    def test_image_url_kept_verbatim(self):
        data = CreateProductInput.parse(name='Phone', image_url='https://example.com')
        self.assertEqual(data.image_url, 'https://example.com')
        self.assertIsNone(CreateProductInput.parse(name='Phone').image_url)

    def test_is_valid_url(self):
        self.assertTrue(is_valid_url('https://cdn.example.com/img/phone.png'))
        self.assertTrue(is_valid_url('http://localhost:8080/a'))
        self.assertFalse(is_valid_url(''))
        self.assertFalse(is_valid_url('phone.png'))

    def test_prices_must_be_positive(self):
        for price in (0, -1, '-0.50', 0.001, 'abc', None):
            with self.subTest(price=price):
                self.assertInvalid(CreateProductVariationInput, 'unit_price', **variation_fields(unit_price=price))
                self.assertInvalid(
                    CreateProductVariationInput, 'wholesale_price', **variation_fields(wholesale_price=price)
                )

    def test_price_above_column_range_rejected(self):
        self.assertInvalid(CreateProductVariationInput, 'unit_price', **variation_fields(unit_price='100000000'))

    def test_prices_become_two_place_decimals(self):
        data = CreateProductVariationInput.parse(**variation_fields())
        self.assertEqual(data.unit_price, Decimal('699.99'))
        self.assertEqual(str(data.wholesale_price), '500.00')

    def test_stock_quantity_is_a_non_negative_integer(self):
        for quantity in (-1, 1.5, '3', True):
            with self.subTest(quantity=quantity):
                self.assertInvalid(
                    CreateProductVariationInput, 'stock_quantity', **variation_fields(stock_quantity=quantity)
                )
        self.assertEqual(CreateProductVariationInput.parse(**variation_fields(stock_quantity=0)).stock_quantity, 0)

    def test_stock_quantity_fits_integer_column(self):
        self.assertEqual(
            CreateProductVariationInput.parse(**variation_fields(stock_quantity=MAX_STOCK_QUANTITY)).stock_quantity,
            MAX_STOCK_QUANTITY
        )
        self.assertInvalid(
            CreateProductVariationInput, 'stock_quantity', **variation_fields(stock_quantity=MAX_STOCK_QUANTITY + 1)
        )

    def test_huge_prices_rejected(self):
        self.assertInvalid(CreateProductVariationInput, 'unit_price', **variation_fields(unit_price=1e30))
        self.assertInvalid(UpdateProductVariationInput, 'wholesale_price', id=1, wholesale_price='1e40')

    def test_unknown_fields_rejected(self):
        self.assertInvalid(CreateCategoryInput, 'slug', name='Phones', slug='phones')

    def test_error_payload_names_fields(self):
        error = self.assertInvalid(CreateProductInput, 'name', name='', image_url='nope')
        payload = error.to_dict()
        self.assertEqual(payload['error'], 'ValidationError')
        self.assertEqual(payload['code'], 'VALIDATION_ERROR')
        self.assertIn('image_url', payload['message'])
        self.assertIn('name', payload['message'])


class TestPartialUpdateInputs(unittest.TestCase):

    def test_only_provided_fields_are_changes(self):
        data = UpdateProductInput.parse(id=3, name='X')
        self.assertEqual(data.changes(), {'name': 'X'})
        self.assertIs(data.description, UNSET)
        self.assertIs(data.category_ids, UNSET)

    def test_explicit_none_is_a_change(self):
        data = UpdateProductInput.parse(id=3, description=None, image_url=None)
        self.assertEqual(data.changes(), {'description': None, 'image_url': None})

    def test_empty_category_ids_is_a_change(self):
        self.assertEqual(UpdateProductInput.parse(id=3, category_ids=[]).changes(), {'category_ids': []})

    def test_explicit_unset_is_ignored(self):
        data = UpdateProductInput.parse(id=3, name=UNSET, category_ids=UNSET)
        self.assertEqual(data.changes(), {})

    def test_name_cannot_be_cleared(self):
        with self.assertRaises(ValidationError):
            UpdateProductInput.parse(id=3, name=None)

    def test_variation_update_validates_provided_fields(self):
        data = UpdateProductVariationInput.parse(id=1, stock_quantity=5)
        self.assertEqual(data.changes(), {'stock_quantity': 5})

        data = UpdateProductVariationInput.parse(id=1, unit_price=19.99, color=None)
        self.assertEqual(data.changes(), {'unit_price': Decimal('19.99'), 'color': None})

        with self.assertRaises(ValidationError):
            UpdateProductVariationInput.parse(id=1, wholesale_price=0)
        with self.assertRaises(ValidationError):
            UpdateProductVariationInput.parse(id=1, stock_quantity=-3)

    def test_unset_singleton_survives_copy(self):
        import copy
        self.assertIs(copy.deepcopy(UNSET), UNSET)
        self.assertFalse(UNSET)


if __name__ == '__main__':
    unittest.main()
