"""
Tests for the command line interface.
"""
import io
import json
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path

from product_catalog.db import db
from product_catalog.main import main


class TestCLI(unittest.TestCase):

    def setUp(self):
        tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(tmpdir.cleanup)
        self.addCleanup(db.dispose)
        self.url = f"sqlite:///{Path(tmpdir.name) / 'catalog.db'}"
        self.run_cli('init-db')

    def run_cli(self, *args):
        out = io.StringIO()
        with redirect_stdout(out):
            code = main(['--database-url', self.url, *args])
        return code, json.loads(out.getvalue())

    def test_create_and_show_product(self):
        code, category = self.run_cli('categories', 'create', 'Electronics')
        self.assertEqual(code, 0)

        code, product = self.run_cli(
            'products', 'create', 'Phone', '--category-id', str(category['id'])
        )
        self.assertEqual(code, 0)

        code, variation = self.run_cli(
            'variations', 'create', str(product['id']), 'Black 128GB',
            '--unit-price', '699.99', '--wholesale-price', '500', '--stock-quantity', '50'
        )
        self.assertEqual(code, 0)
        self.assertEqual(variation['unit_price'], '699.99')

        code, shown = self.run_cli('products', 'show', str(product['id']))
        self.assertEqual(code, 0)
        self.assertEqual([c['name'] for c in shown['categories']], ['Electronics'])
        self.assertEqual(shown['variations'][0]['wholesale_price'], '500.00')

    def test_catalog_errors_exit_non_zero(self):
        code, error = self.run_cli('products', 'create', 'Phone', '--category-id', '42')
        self.assertEqual(code, 1)
        self.assertEqual(error['code'], 'INVALID_REFERENCE')

        code, error = self.run_cli('categories', 'create', '')
        self.assertEqual(code, 1)
        self.assertEqual(error['code'], 'VALIDATION_ERROR')

    def test_health(self):
        code, status = self.run_cli('health')
        self.assertEqual(code, 0)
        self.assertEqual(status['database'], 'ok')


if __name__ == '__main__':
    unittest.main()
