"""
Tests for the logging manager.
"""
import logging
import unittest

from product_catalog import api
from product_catalog.logging_setup import get_logger, log_exception, logger
from product_catalog.tests.base import CatalogTestCase


class RecordingHandler(logging.Handler):

    def __init__(self):
        super().__init__()
        self.records = []

    def emit(self, record):
        self.records.append(record)


class TestLogging(CatalogTestCase):

    def setUp(self):
        super().setUp()
        self.handler = RecordingHandler()
        root_logger = logging.getLogger()
        root_logger.addHandler(self.handler)
        self.addCleanup(root_logger.removeHandler, self.handler)

    def test_package_records_reach_root_handlers(self):
        category = api.create_category('Audio')

        messages = [
            record.getMessage() for record in self.handler.records
            if record.name == 'product_catalog.services.category_service'
        ]
        self.assertIn(f"Created category {category['id']} 'Audio'", messages)

    def test_named_loggers_propagate(self):
        self.assertTrue(get_logger('product_catalog').propagate)
        self.assertTrue(get_logger('product_catalog.cli').propagate)
        self.assertIs(logger.app_logger, logging.getLogger('product_catalog'))

    def test_log_exception_includes_message(self):
        try:
            raise RuntimeError('disk full')
        except RuntimeError as e:
            log_exception('product_catalog.cli', e, 'Export failed')

        messages = [record.getMessage() for record in self.handler.records]
        self.assertIn('Export failed: disk full', messages)
        self.assertTrue(any('RuntimeError' in message for message in messages))


if __name__ == '__main__':
    unittest.main()
