"""
Tests for the configuration layer.
"""
import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from product_catalog.config import DEFAULTS, config


class TestConfig(unittest.TestCase):

    def setUp(self):
        original = config.path
        self.addCleanup(config.reload, original)
        self.tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmpdir.cleanup)

    def write_settings(self, text):
        path = Path(self.tmpdir.name) / 'settings.ini'
        path.write_text(text)
        return path

    def test_defaults_without_settings_file(self):
        config.reload(Path(self.tmpdir.name) / 'missing.ini')

        db_config = config.database_config
        self.assertEqual(db_config['url'], os.getenv('PRODUCT_CATALOG_DATABASE_URL') or DEFAULTS['DATABASE']['url'])
        self.assertTrue(db_config['enforce_foreign_keys'])
        self.assertFalse(db_config['echo'])
        self.assertFalse(config.log_config['file_output'])
        self.assertEqual(config.log_config['level'], 'INFO')

    def test_settings_file_overrides_defaults(self):
        path = self.write_settings(
            "[DATABASE]\n"
            "url = sqlite:///elsewhere.db\n"
            "pool_size = 3\n"
            "\n"
            "[LOGGING]\n"
            "level = DEBUG\n"
        )

        with patch.dict(os.environ, {}, clear=False):
            os.environ.pop('PRODUCT_CATALOG_DATABASE_URL', None)
            config.reload(path)
            self.assertEqual(config.get_db_url(), 'sqlite:///elsewhere.db')

        self.assertEqual(config.path, path)
        self.assertEqual(config.get_int('DATABASE', 'pool_size'), 3)
        self.assertEqual(config.get_int('DATABASE', 'max_overflow'), 20)
        self.assertEqual(config.log_config['level'], 'DEBUG')

    def test_environment_overrides_database_url(self):
        config.reload(self.write_settings("[DATABASE]\nurl = sqlite:///file.db\n"))

        with patch.dict(os.environ, {'PRODUCT_CATALOG_DATABASE_URL': 'postgresql://db/catalog'}):
            self.assertEqual(config.get_db_url(), 'postgresql://db/catalog')
            self.assertEqual(config.database_config['url'], 'postgresql://db/catalog')

    def test_typed_getters_fall_back_to_default(self):
        config.reload(self.write_settings("[DATABASE]\npool_size = lots\n"))

        self.assertEqual(config.get_int('DATABASE', 'pool_size', 7), 7)
        self.assertIsNone(config.get('NOPE', 'key'))
        self.assertFalse(config.get_boolean('NOPE', 'key', False))

    def test_set_and_save(self):
        path = Path(self.tmpdir.name) / 'nested' / 'settings.ini'
        config.reload(path)
        config.set('LOGGING', 'level', 'WARNING')
        config.save()

        self.assertTrue(path.exists())
        config.reload(path)
        self.assertEqual(config.get('LOGGING', 'level'), 'WARNING')


if __name__ == '__main__':
    unittest.main()
