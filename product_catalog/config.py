import os
import configparser
from pathlib import Path

from product_catalog.exceptions import ConfigError

DEFAULT_CONFIG_PATH = Path('config') / 'settings.ini'

DEFAULTS = {
    'DATABASE': {
        'url': 'sqlite:///product_catalog.db',
        'echo': 'False',
        'pool_size': '10',
        'max_overflow': '20',
        'pool_timeout': '30',
        'pool_recycle': '1800',
        'enforce_foreign_keys': 'True'
    },
    'LOGGING': {
        'level': 'INFO',
        'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        'directory': 'logs',
        'max_size_mb': '10',
        'backup_count': '5',
        'console_output': 'True',
        'file_output': 'False'
    }
}


class Config:
    """Configuration manager for the Product Catalog."""

    _instance = None

    def __new__(cls):
        """Singleton pattern implementation."""
        if cls._instance is None:
            cls._instance = super(Config, cls).__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        """Initialize the configuration if not already initialized."""
        if self._initialized:
            return

        self._config_path = Path(os.getenv('PRODUCT_CATALOG_CONFIG', DEFAULT_CONFIG_PATH))
        self.reload()
        self._initialized = True

    def reload(self, path=None):
        """(Re)load settings, layering the settings file over the defaults.

        Args:
            path: Optional settings file path; defaults to the current one
        """
        if path is not None:
            self._config_path = Path(path)

        self._config = configparser.ConfigParser(interpolation=None)
        self._config.read_dict(DEFAULTS)

        if self._config_path.exists():
            try:
                self._config.read(self._config_path)
            except configparser.Error as e:
                raise ConfigError(
                    f"Cannot parse {self._config_path}: {e}",
                    details={'path': str(self._config_path)}
                )

    @property
    def path(self):
        return self._config_path

    def save(self):
        """Save configuration to file."""
        self._config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self._config_path, 'w') as configfile:
            self._config.write(configfile)

    def get(self, section, key, default=None):
        """Get configuration value."""
        try:
            return self._config.get(section, key)
        except (configparser.NoSectionError, configparser.NoOptionError):
            return default

    def get_int(self, section, key, default=None):
        """Get configuration value as integer."""
        try:
            return self._config.getint(section, key)
        except (configparser.NoSectionError, configparser.NoOptionError, ValueError):
            return default

    def get_boolean(self, section, key, default=None):
        """Get configuration value as boolean."""
        try:
            return self._config.getboolean(section, key)
        except (configparser.NoSectionError, configparser.NoOptionError, ValueError):
            return default

    def set(self, section, key, value):
        """Set configuration value (in memory; call save() to persist)."""
        if not self._config.has_section(section):
            self._config.add_section(section)

        self._config.set(section, key, str(value))

    def get_db_url(self):
        """Get the SQLAlchemy database URL.

        PRODUCT_CATALOG_DATABASE_URL takes precedence over the settings file.
        """
        return os.getenv('PRODUCT_CATALOG_DATABASE_URL') or self.get(
            'DATABASE', 'url', DEFAULTS['DATABASE']['url']
        )

    @property
    def database_config(self):
        """Get database engine configuration."""
        return {
            'url': self.get_db_url(),
            'echo': self.get_boolean('DATABASE', 'echo', False),
            'pool_size': self.get_int('DATABASE', 'pool_size', 10),
            'max_overflow': self.get_int('DATABASE', 'max_overflow', 20),
            'pool_timeout': self.get_int('DATABASE', 'pool_timeout', 30),
            'pool_recycle': self.get_int('DATABASE', 'pool_recycle', 1800),
            'enforce_foreign_keys': self.get_boolean('DATABASE', 'enforce_foreign_keys', True)
        }

    @property
    def log_config(self):
        """Get logging configuration."""
        return {
            'level': self.get('LOGGING', 'level', 'INFO'),
            'format': self.get('LOGGING', 'format', '%(asctime)s - %(name)s - %(levelname)s - %(message)s'),
            'directory': self.get('LOGGING', 'directory', 'logs'),
            'max_size_mb': self.get_int('LOGGING', 'max_size_mb', 10),
            'backup_count': self.get_int('LOGGING', 'backup_count', 5),
            'console_output': self.get_boolean('LOGGING', 'console_output', True),
            'file_output': self.get_boolean('LOGGING', 'file_output', False)
        }

# Global config instance
config = Config()
