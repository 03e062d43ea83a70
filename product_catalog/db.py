from contextlib import contextmanager
import logging

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker, scoped_session

from product_catalog.config import config
from product_catalog.exceptions import DatabaseError

logger = logging.getLogger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """Database connection manager for the Product Catalog."""

    _instance = None

    def __new__(cls):
        """Singleton pattern implementation."""
        if cls._instance is None:
            cls._instance = super(Database, cls).__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        """Initialize the database connection if not already initialized."""
        if self._initialized:
            return

        self._engine = None
        self._session_factory = None
        self._session = None
        self._initialized = True

    def initialize(self, connection_string=None):
        """Initialize database connection.

        Calling it again disposes of the previous engine and starts over.

        Args:
            connection_string: Optional database connection string.
                              If not provided, will use configuration.
        """
        db_config = config.database_config
        if connection_string is None:
            connection_string = db_config['url']

        self.dispose()

        url = make_url(connection_string)
        engine_kwargs = {'echo': db_config['echo']}

        if url.get_backend_name() != 'sqlite':
            engine_kwargs.update(
                pool_size=db_config['pool_size'],
                max_overflow=db_config['max_overflow'],
                pool_timeout=db_config['pool_timeout'],
                pool_recycle=db_config['pool_recycle'],
                pool_pre_ping=True
            )

        logger.info(f"Initializing database engine for backend: {url.get_backend_name()}")
        self._engine = create_engine(connection_string, **engine_kwargs)

        if url.get_backend_name() == 'sqlite' and db_config['enforce_foreign_keys']:
            event.listen(self._engine, 'connect', _enable_sqlite_foreign_keys)

        self._session_factory = sessionmaker(bind=self._engine)
        self._session = scoped_session(self._session_factory)

    def dispose(self):
        """Release the current engine and any thread-local session."""
        if self._session is not None:
            self._session.remove()
            self._session = None
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
        self._session_factory = None

    def create_all_tables(self):
        """Create all tables defined in the models."""
        from product_catalog.models import Base
        Base.metadata.create_all(self.engine)

    def drop_all_tables(self):
        """Drop all tables from the database."""
        from product_catalog.models import Base
        Base.metadata.drop_all(self.engine)

    @property
    def session(self):
        """Get the thread-local session registry."""
        if self._session is None:
            self.initialize()
        return self._session

    @property
    def engine(self):
        """Get the database engine."""
        if self._engine is None:
            self.initialize()
        return self._engine

    @contextmanager
    def session_scope(self):
        """Provide a transactional scope around a series of operations."""
        session = self.session()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def health_check(self):
        """Check that the database answers a trivial query.

        Raises:
            DatabaseError: if the database cannot be reached
        """
        try:
            with self.engine.connect() as connection:
                connection.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            logger.error(f"Database health check failed: {e}")
            raise DatabaseError(f"Database health check failed: {e}")
        return True


# Global database instance
db = Database()


@contextmanager
def session_scope():
    """Session scope context manager."""
    with db.session_scope() as session:
        yield session
