import uuid
from typing import Iterable, List

from sqlalchemy import Column, String, Text, create_engine, delete, func, select, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker

from .data_models import StoredURL
from .errors import EmptyStoreError, PersistenceError, StoreInitError
from .settings import logger, DEBUG_LOGGING

Base = declarative_base()


class URLRecord(Base):
    __tablename__ = "urls"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    url = Column(Text, nullable=False)


class URLStore:
    def __init__(self, engine: Engine):
        self.engine = engine
        self.Session = sessionmaker(bind=engine, expire_on_commit=False)

    def ping(self):
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            logger.error(f"Unable to connect to the database: {str(e)}")
            raise PersistenceError(f"Unable to connect to the database: {e}") from e

    def init_schema(self):
        try:
            Base.metadata.create_all(self.engine)
            logger.info("Database schema set up successfully")
        except SQLAlchemyError as e:
            logger.error(f"Error setting up database schema: {str(e)}")
            raise PersistenceError(f"Error setting up database schema: {e}") from e

    def add(self, url: str) -> StoredURL:
        record = URLRecord(id=str(uuid.uuid4()), url=url)
        try:
            with self.Session.begin() as session:
                session.add(record)
        except SQLAlchemyError as e:
            logger.error(f"Error adding URL to database: {str(e)}")
            raise PersistenceError("Error adding URL to database") from e

        logger.info(f"Stored URL {record.id}")
        if DEBUG_LOGGING:
            logger.debug(f"  url: {url}")
        return StoredURL(id=record.id, url=record.url)

    def add_many(self, urls: Iterable[str]) -> List[StoredURL]:
        """
        Insert every URL in a single transaction. Either all rows land or none do.
        """
        records = [URLRecord(id=str(uuid.uuid4()), url=u) for u in urls]
        if not records:
            return []

        try:
            with self.Session.begin() as session:
                session.add_all(records)
        except SQLAlchemyError as e:
            logger.error(f"Error adding {len(records)} URLs to database: {str(e)}")
            raise PersistenceError("Error adding URLs to database") from e

        logger.info(f"Stored {len(records)} URLs")
        return [StoredURL(id=r.id, url=r.url) for r in records]

    def list_all(self) -> List[StoredURL]:
        try:
            with self.Session() as session:
                rows = session.execute(select(URLRecord.id, URLRecord.url)).all()
        except SQLAlchemyError as e:
            logger.error(f"Error retrieving URLs from database: {str(e)}")
            raise PersistenceError("Error retrieving URLs from database") from e

        logger.debug(f"Listed {len(rows)} URLs")
        return [StoredURL(id=row.id, url=row.url) for row in rows]

    def clear_all(self) -> int:
        try:
            with self.Session.begin() as session:
                result = session.execute(delete(URLRecord))
        except SQLAlchemyError as e:
            logger.error(f"Error clearing URLs: {str(e)}")
            raise PersistenceError("Error clearing URLs from database") from e

        logger.info(f"Cleared {result.rowcount} URLs")
        return result.rowcount

    def pick_random(self) -> str:
        # One statement, so concurrent writers cannot shift the pick between
        # a count and an offset fetch.
        query = select(URLRecord.url).order_by(func.random()).limit(1)
        try:
            with self.Session() as session:
                url = session.execute(query).scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"Error retrieving random URL: {str(e)}")
            raise PersistenceError(f"error retrieving random URL: {e}") from e

        if url is None:
            raise EmptyStoreError("no URLs found in the database")

        logger.debug(f"Picked URL: {url}")
        return url


def init_store(database_url: str) -> URLStore:
    """
    Open the database, check it answers and make sure the urls table exists.

    Raises StoreInitError instead of exiting so callers decide how to fail.
    """
    logger.info("Connecting to the database")
    try:
        engine = create_engine(database_url, pool_pre_ping=True)
    except (SQLAlchemyError, ImportError, ValueError) as e:
        logger.error(f"Error opening database: {str(e)}")
        raise StoreInitError(f"Error opening database: {e}") from e

    store = URLStore(engine)
    try:
        store.ping()
        logger.info("Connected to the database")
        store.init_schema()
    except PersistenceError as e:
        engine.dispose()
        raise StoreInitError(str(e)) from e

    return store
