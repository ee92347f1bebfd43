"""SQLAlchemy models for the expensetrack store."""

from sqlalchemy import Column, Integer, String, Float, create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sqlalchemy.pool import StaticPool

Base = declarative_base()

IN_MEMORY_URL = "sqlite://"


class Business(Base):
    """Business model."""

    __tablename__ = "businesses"

    # Autoincrement key keeps creation order independent of the string ID
    position = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String, unique=True, nullable=False)
    name = Column(String, nullable=False)


class Transaction(Base):
    """Transaction model.

    ``business_id`` is a soft reference: businesses are removed without a
    foreign key so the store can reset references itself.
    """

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True, autoincrement=False)
    date = Column(String, nullable=True)
    description = Column(String, nullable=True)
    # SQLite stores NaN as NULL
    amount = Column(Float, nullable=True)
    category = Column(String, nullable=False)
    card_member = Column(String, nullable=True)
    account_number = Column(String, nullable=True)
    business_id = Column(String, nullable=True)


def create_db_engine(database_url: str = IN_MEMORY_URL) -> Engine:
    """Create an engine and its tables.

    In-memory SQLite gets a static pool so every session sees the same
    connection, and therefore the same data, for the life of the engine.
    """
    if database_url == IN_MEMORY_URL:
        engine = create_engine(
            database_url,
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return engine


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory bound to engine."""
    return sessionmaker(bind=engine, expire_on_commit=False)
