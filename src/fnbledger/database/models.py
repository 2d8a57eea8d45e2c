"""SQLAlchemy models for fnbledger database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    DateTime,
    Numeric,
    create_engine,
)
from sqlalchemy.orm import declarative_base, sessionmaker, Session

Base = declarative_base()


class DailyEntry(Base):
    """One day's entry; period payloads are kept as JSON text."""

    __tablename__ = "daily_entries"

    id = Column(String(10), primary_key=True)
    periods = Column(Text, nullable=False, default="{}")
    general_observations = Column(Text, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)
    last_modified_at = Column(
        DateTime,
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
        nullable=False,
    )


class Estorno(Base):
    """Reversal model."""

    __tablename__ = "estornos"

    # Insertion order is the list order the reconciler matches in
    seq = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String, unique=True, nullable=False)
    date = Column(String(10), nullable=False, index=True)
    category = Column(String, nullable=False, default="")
    reason = Column(String, nullable=False)
    uh = Column(String, nullable=True)
    nf = Column(String, nullable=True)
    quantity = Column(Numeric(12, 2), nullable=False, default=0)
    valor_total_nota = Column(Numeric(12, 2), nullable=False, default=0)
    valor_estorno = Column(Numeric(12, 2), nullable=False, default=0)
    observation = Column(Text, nullable=True)
    registered_by = Column(String, nullable=True)


class Setting(Base):
    """Key/value settings, values stored as JSON text."""

    __tablename__ = "settings"

    config_id = Column(String, primary_key=True)
    value = Column(Text, nullable=False)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
