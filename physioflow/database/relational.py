"""
Relational store: therapists and sign-in accounts

SQLAlchemy engine + declarative models. SQLite by default, any SQLAlchemy
URL works (e.g. postgresql+psycopg://...).
"""
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from sqlalchemy import CheckConstraint, DateTime, String, Text, create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, sessionmaker


class Base(DeclarativeBase):
    pass


def _uuid() -> str:
    return str(uuid.uuid4())


def _now() -> datetime:
    return datetime.now(timezone.utc)


class TherapistRow(Base):
    __tablename__ = "therapists"
    __table_args__ = (
        CheckConstraint("permission in ('therapist','admin')", name="ck_therapists_permission"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    firstname: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    lastname: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    # Compared case-sensitively against the signed-in account email
    email: Mapped[str] = mapped_column(String, nullable=False, index=True)
    clinic: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    permission: Mapped[str] = mapped_column(String, nullable=False, default="therapist")
    createdat: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_now)


class AccountRow(Base):
    __tablename__ = "accounts"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    email: Mapped[str] = mapped_column(String, unique=True, nullable=False, index=True)
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_now)


def make_engine(database_url: str) -> Engine:
    """
    Create the engine and make sure the tables exist
    """
    url = make_url(database_url)
    connect_args = {}
    if url.get_backend_name() == "sqlite":
        connect_args["check_same_thread"] = False
        if url.database and url.database != ":memory:":
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)
    engine = create_engine(database_url, connect_args=connect_args, pool_pre_ping=True)
    Base.metadata.create_all(engine)
    return engine


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, expire_on_commit=False)
