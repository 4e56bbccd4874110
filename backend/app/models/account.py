"""
NoteShare Backend — Account Model
===================================

What:  ORM model for the `accounts` table.
Who:   Written once at signup by AccountService; read for existence checks
       and listings. Immutable after creation.

The password digest is stored here and never leaves the storage layer:
response schemas do not declare the column.
"""

from datetime import datetime, timezone

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base, UTCDateTime


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Account(Base):
    __tablename__ = "accounts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        nullable=False,
        default=utcnow,
    )

    def __repr__(self) -> str:
        return f"<Account(id={self.id}, email='{self.email}')>"
