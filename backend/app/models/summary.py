"""
NoteShare Backend — Summary Model
===================================

What:  ORM model for the summarizer's `summaries` table.
Lifecycle: inserted once after a successful completion call; never updated
or deleted (append-only).
"""

from datetime import datetime

from sqlalchemy import Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base, UTCDateTime
from app.models.account import utcnow


class Summary(Base):
    __tablename__ = "summaries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    input_text: Mapped[str] = mapped_column(Text, nullable=False)
    summary: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        nullable=False,
        default=utcnow,
    )

    # Recent-first listing
    __table_args__ = (
        Index("idx_summaries_created_at", created_at.desc()),
    )

    def __repr__(self) -> str:
        return f"<Summary(id={self.id}, created_at='{self.created_at}')>"
