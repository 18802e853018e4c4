"""Quiz Attempt ORM - scored quiz submissions with client metadata.

Invariants:
    - id and created_at are generated by the store on insert
    - answers holds JSON text (see core/validation.serialize_answers), not a JSON column
    - ip and user_agent come from the request context, never from the body
    - Rows are append-only: never updated or deleted by the API

Design Decisions:
    - created_at uses a server default so the INSERT ... RETURNING statement
      reports the store's clock, not the app's
"""

from datetime import datetime

from sqlalchemy import DateTime, Float, Integer, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class QuizAttempt(Base):
    """A scored quiz submission."""
    __tablename__ = "quiz_attempts"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    user_email: Mapped[str | None] = mapped_column(Text, nullable=True)
    score: Mapped[float] = mapped_column(Float, nullable=False)
    total: Mapped[float] = mapped_column(Float, nullable=False)
    answers: Mapped[str | None] = mapped_column(Text, nullable=True)
    ip: Mapped[str | None] = mapped_column(Text, nullable=True)
    user_agent: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(),
    )
