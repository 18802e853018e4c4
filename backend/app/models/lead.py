"""Lead ORM - contact-form submissions.

Invariants:
    - id is an integer primary key generated by the store
    - name and email are non-nullable text; message is optional
    - Rows are append-only: never updated or deleted by the API
"""

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class Lead(Base):
    """A contact-form submission."""
    __tablename__ = "leads"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[str] = mapped_column(Text, nullable=False)
    message: Mapped[str | None] = mapped_column(Text, nullable=True)
