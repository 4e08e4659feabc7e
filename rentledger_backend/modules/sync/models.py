"""Document store table for RentLedger."""

from typing import Any

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from ...database import Base, TimestampMixin


class AppDocument(TimestampMixin, Base):
    """One top-level collection, stored whole as a JSON document."""

    __tablename__ = "app_documents"

    name: Mapped[str] = mapped_column(String(64), primary_key=True)
    data: Mapped[Any] = mapped_column(JSON, nullable=False)

    def __repr__(self) -> str:
        return f"<AppDocument(name={self.name})>"
