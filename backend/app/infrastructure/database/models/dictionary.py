"""SQLAlchemy ORM models for the lookup dictionaries.

The dictionaries share one column layout; each lives in its own table.
"""

from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.domain.entities import DictionaryKind
from app.infrastructure.database.base import Base


class _DictionaryColumns:
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    color_hex: Mapped[str] = mapped_column(String(9), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )


class DealTypeModel(_DictionaryColumns, Base):
    __tablename__ = "deal_types"


class IncomeTypeModel(_DictionaryColumns, Base):
    __tablename__ = "income_types"

    payment_type: Mapped[str] = mapped_column(String(20), nullable=False, default="Income")


class PaymentSourceModel(_DictionaryColumns, Base):
    __tablename__ = "payment_sources"

    payment_type: Mapped[str | None] = mapped_column(String(20), nullable=True)


class PaymentStatusModel(_DictionaryColumns, Base):
    __tablename__ = "payment_statuses"


class ClientStatusModel(_DictionaryColumns, Base):
    __tablename__ = "client_statuses"


DICTIONARY_MODELS: dict[DictionaryKind, type] = {
    DictionaryKind.DEAL_TYPES: DealTypeModel,
    DictionaryKind.INCOME_TYPES: IncomeTypeModel,
    DictionaryKind.PAYMENT_SOURCES: PaymentSourceModel,
    DictionaryKind.PAYMENT_STATUSES: PaymentStatusModel,
    DictionaryKind.CLIENT_STATUSES: ClientStatusModel,
}
