"""SQLAlchemy ORM model for the Payment entity."""

import datetime as dt
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import JSON, Boolean, Date, DateTime, ForeignKey, Index, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.database.base import Base


class PaymentModel(Base):
    """ORM model: maps to the 'payments' table."""

    __tablename__ = "payments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    amount: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False)
    paid_amount: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False, default=0)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    initial_date: Mapped[dt.date | None] = mapped_column(Date, nullable=True)
    paid_date: Mapped[dt.date | None] = mapped_column(Date, nullable=True)
    last_payment_date: Mapped[dt.date | None] = mapped_column(Date, nullable=True)
    is_paid: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    type: Mapped[str] = mapped_column(String(20), nullable=False)
    description: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    notes: Mapped[str] = mapped_column(Text, nullable=False, default="")
    system_notes: Mapped[str] = mapped_column(Text, nullable=False, default="")
    reschedule_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    timeline: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    account: Mapped[str | None] = mapped_column(String(120), nullable=True)
    account_date: Mapped[dt.date | None] = mapped_column(Date, nullable=True)
    client_id: Mapped[int | None] = mapped_column(
        ForeignKey("clients.id", ondelete="SET NULL"), nullable=True
    )
    client_case_id: Mapped[int | None] = mapped_column(
        ForeignKey("client_cases.id", ondelete="SET NULL"), nullable=True
    )
    deal_type_id: Mapped[int | None] = mapped_column(
        ForeignKey("deal_types.id", ondelete="SET NULL"), nullable=True
    )
    income_type_id: Mapped[int | None] = mapped_column(
        ForeignKey("income_types.id", ondelete="SET NULL"), nullable=True
    )
    payment_source_id: Mapped[int | None] = mapped_column(
        ForeignKey("payment_sources.id", ondelete="SET NULL"), nullable=True
    )
    payment_status_id: Mapped[int | None] = mapped_column(
        ForeignKey("payment_statuses.id", ondelete="SET NULL"), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    __table_args__ = (
        Index("ix_payments_date", "date"),
        Index("ix_payments_client_date", "client_id", "date"),
        Index("ix_payments_case", "client_case_id"),
        Index("ix_payments_status_date", "status", "date"),
        Index("ix_payments_account", "account"),
        Index("ix_payments_account_date", "account_date"),
    )

    def __repr__(self) -> str:
        return f"<PaymentModel(id={self.id}, amount={self.amount}, status='{self.status}')>"
