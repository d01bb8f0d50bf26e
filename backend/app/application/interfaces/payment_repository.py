"""Abstract repository interface (port) for Payment persistence."""

from abc import ABC, abstractmethod
from datetime import date

from app.domain.entities import (
    AccountQuery,
    AccountReference,
    InvoiceQuery,
    Page,
    PageRequest,
    Payment,
    PaymentQuery,
)


class PaymentRepository(ABC):
    """Port for payment persistence: implemented in the infrastructure layer."""

    @abstractmethod
    async def get_by_id(self, payment_id: int) -> Payment | None:
        ...

    @abstractmethod
    async def search(
        self, query: PaymentQuery, page: PageRequest | None = None
    ) -> Page[Payment]:
        """Filtered, sorted payments; unpaginated when ``page`` is None."""
        ...

    @abstractmethod
    async def list_invoices(
        self, query: InvoiceQuery, page: PageRequest | None = None
    ) -> Page[Payment]:
        """Payments carrying an invoice (account) number."""
        ...

    @abstractmethod
    async def create(self, payment: Payment) -> Payment:
        ...

    @abstractmethod
    async def update(self, payment: Payment) -> Payment:
        ...

    @abstractmethod
    async def delete(self, payment_id: int) -> bool:
        ...

    @abstractmethod
    async def detach_client(self, client_id: int) -> int:
        """Null client and case references on the client's payments."""
        ...

    @abstractmethod
    async def detach_case(self, case_id: int) -> int:
        """Null the case reference on the case's payments."""
        ...

    @abstractmethod
    async def mark_overdue(self, today: date, payment_status_id: int | None = None) -> int:
        """Flip unpaid, past-due Pending payments to Overdue. Returns the row count."""
        ...

    @abstractmethod
    async def list_accounts(self, query: AccountQuery) -> list[str]:
        """Distinct invoice numbers, most used first."""
        ...

    @abstractmethod
    async def list_account_references(
        self, query: AccountQuery, *, distinct: bool = False
    ) -> list[AccountReference]:
        """Invoice numbers with their dates, newest first."""
        ...
