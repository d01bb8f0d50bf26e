from .payment import (
    AccountReference,
    Payment,
    PaymentStatus,
    PaymentTimelineEntry,
    PaymentType,
    TimelineEventType,
)
from .client import Client, ClientBrief, ClientCase, ClientCaseStatus
from .legal_entity import LegalEntity, LegalEntityClient
from .company import Company, CompanyMembership
from .contract import Contract
from .act import Act, ActStatus
from .dictionary import DictionaryEntry, DictionaryKind
from .user import (
    ADMIN_ROLE,
    DEFAULT_ROLES,
    PERMISSION_SECTIONS,
    USER_ROLE,
    Role,
    SectionPermission,
    User,
    normalize_email,
)
from .user_activity import ActivityStatus, UserActivityLog
from .installment import InstallmentItem, InstallmentPlan, InstallmentSchedule, RoundingMode
from .listing import (
    AccountQuery,
    ActQuery,
    ActivityQuery,
    CaseQuery,
    ClientQuery,
    CompanyQuery,
    ContractQuery,
    InvoiceQuery,
    Page,
    PageRequest,
    PaymentQuery,
    Sort,
)

__all__ = [
    "AccountReference",
    "Payment",
    "PaymentStatus",
    "PaymentType",
    "PaymentTimelineEntry",
    "TimelineEventType",
    "Client",
    "ClientBrief",
    "ClientCase",
    "ClientCaseStatus",
    "Company",
    "CompanyMembership",
    "LegalEntity",
    "LegalEntityClient",
    "Contract",
    "Act",
    "ActStatus",
    "DictionaryEntry",
    "DictionaryKind",
    "ADMIN_ROLE",
    "DEFAULT_ROLES",
    "PERMISSION_SECTIONS",
    "USER_ROLE",
    "Role",
    "SectionPermission",
    "User",
    "normalize_email",
    "ActivityStatus",
    "UserActivityLog",
    "InstallmentItem",
    "InstallmentPlan",
    "InstallmentSchedule",
    "RoundingMode",
    "AccountQuery",
    "ActQuery",
    "ActivityQuery",
    "CaseQuery",
    "ClientQuery",
    "CompanyQuery",
    "ContractQuery",
    "InvoiceQuery",
    "Page",
    "PageRequest",
    "PaymentQuery",
    "Sort",
]
