from .common import CamelModel, PageResponse
from .payment import AccountReferenceResponse, PaymentResponse, PaymentWrite, TimelineEntryResponse
from .client import (
    CaseDetailResponse,
    CaseResponse,
    CaseWrite,
    ClientDetailResponse,
    ClientResponse,
    ClientStatsResponse,
    ClientWrite,
)
from .company import CompanyMemberWrite, CompanyResponse, CompanyWrite
from .legal_entity import LegalEntityClientResponse, LegalEntityResponse, LegalEntityWrite
from .contract import ContractClientResponse, ContractResponse, ContractWrite
from .act import ActResponse, ActSummaryResponse, ActWrite, ResponsibleResponse
from .invoice import InvoiceResponse, InvoiceSummaryResponse, InvoiceWrite
from .dictionary import DictionaryResponse, DictionaryWrite, ToggleActiveResponse
from .installment import InstallmentRequest, InstallmentResponse
from .stats import MonthsResponse, SummaryResponse
from .auth import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RolePermissionsResponse,
    RolePermissionsUpdate,
    RoleResponse,
    RoleWrite,
    SectionPermissionSchema,
    UserCreate,
    UserResponse,
    UserUpdate,
)
from .user_activity import ActivityCreate, ActivityFiltersResponse, ActivityResponse

__all__ = [
    "CamelModel",
    "PageResponse",
    "AccountReferenceResponse",
    "PaymentResponse",
    "PaymentWrite",
    "TimelineEntryResponse",
    "CaseDetailResponse",
    "CaseResponse",
    "CaseWrite",
    "ClientDetailResponse",
    "ClientResponse",
    "ClientStatsResponse",
    "ClientWrite",
    "CompanyMemberWrite",
    "CompanyResponse",
    "CompanyWrite",
    "LegalEntityClientResponse",
    "LegalEntityResponse",
    "LegalEntityWrite",
    "ContractClientResponse",
    "ContractResponse",
    "ContractWrite",
    "ActResponse",
    "ActSummaryResponse",
    "ActWrite",
    "ResponsibleResponse",
    "InvoiceResponse",
    "InvoiceSummaryResponse",
    "InvoiceWrite",
    "DictionaryResponse",
    "DictionaryWrite",
    "ToggleActiveResponse",
    "InstallmentRequest",
    "InstallmentResponse",
    "MonthsResponse",
    "SummaryResponse",
    "LoginRequest",
    "LoginResponse",
    "RegisterRequest",
    "RolePermissionsResponse",
    "RolePermissionsUpdate",
    "RoleResponse",
    "RoleWrite",
    "SectionPermissionSchema",
    "UserCreate",
    "UserResponse",
    "UserUpdate",
    "ActivityCreate",
    "ActivityFiltersResponse",
    "ActivityResponse",
]
