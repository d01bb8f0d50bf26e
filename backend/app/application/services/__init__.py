from .payment_service import PaymentReferenceValidator, PaymentService
from .client_service import CaseService, ClientService
from .company_service import CompanyService
from .legal_entity_service import LegalEntityService
from .contract_service import ContractService
from .act_service import ActService
from .invoice_service import InvoiceService
from .dictionary_service import DictionaryService
from .stats_service import StatsService
from .installment_service import InstallmentService
from .auth_service import AuthService
from .user_service import UserService
from .role_service import RoleService
from .user_activity_service import UserActivityService
from .overdue_sweeper import OverdueSweeper

__all__ = [
    "PaymentReferenceValidator",
    "PaymentService",
    "CaseService",
    "ClientService",
    "CompanyService",
    "LegalEntityService",
    "ContractService",
    "ActService",
    "InvoiceService",
    "DictionaryService",
    "StatsService",
    "InstallmentService",
    "AuthService",
    "UserService",
    "RoleService",
    "UserActivityService",
    "OverdueSweeper",
]
