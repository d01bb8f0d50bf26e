from .payment_repository import PaymentRepository
from .client_repository import CaseRepository, ClientRepository
from .company_repository import CompanyRepository
from .legal_entity_repository import LegalEntityRepository
from .contract_repository import ContractRepository
from .act_repository import ActRepository
from .dictionary_repository import DictionaryRepository
from .user_repository import RoleRepository, UserRepository
from .user_activity_repository import UserActivityRepository
from .security import PasswordHasher, TokenService

__all__ = [
    "PaymentRepository",
    "CaseRepository",
    "ClientRepository",
    "CompanyRepository",
    "LegalEntityRepository",
    "ContractRepository",
    "ActRepository",
    "DictionaryRepository",
    "RoleRepository",
    "UserRepository",
    "UserActivityRepository",
    "PasswordHasher",
    "TokenService",
]
