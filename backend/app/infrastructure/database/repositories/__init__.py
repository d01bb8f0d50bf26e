from .payment_repository import SQLAlchemyPaymentRepository
from .client_repository import SQLAlchemyCaseRepository, SQLAlchemyClientRepository
from .company_repository import SQLAlchemyCompanyRepository
from .legal_entity_repository import SQLAlchemyLegalEntityRepository
from .contract_repository import SQLAlchemyContractRepository
from .act_repository import SQLAlchemyActRepository
from .dictionary_repository import SQLAlchemyDictionaryRepository
from .user_repository import SQLAlchemyRoleRepository, SQLAlchemyUserRepository
from .user_activity_repository import SQLAlchemyUserActivityRepository

__all__ = [
    "SQLAlchemyPaymentRepository",
    "SQLAlchemyCaseRepository",
    "SQLAlchemyClientRepository",
    "SQLAlchemyCompanyRepository",
    "SQLAlchemyLegalEntityRepository",
    "SQLAlchemyContractRepository",
    "SQLAlchemyActRepository",
    "SQLAlchemyDictionaryRepository",
    "SQLAlchemyRoleRepository",
    "SQLAlchemyUserRepository",
    "SQLAlchemyUserActivityRepository",
]
