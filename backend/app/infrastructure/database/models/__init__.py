from .payment import PaymentModel
from .client import ClientCaseModel, ClientModel
from .legal_entity import LegalEntityModel
from .company import CompanyClientModel, CompanyModel
from .contract import ClientContractModel, ContractModel
from .act import ActModel
from .dictionary import (
    DICTIONARY_MODELS,
    ClientStatusModel,
    DealTypeModel,
    IncomeTypeModel,
    PaymentSourceModel,
    PaymentStatusModel,
)
from .user import RoleModel, RolePermissionModel, UserModel
from .user_activity import UserActivityLogModel

__all__ = [
    "PaymentModel",
    "ClientCaseModel",
    "ClientModel",
    "LegalEntityModel",
    "CompanyClientModel",
    "CompanyModel",
    "ClientContractModel",
    "ContractModel",
    "ActModel",
    "DICTIONARY_MODELS",
    "ClientStatusModel",
    "DealTypeModel",
    "IncomeTypeModel",
    "PaymentSourceModel",
    "PaymentStatusModel",
    "RoleModel",
    "RolePermissionModel",
    "UserModel",
    "UserActivityLogModel",
]
