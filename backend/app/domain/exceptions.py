"""Domain-specific exceptions: framework-independent."""


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class DuplicateEntityError(Exception):
    """Raised when attempting to create a duplicate entity."""

    def __init__(self, entity_type: str, field: str, value: str):
        self.entity_type = entity_type
        self.field = field
        self.value = value
        super().__init__(f"{entity_type} with {field}='{value}' already exists")


class InvalidReferenceError(Exception):
    """Raised when a request references an unknown or incompatible entity.

    Covers unknown dictionary/client/role ids and payment-type mismatches.
    Maps to HTTP 400 at the API boundary.
    """


class AuthenticationError(Exception):
    """Raised when a login attempt is refused.

    ``code`` is one of ``InvalidCredentials``, ``UserInactive`` or
    ``PendingApproval``; the web client branches on it.
    """

    INVALID_CREDENTIALS = "InvalidCredentials"
    USER_INACTIVE = "UserInactive"
    PENDING_APPROVAL = "PendingApproval"

    def __init__(self, code: str, message: str):
        self.code = code
        self.message = message
        super().__init__(f"{code}: {message}")


class RegistrationError(Exception):
    """Raised when self-registration is refused."""


class PermissionDeniedError(Exception):
    """Raised when the caller lacks the role required for an operation."""
