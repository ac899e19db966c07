"""Domain-specific exceptions — framework-independent."""


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


class PersistenceError(Exception):
    """Raised when the backing store fails to complete an operation.

    The original driver exception is chained as ``__cause__`` and is only
    ever logged server-side.
    """

    def __init__(self, operation: str, detail: str = ""):
        self.operation = operation
        self.detail = detail
        super().__init__(f"Persistence failure during {operation}")


class AuthenticationError(Exception):
    """Raised when login credentials are rejected."""

    def __init__(self, message: str = "Invalid email or password."):
        super().__init__(message)


class LoginLockedError(Exception):
    """Raised when an identifier has exceeded its failed-login budget."""

    def __init__(self, remaining_seconds: int):
        self.remaining_seconds = remaining_seconds
        minutes = max(1, -(-remaining_seconds // 60))
        super().__init__(f"Too many failed attempts. Try again in {minutes} minutes.")
