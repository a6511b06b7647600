"""
Typed errors shared by the inventory, ledger, pricing and business profile
services.

Every error carries a machine-readable ``code`` class attribute and keeps its
context as attributes, so HTTP handlers and callers can act on structure
instead of parsing messages:

    ServiceError (base)
    +-- ValidationError        bad input, no state change
    +-- NotFoundError          lookup miss
    +-- AlreadyExistsError     duplicate key on a create-only path
    +-- NotAuthorizedError     caller is not the record owner
    +-- DuplicateIdError       ledger transaction id reused
    +-- IntegrityError         snapshot index/table mismatch on restore
    +-- UpstreamServiceError   a collaborator call failed
"""


class ServiceError(Exception):
    """Base exception for all service errors."""

    code: str = "SERVICE_ERROR"

    def details(self) -> dict:
        """Structured fields rendered next to the error code."""
        return {}


class ValidationError(ServiceError):
    """A field failed validation."""

    code: str = "VALIDATION_ERROR"

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"Invalid {field}: {reason}")

    def details(self) -> dict:
        return {"field": self.field, "reason": self.reason}


class NotFoundError(ServiceError):
    """No record exists under the given key."""

    code: str = "NOT_FOUND"

    def __init__(self, key: str, kind: str = "record"):
        self.key = key
        self.kind = kind
        super().__init__(f"{kind.capitalize()} not found: {key}")

    def details(self) -> dict:
        return {"key": self.key, "kind": self.kind}


class AlreadyExistsError(ServiceError):
    """A record already exists under the given key."""

    code: str = "ALREADY_EXISTS"

    def __init__(self, key: str, kind: str = "record"):
        self.key = key
        self.kind = kind
        super().__init__(f"{kind.capitalize()} already exists: {key}")

    def details(self) -> dict:
        return {"key": self.key, "kind": self.kind}


class NotAuthorizedError(ServiceError):
    """The caller does not own the record it is trying to write."""

    code: str = "NOT_AUTHORIZED"

    def __init__(self, caller: str, owner: str):
        self.caller = caller
        self.owner = owner
        super().__init__(f"Caller {caller} is not authorized to act for {owner}")

    def details(self) -> dict:
        return {"caller": self.caller, "owner": self.owner}


class DuplicateIdError(ServiceError):
    """Transaction id was already recorded in the ledger."""

    code: str = "DUPLICATE_ID"

    def __init__(self, transaction_id: str):
        self.transaction_id = transaction_id
        super().__init__(f"Transaction ID already exists: {transaction_id}")

    def details(self) -> dict:
        return {"transaction_id": self.transaction_id}


class IntegrityError(ServiceError):
    """
    Restored state is internally inconsistent.

    Raised when a snapshot's barcode index does not match its item table.
    Fatal at startup: the service must not serve drifted data.
    """

    code: str = "INTEGRITY_ERROR"

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Snapshot integrity check failed: {reason}")

    def details(self) -> dict:
        return {"reason": self.reason}


class UpstreamServiceError(ServiceError):
    """A call to a collaborator service failed."""

    code: str = "UPSTREAM_ERROR"

    def __init__(self, service: str, reason: str, status_code: int | None = None):
        self.service = service
        self.reason = reason
        self.status_code = status_code
        super().__init__(f"{service} call failed: {reason}")

    def details(self) -> dict:
        return {"service": self.service, "reason": self.reason, "upstream_status": self.status_code}
