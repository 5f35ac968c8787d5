"""
Domain Exceptions for the Estimate Cost Tree.

Custom exceptions enforcing business rules:
- Structure is read-only outside the standard WBS view
- Numeric inputs must be finite and non-negative
- Generated items must be usable
- Rollup invariants
"""


class DomainError(Exception):
    """Base exception for all domain errors."""

    def __init__(self, message: str, code: str = "DOMAIN_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)


# =============================================================================
# Structure Exceptions
# =============================================================================

class StructuralEditRejectedError(DomainError):
    """Raised when a structural edit is attempted in a regrouped view."""

    def __init__(self, operation: str, mode: str):
        message = (
            f"Cannot {operation}: structure is read-only in the {mode} view. "
            f"Switch to the standard WBS view to add or delete structure."
        )
        super().__init__(message, code="STRUCTURE_READ_ONLY")
        self.operation = operation
        self.mode = mode


# =============================================================================
# Ingestion Exceptions
# =============================================================================

class MalformedItemError(DomainError):
    """Raised (or collected) when a generated item descriptor is unusable."""

    def __init__(self, reason: str, descriptor: object = None):
        super().__init__(f"Unusable item descriptor: {reason}", code="MALFORMED_ITEM")
        self.reason = reason
        self.descriptor = descriptor


# =============================================================================
# Catalog Exceptions
# =============================================================================

class CatalogEntryNotFoundError(DomainError):
    """Raised when a rate catalog entry cannot be found."""

    def __init__(self, entry_id: str):
        message = f"Catalog entry with id '{entry_id}' not found"
        super().__init__(message, code="CATALOG_ENTRY_NOT_FOUND")
        self.entry_id = entry_id


class DuplicateCatalogEntryError(DomainError):
    """Raised when adding a catalog entry whose id is already taken."""

    def __init__(self, entry_id: str):
        message = f"Catalog entry with id '{entry_id}' already exists"
        super().__init__(message, code="DUPLICATE_CATALOG_ENTRY")
        self.entry_id = entry_id


# =============================================================================
# Collaborator Exceptions
# =============================================================================

class CollaboratorNotConfiguredError(DomainError):
    """Raised when an external collaborator is needed but was not injected."""

    def __init__(self, collaborator: str):
        message = f"No {collaborator} has been configured for this workspace"
        super().__init__(message, code="COLLABORATOR_NOT_CONFIGURED")
        self.collaborator = collaborator


# =============================================================================
# Validation Exceptions
# =============================================================================

class ValidationError(DomainError):
    """Raised when data validation fails."""

    def __init__(self, field: str, message: str):
        super().__init__(f"Validation failed for '{field}': {message}", code="VALIDATION_ERROR")
        self.field = field


class InvariantViolationError(DomainError):
    """Raised when a mathematical invariant is violated."""

    def __init__(self, invariant_name: str, expected: str, actual: str):
        message = (
            f"Invariant '{invariant_name}' violated. "
            f"Expected: {expected}, Actual: {actual}"
        )
        super().__init__(message, code="INVARIANT_VIOLATION")
        self.invariant_name = invariant_name
        self.expected = expected
        self.actual = actual
