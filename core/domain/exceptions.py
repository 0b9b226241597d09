"""
Domain exceptions.

Domain exceptions represent business rule violations
and domain-specific error conditions.
"""


class DomainException(Exception):
    """Base exception for all domain exceptions."""

    def __init__(self, message: str, code: str = None):
        """
        Initialize domain exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class LicenseException(DomainException):
    """Base exception for license-related errors."""

    pass


class LicenseNotFoundError(LicenseException):
    """Raised when a license is not found."""

    def __init__(self, message: str = "License not found"):
        super().__init__(message, code="LICENSE_NOT_FOUND")


class LicenseRequestNotFoundError(LicenseException):
    """Raised when a license request is not found."""

    def __init__(self, message: str = "License request not found"):
        super().__init__(message, code="REQUEST_NOT_FOUND")


class DuplicateDomainError(LicenseException):
    """Raised when a domain already has a license or pending request."""

    def __init__(self, message: str = "Domain already has a license or pending request"):
        super().__init__(message, code="DUPLICATE_DOMAIN")


class CatalogException(DomainException):
    """Base exception for module catalog errors."""

    pass


class ModuleNotFoundError(CatalogException):  # noqa: A001
    """Raised when a module definition is not found."""

    def __init__(self, message: str = "Module not found"):
        super().__init__(message, code="MODULE_NOT_FOUND")


class DuplicateModuleError(CatalogException):
    """Raised when a module id is already taken."""

    def __init__(self, message: str = "Module ID already exists"):
        super().__init__(message, code="DUPLICATE_MODULE")


class SyncException(DomainException):
    """Base exception for admin action and sync errors."""

    pass


class InvalidSecretError(SyncException):
    """Raised when the shared admin secret does not match."""

    def __init__(self, message: str = "Invalid Secret"):
        super().__init__(message, code="INVALID_SECRET")


class UnknownActionError(SyncException):
    """Raised when an admin action name is not recognised."""

    def __init__(self, message: str = "Unknown action"):
        super().__init__(message, code="UNKNOWN_ACTION")


class SyncNotConfiguredError(SyncException):
    """Raised when sync is requested without a remote URL."""

    def __init__(self, message: str = "No remote API URL configured"):
        super().__init__(message, code="SYNC_NOT_CONFIGURED")


class RemoteStoreError(SyncException):
    """Raised when the remote store is unreachable or answers garbage."""

    def __init__(self, message: str = "Remote store request failed"):
        super().__init__(message, code="REMOTE_STORE_ERROR")
