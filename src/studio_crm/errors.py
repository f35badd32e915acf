"""Error taxonomy shared by services, adapters and tools."""


class CrmError(Exception):
    """Base class for failures reported back to the tool caller."""

    kind = "internal"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(CrmError):
    """Input was missing, malformed or violated a business rule."""

    kind = "validation"

    def __init__(self, field: str, constraint: str) -> None:
        super().__init__(f"{field}: {constraint}")
        self.field = field
        self.constraint = constraint


class NotFoundError(CrmError):
    """The targeted row does not exist."""

    kind = "not_found"


class StorageError(CrmError):
    """The database rejected the statement or could not be reached."""

    kind = "storage"


class UpstreamError(CrmError):
    """An external service failed or returned an unusable reply."""

    kind = "upstream"


class ToolConfigurationError(Exception):
    """Raised at startup when the tool table is inconsistent."""
