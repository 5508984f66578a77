"""Custom exceptions for the content notifier."""


class NotifierException(Exception):
    """Base exception for all notifier errors."""

    def __init__(self, message: str, details: dict | None = None) -> None:
        """Initialize exception with message and optional details.

        Args:
            message: Error message
            details: Additional error details
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationException(NotifierException):
    """Configuration error."""

    pass


class DocumentValidationException(NotifierException):
    """Changed document is missing fields required to build a notification."""

    def __init__(
        self,
        document_type: str,
        document_id: str | None,
        errors: list | None = None,
    ) -> None:
        """Initialize validation exception.

        Args:
            document_type: Kind of document being validated
            document_id: Document identifier, when known
            errors: Field errors reported by the document model
        """
        super().__init__(
            f"Malformed {document_type} document {document_id or '<unknown>'}",
            details={"document_type": document_type, "document_id": document_id, "errors": errors or []},
        )
        self.document_type = document_type
        self.document_id = document_id
        self.errors = errors or []


class ChangeFeedException(NotifierException):
    """Change feed message could not be decoded."""

    pass
