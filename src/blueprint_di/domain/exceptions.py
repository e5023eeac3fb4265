from typing import Optional, Sequence


class BlueprintException(Exception):
    """Base exception for definition compilation errors."""


class ResolutionError(BlueprintException):
    """Raised when a specifier cannot be resolved to a concrete value or location.

    This occurs when:
    - A class specifier matches no module on any candidate search path.
    - A module location cannot be loaded.
    - An interpolated parameter is not set.

    Attributes:
        subject: The specifier, location or parameter name that failed.
        reason: Optional reason for the failure.
    """

    def __init__(self, subject: str, reason: Optional[str] = None) -> None:
        self.subject = subject
        self.reason = reason
        message = f"Cannot resolve '{subject}'"
        if reason:
            message += f". Reason: {reason}"
        super().__init__(message)


class MissingReferenceError(BlueprintException):
    """Raised when a service id is looked up but was never registered.

    Attributes:
        service_id: The requested service id.
    """

    def __init__(self, service_id: str) -> None:
        self.service_id = service_id
        super().__init__(f"Service '{service_id}' is not defined")


class DocumentError(BlueprintException):
    """Raised for unreadable or malformed service documents.

    This occurs when:
    - The document cannot be read or has an unsupported format.
    - The document does not match the expected raw shape.
    - A service record declares neither a class, a factory nor synthetic.
    """


class CircularImportError(DocumentError):
    """Raised when a document imports itself, directly or transitively.

    Attributes:
        import_chain: Locations involved in the cycle, first and last are equal.
    """

    def __init__(self, import_chain: Sequence[str]) -> None:
        self.import_chain = list(import_chain)
        super().__init__(f"Circular import detected: {' -> '.join(self.import_chain)}")
