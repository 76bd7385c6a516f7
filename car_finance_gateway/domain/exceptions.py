"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class ValidationError(DomainException):
    """Candidate application violates a schema rule"""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class DuplicateIdError(DomainException):
    """An application with the same identifier is already stored"""

    def __init__(self, application_id: str):
        super().__init__(f"Application with ID {application_id} already exists")
        self.application_id = application_id


class StorageUnavailableError(DomainException):
    """Backing medium could not be read or written"""

    pass
