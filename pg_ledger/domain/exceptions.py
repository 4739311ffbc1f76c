"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidInputError(DomainException):
    """Payment input or billing period is malformed"""

    pass


class RecordNotFoundError(DomainException):
    """Resident or room does not exist in the record store"""

    pass


class ResidentLifecycleError(DomainException):
    """Resident status transition is not allowed in the current state"""

    pass
