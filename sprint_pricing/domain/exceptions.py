"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidPointsError(DomainException):
    """Point value is NaN or infinite"""

    pass


class SprintNotFoundError(DomainException):
    """Sprint draft does not exist"""

    pass


class DeliverableNotFoundError(DomainException):
    """Deliverable is missing, inactive, or not part of the sprint"""

    pass


class SprintNotEditableError(DomainException):
    """Sprint draft is no longer in draft status"""

    pass
