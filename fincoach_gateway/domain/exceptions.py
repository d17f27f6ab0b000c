"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class IncompleteProfileError(DomainException):
    """User profile lacks a field the requested calculation depends on"""

    pass
