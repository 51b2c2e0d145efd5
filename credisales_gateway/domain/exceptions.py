"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidContractTermsError(DomainException):
    """Contract terms would make the schedule generator misbehave"""

    pass


class BackendAPIError(DomainException):
    """Backend API returned an error or is unavailable"""

    pass


class ContractNotFoundError(DomainException):
    """Backend has no contract with the requested id"""

    pass
