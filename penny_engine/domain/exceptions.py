"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidInputError(DomainException):
    """Caller supplied a value outside the engine's valid range"""

    pass


class InvalidPriceError(InvalidInputError):
    """Estimated price is negative"""

    pass


class InvalidBudgetError(InvalidInputError):
    """Budget amounts are non-positive (monthly) or negative (category)"""

    pass


class InvalidTransactionDataError(DomainException):
    """Transaction data is malformed or invalid"""

    pass


class TransactionNotFoundError(DomainException):
    """No transaction with the given id exists in the ledger"""

    pass


class StateDeserializationError(DomainException):
    """Persisted session state could not be decoded"""

    pass
