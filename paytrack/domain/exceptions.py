"""Domain-specific exceptions"""

from typing import List


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class ValidationError(DomainException):
    """Biller fields are missing or invalid"""

    def __init__(self, messages: List[str] | str):
        if isinstance(messages, str):
            messages = [messages]
        self.messages = messages
        super().__init__(", ".join(messages))


class AlreadyPaidError(DomainException):
    """Biller already has a payment recorded for the month"""

    def __init__(self, month: int, year: int):
        self.month = month
        self.year = year
        super().__init__(f"Biller already marked as paid for {month}/{year}")


class NoSuchPaymentError(DomainException):
    """No payment recorded for the month"""

    def __init__(self, month: int, year: int):
        self.month = month
        self.year = year
        super().__init__(f"No payment record found for {month}/{year}")


class AuthenticationError(DomainException):
    """Credentials could not be verified"""

    pass


class IdentityProviderError(DomainException):
    """Federated identity provider returned an error or is unavailable"""

    pass
