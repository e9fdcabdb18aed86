"""Base domain exception."""


class DomainException(Exception):
    """
    Base exception for all domain-level errors.

    Carries a stable machine-readable ``code`` next to the human message
    so both front ends can map it without string matching.
    """

    def __init__(self, message: str, code: str = "DOMAIN_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)
