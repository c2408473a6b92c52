"""Ownership-specific exceptions."""


class OwnershipValidationError(Exception):
    """Proposed ownership dates break the chain rules.

    Attributes:
        errors: Form field name -> message, one entry per offending field
    """

    def __init__(self, errors: dict[str, str]):
        self.errors = errors
        super().__init__("; ".join(f"{field}: {message}" for field, message in errors.items()))
