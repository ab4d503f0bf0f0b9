"""Application domain specific exceptions."""


class ApplicationError(Exception):
    """Base class for application errors."""


class ApplicationNotFoundError(ApplicationError):
    """Raised when an application does not exist or is not visible to the caller."""


class ReferenceAllocationError(ApplicationError):
    """Raised when no unique reference number could be found within the attempt budget."""

    def __init__(self, attempts: int) -> None:
        self.attempts = attempts
        super().__init__(f"No unique reference number after {attempts} attempts")
