class BillShareError(Exception):
    """Base exception for bill formatting and export errors."""

    pass


class RasterizationError(BillShareError):
    """Raised when a bill cannot be rendered or saved as a paginated document."""

    USER_MESSAGE = "Failed to generate PDF. Please try again."

    def __init__(self, filename: str | None = None) -> None:
        self.filename: str | None = filename
        super().__init__(self.USER_MESSAGE)


class InvalidPhoneNumberError(BillShareError, ValueError):
    """Raised when a phone number cannot be classified by its digit count."""

    def __init__(self, raw: str, digits: str) -> None:
        self.raw: str = raw
        self.digits: str = digits
        super().__init__(f"Invalid phone number format: '{raw}'")
