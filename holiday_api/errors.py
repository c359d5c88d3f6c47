"""
Error kinds raised by the service layer and turned into JSON responses in main.py.
"""


class HolidayAPIError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInput(HolidayAPIError):
    """Missing or malformed fields, bad date format, out-of-range year."""
    status_code = 400


class NotFound(HolidayAPIError):
    status_code = 404


class StoreError(HolidayAPIError):
    """Underlying persistence failure."""
    status_code = 500


UNHANDLED_ERROR_MESSAGE = "An error occurred processing your request"
