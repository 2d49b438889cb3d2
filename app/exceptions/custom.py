from typing import Any

FRAUD_CHECK_CODE = 2013
PAYMENT_PENDING_CODE = 2014


class ApiError(Exception):
    def __init__(self, message: str, status_code: int = 400):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class LiteAPIError(Exception):
    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        code: int | None = None,
        description: str | None = None,
        details: Any = None,
    ):
        self.message = message
        self.status_code = status_code
        self.code = code
        self.description = description
        self.details = details
        super().__init__(message)

    @property
    def is_fraud_check(self) -> bool:
        return self.code == FRAUD_CHECK_CODE or "fraud check" in self.message.lower()

    @property
    def is_payment_pending(self) -> bool:
        return (
            self.code == PAYMENT_PENDING_CODE
            or "payment not completed" in self.message.lower()
        )


class AmadeusError(Exception):
    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class OpenRouterError(Exception):
    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class SupabaseError(Exception):
    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class ItineraryParseError(Exception):
    def __init__(self, raw_text: str):
        self.raw_text = raw_text
        super().__init__("Failed to parse AI response")


class BookingInProgressError(Exception):
    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Booking already in progress ({key})")


class RateLimitError(Exception):
    def __init__(self, service: str):
        self.service = service
        super().__init__(f"Rate limit exceeded for {service}")
