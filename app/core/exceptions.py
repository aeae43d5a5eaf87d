# exceptions.py

class BusinessLogicException(Exception):
    """Base class for business-related exceptions."""
    def __init__(self, status_code: int, detail: str):
        self.status_code = status_code
        self.detail = detail
        super().__init__(self.detail)


class ValidationException(BusinessLogicException):
    """Malformed, missing or mismatched input. Raised before any write."""
    def __init__(self, detail: str):
        super().__init__(status_code=400, detail=detail)


class NotFoundException(BusinessLogicException):
    def __init__(self, detail: str):
        super().__init__(status_code=404, detail=detail)


class AmountMismatchException(ValidationException):
    def __init__(self, expected: str, received: str):
        self.expected = expected
        self.received = received
        super().__init__(
            detail=f"amount mismatch: expected {expected}, received {received}"
        )


class DatabaseException(Exception):
    """Base class for database-related exceptions."""
    def __init__(self, status_code: int, detail: str):
        self.status_code = status_code
        self.detail = detail
        super().__init__(self.detail)


class ExternalServiceException(Exception):
    """Base class for external service-related exceptions."""
    def __init__(self, detail: str, status_code: int = 500):
        self.status_code = status_code
        self.detail = detail
        super().__init__(self.detail)


class GatewayException(ExternalServiceException):
    """Razorpay call failed: transport error or non-2xx response.

    `message` is what the client sees, `detail` is the gateway diagnostic.
    """
    def __init__(self, detail: str, message: str = "Payment gateway request failed.", gateway_status: int | None = None):
        self.message = message
        self.gateway_status = gateway_status
        super().__init__(detail=detail, status_code=500)
