"""Domain Exceptions"""
from domain.enums import ErrorCode


class ReservationError(Exception):
    """Base class for recoverable booking failures"""
    code: ErrorCode = ErrorCode.VALIDATION_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ReservationError):
    """Malformed request: bad date range, unknown category, illegal transition"""
    code = ErrorCode.VALIDATION_ERROR


class ConflictError(ReservationError):
    """Room is already booked for part of the requested range"""
    code = ErrorCode.CONFLICT


class PaymentError(ReservationError):
    """Payment gateway declined, failed or timed out"""
    code = ErrorCode.PAYMENT_FAILED


class NotFoundError(ReservationError):
    code = ErrorCode.NOT_FOUND


class DuplicateError(ReservationError):
    code = ErrorCode.DUPLICATE
