"""Domain errors for lifecycle and settlement operations

All of these are local validation failures scoped to the single action
attempted. Service layers translate them into HTTP responses.
"""

from fastapi import HTTPException


class SettlementError(ValueError):
    code = "SETTLEMENT_ERROR"
    http_status = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_http(self) -> HTTPException:
        return HTTPException(
            status_code=self.http_status,
            detail={"code": self.code, "message": self.message},
        )


class MissingAttachmentError(SettlementError):
    code = "MISSING_ATTACHMENT"
    http_status = 400


class ActionBlockedError(SettlementError):
    code = "ACTION_BLOCKED"
    http_status = 409


class InvalidTransitionError(SettlementError):
    code = "INVALID_TRANSITION"
    http_status = 409


class PaymentRegressionError(SettlementError):
    code = "PAYMENT_REGRESSION"
    http_status = 409


class InvalidCredentialsError(SettlementError):
    code = "INVALID_CREDENTIALS"
    http_status = 400
