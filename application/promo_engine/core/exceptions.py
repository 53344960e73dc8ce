from promo_engine.core.constants import PromotionErrorCode


class PromotionEngineError(Exception):
    """Base error for order/promotion operations surrounding the engine."""

    error_code = PromotionErrorCode.INVALID_PROMOTION

    def __init__(self, message: str, error_code: str | None = None, details: dict | None = None):
        super().__init__(message)
        self.message = message
        if error_code:
            self.error_code = error_code
        self.details = details or {}

    def to_dict(self) -> dict:
        return {"error_code": self.error_code, "message": self.message, "details": self.details}


class OrderLineNotFoundError(PromotionEngineError):
    error_code = PromotionErrorCode.LINE_NOT_FOUND


class ManualDiscountError(PromotionEngineError):
    error_code = PromotionErrorCode.MANUAL_DISCOUNT_EXCEEDS_REMAINDER
