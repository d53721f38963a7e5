# =========================================================
# SALE ERRORS
#
# ValidationError         -> caller input malformed, nothing touched
# InsufficientStockError  -> business rule failed, nothing committed
# NotFoundError           -> product / sale id does not exist
# PersistenceError        -> storage failure, rolled back, safe to retry
# =========================================================


class SaleError(Exception):
    """Base class for every failure surfaced by the sale subsystem."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"detail": self.message, "error": type(self).__name__}


class ValidationError(SaleError):
    pass


class InsufficientStockError(SaleError):
    def __init__(self, product_id: int, requested: int, available: int | None = None):
        super().__init__(f"Insufficient stock for product {product_id}")
        self.product_id = product_id
        self.requested = requested
        self.available = available

    def to_dict(self) -> dict:
        data = super().to_dict()
        data.update(
            {
                "product_id": self.product_id,
                "requested": self.requested,
                "available": self.available,
            }
        )
        return data


class NotFoundError(SaleError):
    def __init__(self, kind: str, identifier: int):
        super().__init__(f"{kind.capitalize()} {identifier} not found")
        self.kind = kind
        self.identifier = identifier


class PersistenceError(SaleError):
    pass


class SaleTimeoutError(PersistenceError):
    pass
