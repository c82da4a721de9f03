from typing import Dict


class CartError(Exception):
    pass


class OrderValidationError(Exception):
    """Raised before any write when the checkout form or the cart is invalid."""

    def __init__(self, errors: Dict[str, str]):
        self.errors = errors
        super().__init__("; ".join(f"{k}: {v}" for k, v in errors.items()))


class OrderPlacementError(Exception):
    pass


class FulfillmentError(Exception):
    pass


class NotFoundError(Exception):
    pass


class AuthorizationError(Exception):
    pass


class IdentityError(Exception):
    pass


class AdminOperationError(Exception):
    """Error reported by the admin-management API as {"error": message}."""

    def __init__(self, message: str, status_code: int = 400):
        self.message = message
        self.status_code = status_code
        super().__init__(message)
