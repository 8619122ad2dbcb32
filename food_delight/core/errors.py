"""Error taxonomy shared by the services and the HTTP layer.

Services raise these; ``food_delight.api.error_handlers`` turns them into
``{"error": message}`` responses with the matching status code.
"""


class FoodDelightError(Exception):
    status_code = 400
    default_message = "Request failed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInput(FoodDelightError):
    default_message = "Invalid request data"


class DuplicateEmail(FoodDelightError):
    default_message = "Registration failed, email may already exist"


class CredentialError(FoodDelightError):
    """Login failures. Both subclasses share one public message."""

    default_message = "Invalid email or password"


class NotFound(CredentialError):
    pass


class BadCredentials(CredentialError):
    pass


class AuthFailure(FoodDelightError):
    status_code = 401
    default_message = "Invalid or expired token"


class MissingToken(AuthFailure):
    default_message = "No token provided"


class MalformedToken(AuthFailure):
    default_message = "Invalid token"


class ExpiredToken(AuthFailure):
    default_message = "Token has expired"


class EmptyCart(FoodDelightError):
    default_message = "Cart is empty"


class InvalidTotal(FoodDelightError):
    default_message = "Order total must be a finite, non-negative number"


class OwnerMissing(FoodDelightError):
    default_message = "User not found for order"


class SendFailure(FoodDelightError):
    # Reported as a degraded success by the order route.
    status_code = 502
    default_message = "Confirmation email could not be sent"


class StoreError(FoodDelightError):
    status_code = 500
    default_message = "Database error"
