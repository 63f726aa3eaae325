"""
Domain errors raised by the service layer
"""


class StorefrontError(Exception):
    """Base error; status_code is what the API answers with"""
    status_code = 500

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message)
        self.message = message


class ValidationError(StorefrontError):
    status_code = 400


class AuthenticationError(StorefrontError):
    status_code = 401

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message)


class PermissionDeniedError(StorefrontError):
    status_code = 403


class NotFoundError(StorefrontError):
    status_code = 404


class ConflictError(StorefrontError):
    status_code = 409


class PaymentError(StorefrontError):
    """Payment confirmation could not be trusted"""
    status_code = 400


class ConfigurationError(StorefrontError):
    status_code = 500


class PaymentGatewayError(StorefrontError):
    """The payment vendor rejected or failed a call"""
    status_code = 502


class IdentityProviderError(StorefrontError):
    status_code = 401
