class PortfolioError(Exception):
    """Base class for every failure the admin panel reports inline."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class AuthError(PortfolioError):
    status_code = 401


class StoreError(PortfolioError):
    """A call to the content store was rejected."""

    status_code = 502


class QueryError(StoreError):
    pass


class WriteError(StoreError):
    pass


class ValidationError(PortfolioError):
    """Rejected before any store call was made."""

    status_code = 400


class NotFound(PortfolioError):
    status_code = 404


class InvariantViolation(PortfolioError):
    status_code = 400


class ConfirmationRequired(PortfolioError):
    """A destructive action was requested without the operator confirming it."""

    status_code = 409
