from bson.errors import InvalidDocument
from pymongo.errors import PyMongoError

# Everything the driver can raise at a store call, including BSON encoding failures
STORE_ERRORS = (PyMongoError, InvalidDocument, OverflowError)


class MarketplaceError(Exception):
    """Base error for marketplace operations."""
    status_code = 500

    def __init__(self, message: str, error: object = None):
        super().__init__(message)
        self.message = message
        self.error = error


class InvalidInput(MarketplaceError):
    """Raised for missing required fields or malformed identifiers."""
    status_code = 400


class NotFound(MarketplaceError):
    """Raised when a well-formed identifier matches no record."""
    status_code = 404


class StoreUnavailable(MarketplaceError):
    """Raised when the document store call itself fails."""
    status_code = 500
