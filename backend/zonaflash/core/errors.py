"""
Error taxonomy for nearby search, hunt submission and the reward ledger.

Every error carries the HTTP status it maps to and a stable ``code`` so
callers can tell which step failed.
"""


class ZonaFlashError(Exception):
    """Base exception for domain errors"""
    status_code = 500
    code = "Internal"

    def __init__(self, message: str = ""):
        super().__init__(message or self.__class__.__doc__ or self.code)
        self.message = message or (self.__class__.__doc__ or self.code)


class InvalidQuery(ZonaFlashError):
    """Malformed or missing input"""
    status_code = 400
    code = "InvalidQuery"


class Forbidden(ZonaFlashError):
    """User is not allowed to perform this action"""
    status_code = 403
    code = "Forbidden"


class InvalidCategory(ZonaFlashError):
    """Category is not in the allowed set"""
    status_code = 400
    code = "InvalidCategory"


class Conflict(ZonaFlashError):
    """A point of the same category already exists nearby"""
    status_code = 409
    code = "Conflict"


class WalletNotFound(ZonaFlashError):
    """Wallet not found"""
    status_code = 404
    code = "WalletNotFound"


class InsufficientBalance(ZonaFlashError):
    """Balance is below the redemption goal"""
    status_code = 400
    code = "InsufficientBalance"


class StoreUnavailable(ZonaFlashError):
    """Spatial store could not be queried"""
    status_code = 503
    code = "StoreUnavailable"


class PersistenceFailure(ZonaFlashError):
    """Submission could not be persisted"""
    status_code = 500
    code = "PersistenceFailure"


class MediaUploadFailure(ZonaFlashError):
    """Photo upload failed (absorbed by the hunt orchestrator)"""
    status_code = 502
    code = "MediaUploadFailure"
