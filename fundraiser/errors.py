class FundraiserError(Exception):
    """Base for every failure the fundraiser core reports to its caller."""

    status = 400

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class ValidationError(FundraiserError):
    """Missing or malformed input; nothing was written."""

    status = 400


class AuthError(FundraiserError):
    """Passphrase or PIN check failed. `reason` is 'mismatch' or 'no_pin'."""

    status = 403

    def __init__(self, message: str = "", reason: str = "mismatch"):
        super().__init__(message)
        self.reason = reason


class NotFoundError(FundraiserError):
    status = 404


class ConflictError(FundraiserError):
    """The calendar date already has a live claim."""

    status = 409


class StoreIOError(FundraiserError):
    """The database call failed; the operation was abandoned."""

    status = 503
