"""Errors raised by store and auth operations."""


class PixelQuestError(Exception):
    """Base class for recoverable, per-request failures."""


class UnauthenticatedError(PixelQuestError):
    """No valid session accompanies the request."""


class InvalidCredentialsError(PixelQuestError):
    """Sign-in or sign-up was rejected."""


class NotFoundError(PixelQuestError):
    """The target record does not exist for the caller."""


class InvalidInputError(PixelQuestError):
    """Request data violates a record constraint."""
