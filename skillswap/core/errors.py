"""
Error taxonomy shared by every component.

Validation and authorization errors are raised before any write happens.
Storage errors carry the store's message verbatim. Routers never catch these
themselves; ``skillswap.main`` maps them to HTTP responses via ``status_code``.
"""


class SkillSwapError(Exception):
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(SkillSwapError):
    status_code = 400


class NotFoundError(SkillSwapError):
    status_code = 404


class AuthorizationError(SkillSwapError):
    status_code = 403


class AccountRestrictedError(AuthorizationError):
    """The acting user is suspended or banned."""


class TransitionRejected(SkillSwapError):
    status_code = 409


class StaleSessionError(TransitionRejected):
    """The session changed between read and write."""


class StorageError(SkillSwapError):
    status_code = 500
