from __future__ import annotations


class PrNoteError(Exception):
    """Base class for every error prnote reports to the user."""


class NetworkError(PrNoteError):
    pass


class AuthError(PrNoteError):
    pass


class ApiError(PrNoteError):
    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class UpsertError(ApiError):
    pass


class RenderError(PrNoteError):
    pass
