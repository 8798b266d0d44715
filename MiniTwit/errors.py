from __future__ import annotations


class MiniTwitError(Exception):
    """Base error carrying the HTTP status and the message shown to clients."""

    status_code: int = 400

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_payload(self) -> dict:
        return {"status": self.status_code, "error_msg": self.message}


class ValidationError(MiniTwitError):
    status_code = 400


class NotFound(MiniTwitError):
    status_code = 404


class Conflict(MiniTwitError):
    status_code = 400


class StorageFailure(MiniTwitError):
    status_code = 500

    def __init__(self, message: str = "Internal storage failure") -> None:
        super().__init__(message)
