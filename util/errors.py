# util/errors.py
from typing import Any
from fastapi import HTTPException, status
from util.enums import ErrorMessage


class AppError(HTTPException):
    # Flow: raise AppError to short-circuit with a typed status & message.
    def __init__(
        self, message: Any, http_status: int = status.HTTP_400_BAD_REQUEST
    ) -> None:
        super().__init__(status_code=http_status, detail=message)

    @classmethod
    def of(cls, error: ErrorMessage, **extra: Any) -> "AppError":
        """
        Build from a catalogued ErrorMessage. Extra fields turn the detail into
        an object: {"message": ..., **extra}.
        """
        info = error.value
        if extra:
            return cls({"message": info.message, **extra}, info.http_status)
        return cls(info.message, info.http_status)
