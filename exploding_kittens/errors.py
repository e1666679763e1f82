"""Errors raised by the game handlers.

Only two kinds reach the client: precondition errors (400) and
store errors (500). Both are rendered as ``{"error": message}``.
"""

from fastapi import status


class GameError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class PreconditionError(GameError):
    """The game is not in a state that allows the operation."""

    status_code = status.HTTP_400_BAD_REQUEST


class StoreError(GameError):
    """Redis could not be reached or returned unusable data."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
