"""Common schemas and utilities shared across modules."""

from .schemas import BaseResponse

__all__ = [
    "BaseResponse",
]
