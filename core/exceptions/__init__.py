from core.exceptions.base import (
    BadRequestException,
    ConflictException,
    CustomException,
    NotFoundException,
)

__all__ = [
    "CustomException",
    "BadRequestException",
    "ConflictException",
    "NotFoundException",
]
