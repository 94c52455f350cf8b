"""
Service layer for the Students API.

Holds the request decoding and field validation used by the routes.
"""

from .student_service import (
    DecodeError,
    EmptyBodyError,
    StudentValidationError,
    decode_student,
    validate_student,
)

__all__ = [
    "DecodeError",
    "EmptyBodyError",
    "StudentValidationError",
    "decode_student",
    "validate_student",
]
