"""
Decoding and validation of create-student requests.

Two phases, each with its own failure type:

1. decode_student(): raw body -> StudentRequest. Any structural problem
   (empty body, invalid JSON, wrong JSON types) raises DecodeError.
2. validate_student(): checks the constraint table below and raises
   StudentValidationError listing EVERY failing field, in declaration order.

Within a single field only the first failing constraint is reported.
"""

import json
import logging
from typing import Any, Callable, List, Tuple

from email_validator import EmailNotValidError, validate_email
from pydantic import ValidationError

from students_api.schemas.students import StudentRequest
from students_api.utils.response import TAG_REQUIRED, FieldError

logger = logging.getLogger(__name__)

TAG_EMAIL = "email"
TAG_GREATER_THAN = "gt"


class DecodeError(Exception):
    """The request body could not be decoded into a StudentRequest."""


class EmptyBodyError(DecodeError):
    """The request body was empty."""

    def __init__(self) -> None:
        super().__init__("empty body")


class StudentValidationError(Exception):
    """One or more fields failed their constraints."""

    def __init__(self, failures: List[FieldError]) -> None:
        self.failures = failures
        super().__init__(", ".join(f"{f.field}:{f.tag}" for f in failures))


def _is_present(value: Any) -> bool:
    return value != "" and value != 0


def _is_email(value: str) -> bool:
    try:
        validate_email(value, check_deliverability=False, globally_deliverable=False)
    except EmailNotValidError:
        return False
    return True


def _is_positive(value: int) -> bool:
    return value > 0


Constraint = Tuple[str, Callable[[Any], bool]]

# (display name, attribute, ordered constraints)
STUDENT_CONSTRAINTS: List[Tuple[str, str, List[Constraint]]] = [
    ("Name", "name", [(TAG_REQUIRED, _is_present)]),
    ("Email", "email", [(TAG_REQUIRED, _is_present), (TAG_EMAIL, _is_email)]),
    ("Age", "age", [(TAG_REQUIRED, _is_present), (TAG_GREATER_THAN, _is_positive)]),
]


def _describe_shape_error(exc: ValidationError) -> str:
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first["loc"])
    if location:
        return f"cannot decode field {location}: {first['msg']}"
    return f"cannot decode request body: {first['msg']}"


def decode_student(raw: bytes) -> StudentRequest:
    """
    Decode a raw request body into a StudentRequest.

    Args:
        raw: Request body bytes as received

    Returns:
        StudentRequest with absent/null fields at their zero values

    Raises:
        EmptyBodyError: If the body is empty or whitespace only
        DecodeError: If the body is not valid JSON, not a JSON object,
                     or a field has the wrong JSON type
    """
    if not raw.strip():
        raise EmptyBodyError()

    try:
        payload = json.loads(raw)
    except ValueError as e:
        # JSONDecodeError and UnicodeDecodeError are both ValueErrors
        raise DecodeError(str(e)) from e

    try:
        return StudentRequest.model_validate(payload)
    except ValidationError as e:
        raise DecodeError(_describe_shape_error(e)) from e


def validate_student(student: StudentRequest) -> None:
    """
    Check every field of a decoded student against STUDENT_CONSTRAINTS.

    Raises:
        StudentValidationError: If any field fails; carries all failures
    """
    failures: List[FieldError] = []

    for display_name, attribute, constraints in STUDENT_CONSTRAINTS:
        value = getattr(student, attribute)
        for tag, check in constraints:
            if not check(value):
                failures.append(FieldError(field=display_name, tag=tag))
                break

    if failures:
        logger.debug(f"Student validation failed on {len(failures)} field(s)")
        raise StudentValidationError(failures)
