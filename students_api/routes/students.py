"""
Create-student API endpoint.

The endpoint is a validation gate: it decodes and validates the body and
answers, but stores nothing.

Endpoint flow:
- Step 1: Decode -> empty or malformed body answers 400 with a general error
- Step 2: Validate -> failing fields answer 400 listing every failing field
- Step 3: Respond -> 201 with {"Success": "ok"}

The body is read raw (not through a FastAPI body parameter) so that decode
and validation failures produce the API's own 400 envelope instead of
FastAPI's 422 response.
"""

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from students_api.schemas.students import StudentCreateResponse, StudentRequest
from students_api.services.student_service import (
    DecodeError,
    StudentValidationError,
    decode_student,
    validate_student,
)
from students_api.utils.logging import get_logger
from students_api.utils.response import (
    ResponseEnvelope,
    general_error,
    validation_error,
    write_json,
)

logger = get_logger(__name__)

router = APIRouter(prefix="/api/students", tags=["students"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Create student",
    description="""
    Validate a new student.

    This endpoint:
    - Decodes the JSON body (name, email, age)
    - Checks that name is non-empty, email is a valid address and age is positive
    - Reports every failing field in a single message
    - Does NOT persist anything
    """,
    responses={
        status.HTTP_201_CREATED: {"model": StudentCreateResponse},
        status.HTTP_400_BAD_REQUEST: {"model": ResponseEnvelope},
    },
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {
                "application/json": {"schema": StudentRequest.model_json_schema()}
            },
        }
    },
)
async def create_student(request: Request) -> JSONResponse:
    """
    Create a student (validation only).

    Returns exactly one response per request:
    - 400 + {"status": "Error", "error": "empty body"} for an empty body
    - 400 + {"status": "Error", "error": "<decode message>"} for malformed JSON
    - 400 + {"status": "Error", "error": "field X is ..., field Y is ..."} on validation failure
    - 201 + {"Success": "ok"} otherwise
    """
    logger.info("creating a student")

    raw = await request.body()

    try:
        student = decode_student(raw)
    except DecodeError as e:
        logger.info(f"Rejected create-student request: {e}")
        return write_json(status.HTTP_400_BAD_REQUEST, general_error(e))

    try:
        validate_student(student)
    except StudentValidationError as e:
        envelope = validation_error(e.failures)
        logger.info(f"Rejected create-student request: {envelope.error}")
        return write_json(status.HTTP_400_BAD_REQUEST, envelope)

    return write_json(status.HTTP_201_CREATED, StudentCreateResponse())
