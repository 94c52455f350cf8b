"""
JSON response helpers shared by all handlers.

Every error leaves the API in the same envelope:

    {"status": "Error", "error": "<message>"}

Handlers build the envelope with `general_error` or `validation_error` and
hand it to `write_json`, which produces the single response for the request.
"""

from dataclasses import dataclass
from typing import Any, Iterable, Literal

from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

STATUS_OK = "OK"
STATUS_ERROR = "Error"

# Failure tag reported when a field is absent or holds its zero value
TAG_REQUIRED = "required"


class ResponseEnvelope(BaseModel):
    """Uniform status/error wrapper used for error responses."""

    status: Literal["OK", "Error"] = Field(
        ...,
        description="Outcome of the request",
        examples=[STATUS_ERROR]
    )
    error: str = Field(
        "",
        description="Human-readable error message (empty when status is OK)",
        examples=["field Name is required field"]
    )


@dataclass(frozen=True)
class FieldError:
    """A single failed field constraint."""

    field: str
    tag: str


def write_json(status_code: int, data: Any) -> JSONResponse:
    """
    Serialize `data` into a JSON response with the given status code.

    Pydantic models are dumped (by alias) to plain dicts first. Serialization
    errors (TypeError/ValueError from the JSON encoder) propagate to the caller.
    """
    if isinstance(data, BaseModel):
        data = data.model_dump(by_alias=True)

    return JSONResponse(status_code=status_code, content=data)


def general_error(err: Exception) -> ResponseEnvelope:
    return ResponseEnvelope(status=STATUS_ERROR, error=str(err))


def validation_error(failures: Iterable[FieldError]) -> ResponseEnvelope:
    """
    Turn field failures into one readable message.

    "required" failures read "field <Name> is required field", anything else
    reads "field <Name> is invalid". Messages keep input order and are joined
    with ", ".
    """
    messages = []
    for failure in failures:
        if failure.tag == TAG_REQUIRED:
            messages.append(f"field {failure.field} is required field")
        else:
            messages.append(f"field {failure.field} is invalid")

    return ResponseEnvelope(status=STATUS_ERROR, error=", ".join(messages))
