"""
Pydantic schemas for the create-student endpoint.

StudentRequest only describes the SHAPE of the body. Field constraints
(required, e-mail format, positive age) are checked afterwards by
students_api.services.student_service so that every failing field can be
reported at once.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


class StudentRequest(BaseModel):
    """
    Request body for POST /api/students.

    Absent keys and explicit nulls keep the zero value of the field
    ("" or 0). Unknown keys are ignored.
    """

    model_config = ConfigDict(
        strict=True,
        extra="ignore",
        json_schema_extra={
            "example": {
                "name": "Ada Lovelace",
                "email": "ada@university.edu",
                "age": 21
            }
        }
    )

    name: str = Field(
        "",
        description="Student full name (required, non-empty)",
        examples=["Ada Lovelace"]
    )
    email: str = Field(
        "",
        description="Student e-mail address (required, valid format)",
        examples=["ada@university.edu"]
    )
    age: int = Field(
        0,
        description="Student age in years (required, positive)",
        examples=[21]
    )

    @field_validator("*", mode="before")
    @classmethod
    def null_to_zero_value(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            return cls.model_fields[info.field_name].default
        return value


class StudentCreateResponse(BaseModel):
    """
    Success body for POST /api/students.

    The key is capitalized and differs from the error envelope; clients
    depend on this exact shape.
    """

    model_config = ConfigDict(populate_by_name=True)

    success: str = Field(
        "ok",
        alias="Success",
        description="Always 'ok' when the student passed validation"
    )
