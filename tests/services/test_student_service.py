"""
Tests for student decoding and validation.

Tests follow the two-phase contract:
- decode_student() raises DecodeError for structural problems only
- validate_student() collects every failing field, first failure per field
"""

import pytest

from students_api.schemas.students import StudentRequest
from students_api.services.student_service import (
    DecodeError,
    EmptyBodyError,
    StudentValidationError,
    decode_student,
    validate_student,
)
from students_api.utils.response import FieldError


class TestDecodeStudent:
    """Tests for decode_student function."""

    def test_decode_valid_body(self):
        student = decode_student(b'{"name": "Ada", "email": "ada@university.edu", "age": 21}')

        assert student == StudentRequest(name="Ada", email="ada@university.edu", age=21)

    def test_missing_and_null_fields_keep_zero_values(self):
        student = decode_student(b'{"name": null}')

        assert student.name == ""
        assert student.email == ""
        assert student.age == 0

    def test_empty_body_raises_empty_body_error(self):
        with pytest.raises(EmptyBodyError) as exc_info:
            decode_student(b"")

        assert str(exc_info.value) == "empty body"
        assert isinstance(exc_info.value, DecodeError)

    def test_invalid_json(self):
        with pytest.raises(DecodeError) as exc_info:
            decode_student(b'{"age":')

        assert not isinstance(exc_info.value, EmptyBodyError)
        assert str(exc_info.value)

    def test_invalid_utf8(self):
        with pytest.raises(DecodeError):
            decode_student(b'{"name": "\xff\xfe"}')

    @pytest.mark.parametrize(
        "body, field",
        [
            (b'{"age": "21"}', "age"),
            (b'{"age": 21.5}', "age"),
            (b'{"age": true}', "age"),
            (b'{"name": 42}', "name"),
        ],
    )
    def test_wrong_json_types_are_not_coerced(self, body, field):
        with pytest.raises(DecodeError) as exc_info:
            decode_student(body)

        assert f"field {field}" in str(exc_info.value)

    def test_non_object_body(self):
        with pytest.raises(DecodeError) as exc_info:
            decode_student(b'"just a string"')

        assert "request body" in str(exc_info.value)


class TestValidateStudent:
    """Tests for validate_student function."""

    def test_valid_student_passes(self):
        validate_student(StudentRequest(name="Ada", email="ada@university.edu", age=21))

    def test_special_use_domain_email_passes(self):
        validate_student(StudentRequest(name="Ada", email="ada@school.test", age=21))

    def test_all_failures_collected_in_declaration_order(self):
        with pytest.raises(StudentValidationError) as exc_info:
            validate_student(StudentRequest(name="", email="nope", age=-1))

        assert exc_info.value.failures == [
            FieldError(field="Name", tag="required"),
            FieldError(field="Email", tag="email"),
            FieldError(field="Age", tag="gt"),
        ]

    def test_first_failing_constraint_per_field(self):
        """An empty email is reported as required, not also as malformed."""
        with pytest.raises(StudentValidationError) as exc_info:
            validate_student(StudentRequest(name="Ada", email="", age=21))

        assert exc_info.value.failures == [FieldError(field="Email", tag="required")]

    def test_zero_age_is_required(self):
        with pytest.raises(StudentValidationError) as exc_info:
            validate_student(StudentRequest(name="Ada", email="ada@university.edu", age=0))

        assert exc_info.value.failures == [FieldError(field="Age", tag="required")]
