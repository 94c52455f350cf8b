"""
Tests for the JSON response helpers.
"""

import json

import pytest

from students_api.utils.response import (
    STATUS_ERROR,
    FieldError,
    ResponseEnvelope,
    general_error,
    validation_error,
    write_json,
)


class TestWriteJson:
    """Tests for write_json function."""

    def test_writes_status_content_type_and_body(self):
        response = write_json(201, {"Success": "ok"})

        assert response.status_code == 201
        assert response.media_type == "application/json"
        assert json.loads(response.body) == {"Success": "ok"}

    def test_dumps_pydantic_models(self):
        response = write_json(400, ResponseEnvelope(status="Error", error="boom"))

        assert response.status_code == 400
        assert json.loads(response.body) == {"status": "Error", "error": "boom"}

    def test_serialization_error_propagates(self):
        with pytest.raises(TypeError):
            write_json(200, {"value": object()})


class TestGeneralError:
    """Tests for general_error function."""

    def test_wraps_exception_message(self):
        envelope = general_error(ValueError("empty body"))

        assert envelope.status == STATUS_ERROR
        assert envelope.error == "empty body"


class TestValidationError:
    """Tests for validation_error function."""

    def test_required_and_other_tags(self):
        envelope = validation_error([
            FieldError(field="Name", tag="required"),
            FieldError(field="Email", tag="email"),
            FieldError(field="Age", tag="gt"),
        ])

        assert envelope.status == STATUS_ERROR
        assert envelope.error == (
            "field Name is required field, field Email is invalid, field Age is invalid"
        )

    def test_keeps_order_and_duplicates(self):
        envelope = validation_error([
            FieldError(field="Email", tag="email"),
            FieldError(field="Email", tag="email"),
        ])

        assert envelope.error == "field Email is invalid, field Email is invalid"

    def test_empty_failures_give_empty_message(self):
        envelope = validation_error([])

        assert envelope.status == STATUS_ERROR
        assert envelope.error == ""
