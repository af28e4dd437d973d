"""Tests for data models."""

import pytest
from fastapi import HTTPException

from api_response_dumper.models import (
    CallDescriptor,
    Failure,
    NotAController,
    Success,
    controller_prefix,
)


class TestCallDescriptor:
    def test_prefix_strips_controller_suffix(self):
        for name, prefix in [
            ("WidgetController", "Widget"),
            ("AdminWidgetController", "AdminWidget"),
            ("Controller", ""),
        ]:
            descriptor = CallDescriptor(name, "get", "test_get")
            assert descriptor.controller_prefix == prefix


class TestCallOutcome:
    def test_success_carries_value(self):
        outcome = Success({"id": 5})
        assert outcome.value == {"id": 5}
        assert not isinstance(outcome, Failure)

    def test_failure_payload_is_exception_detail(self):
        error = HTTPException(status_code=404, detail={"error": "not found"})
        outcome = Failure(error)
        assert outcome.payload == {"error": "not found"}
        assert outcome.error.status_code == 404
        assert not isinstance(outcome, Success)


class TestControllerPrefix:
    def test_rejects_name_without_suffix(self):
        """Names not ending in 'Controller' are a hard failure."""
        with pytest.raises(NotAController):
            controller_prefix("Widget")

    def test_descriptor_prefix_uses_same_check(self):
        descriptor = CallDescriptor("WidgetService", "get", "test_get")
        with pytest.raises(NotAController):
            descriptor.controller_prefix
