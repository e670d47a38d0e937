"""Tests for ServiceResult and ServiceError."""

import json

import pytest
from pydantic import ValidationError

from reltag.services.result import ServiceError, ServiceResult


class TestServiceResult:
    def test_success_construction(self) -> None:
        result = ServiceResult(ok=True, op="next_tag", data={"tag": "v2024.up1.0"})
        assert result.ok is True
        assert result.data == {"tag": "v2024.up1.0"}
        assert result.warnings == []
        assert result.error is None

    def test_failure_helper(self) -> None:
        result = ServiceResult.failure("create_tag", "MISSING_SHA", "Missing GITHUB_SHA.", a=1)
        assert result.ok is False
        assert result.op == "create_tag"
        assert result.error == ServiceError(
            code="MISSING_SHA", message="Missing GITHUB_SHA.", detail={"a": 1}
        )
        assert result.data == {}

    def test_json_serialization(self) -> None:
        result = ServiceResult(ok=True, op="next_tag", data={"tag": "v2024.up1.0"})
        parsed = json.loads(result.model_dump_json())
        assert parsed["ok"] is True
        assert parsed["data"]["tag"] == "v2024.up1.0"

    def test_frozen(self) -> None:
        result = ServiceResult(ok=True, op="test")
        with pytest.raises(ValidationError):
            result.ok = False  # type: ignore[misc]
