"""Error Hierarchy - envelope shapes for REST and GraphQL."""

from taskboard.core.errors import (
    DatabaseError, ErrorCategory, ErrorContext, ErrorSeverity,
    InvalidStatusError, TaskBoardError,
)


def test_domain_errors_are_400_level():
    err = InvalidStatusError("archived")
    assert isinstance(err, TaskBoardError)
    assert err.http_status == 400
    assert err.category is ErrorCategory.VALIDATION
    assert "archived" in err.message


def test_database_error_is_critical_503():
    err = DatabaseError("boom", "commit")
    assert err.http_status == 503
    assert err.severity is ErrorSeverity.CRITICAL
    assert err.message == "Database commit failed: boom"


def test_to_response_envelope():
    err = DatabaseError("boom", "delete", ErrorContext(task_id="5", operation="delete"))
    body = err.to_response()["error"]
    assert body["code"] == "DATABASE_ERROR"
    assert body["category"] == "database"
    assert body["context"] == {"task_id": "5", "operation": "delete"}
    assert "timestamp" in body


def test_extensions_for_graphql():
    assert InvalidStatusError("x").extensions == {
        "code": "INVALID_STATUS",
        "category": "validation",
        "severity": "error",
    }
