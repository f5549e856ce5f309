"""Error Hierarchy: verifies codes, categories and log context."""

from forms_api.core.errors import (
    DatabaseError, ErrorCategory, ErrorContext, ErrorSeverity,
    IntegrityConstraintError,
)


def test_database_error_message_names_operation():
    err = DatabaseError("Connection or operational error", "create")
    assert err.http_status == 503
    assert err.operation == "create"
    assert err.category is ErrorCategory.DATABASE
    assert err.severity is ErrorSeverity.CRITICAL
    assert "create" in err.message


def test_integrity_error_is_a_database_error_in_conflict_category():
    err = IntegrityConstraintError("Integrity constraint violated", "update")
    assert isinstance(err, DatabaseError)
    assert err.category is ErrorCategory.CONFLICT
    assert err.severity is ErrorSeverity.ERROR
    assert err.http_status == 409
    assert err.code == "INTEGRITY_CONSTRAINT"


def test_log_extra_carries_context():
    err = DatabaseError("down", "get", ErrorContext(form_id="f-1"))
    assert err.log_extra() == {
        "error_code": "DATABASE_ERROR", "category": "database", "form_id": "f-1",
    }


def test_context_defaults_to_no_form():
    assert DatabaseError("down", "count").log_extra()["form_id"] is None
