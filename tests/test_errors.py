# tests/test_errors.py
from resource_registry.services.exceptions import ErrorKind, bad_request, conflict, not_found, validation


def test_error_kinds_map_to_http_status():
    assert bad_request("x").http_status == 400
    assert not_found("x").http_status == 404
    assert conflict("x").http_status == 409
    assert validation("x").http_status == 400


def test_service_error_to_dict():
    error = conflict("Role with name 'Submitter' already exists.")

    assert error.kind is ErrorKind.CONFLICT
    assert error.to_dict() == {"error": "Conflict", "message": "Role with name 'Submitter' already exists."}
    assert str(error) == "Role with name 'Submitter' already exists."
