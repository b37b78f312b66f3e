import pytest

from rlt.status import Status, StatusKind


@pytest.mark.parametrize(
    "factory, kind",
    [
        (Status.success, StatusKind.SUCCESS),
        (Status.client_error, StatusKind.CLIENT_ERROR),
        (Status.server_error, StatusKind.SERVER_ERROR),
        (Status.error, StatusKind.ERROR),
    ],
)
def test_constructors_set_kind_and_code(factory, kind):
    status = factory(42)
    assert status.kind is kind
    assert status.code == 42


def test_kind_labels():
    assert str(Status.success(1).kind) == "Success"
    assert str(Status.client_error(1).kind) == "Client Error"
    assert str(Status.server_error(1).kind) == "Server Error"
    assert str(Status.error(1).kind) == "Error"


def test_status_display_combines_kind_and_code():
    status = Status.client_error(404)
    assert str(status) == f"{status.kind}({status.code})"
    assert str(Status.error(5)).startswith("Error(")


@pytest.mark.parametrize(
    "code, kind",
    [
        (200, StatusKind.SUCCESS),
        (299, StatusKind.SUCCESS),
        (404, StatusKind.CLIENT_ERROR),
        (503, StatusKind.SERVER_ERROR),
        (302, StatusKind.ERROR),
        (101, StatusKind.ERROR),
    ],
)
def test_from_http_classifies(code, kind):
    status = Status.from_http(code)
    assert status.kind is kind
    assert status.code == code


@pytest.mark.parametrize("code", [0, 99, 1000])
def test_from_http_rejects_invalid_codes(code):
    with pytest.raises(ValueError):
        Status.from_http(code)


def test_statuses_are_hashable_and_equal_by_value():
    counts = {}
    for status in [Status.success(200), Status.success(200), Status.error(200)]:
        counts[status] = counts.get(status, 0) + 1
    assert counts[Status.success(200)] == 2
    assert counts[Status.error(200)] == 1


def test_ordering_by_kind_then_code():
    statuses = [Status.server_error(500), Status.success(201), Status.error(1), Status.success(200)]
    ordered = sorted(statuses)
    assert ordered == [
        Status.success(200),
        Status.success(201),
        Status.error(1),
        Status.server_error(500),
    ]