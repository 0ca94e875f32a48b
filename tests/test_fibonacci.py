import pytest

from minihttpd.fibonacci import fibonacci, fibonacci_handler
from minihttpd.request import HttpRequest


@pytest.mark.parametrize(
    ("num", "expected"),
    [
        (0, 0),
        (1, 1),
        (2, 1),
        (3, 2),
        (4, 3),
        (5, 5),
        (10, 55),
        (20, 6765),
        (92, 7540113804746346429),
    ],
)
def test_fibonacci(num, expected):
    assert fibonacci(num) == expected


def test_fibonacci_negative_is_zero():
    assert fibonacci(-5) == 0


@pytest.mark.parametrize(
    ("num", "expected"),
    [
        ("", "num is required"),
        ("A", "num must be a number"),
        ("-1", "num must be between 0 and 92"),
        ("93", "num must be between 0 and 92"),
        ("0", "0"),
        ("1", "1"),
        ("10", "55"),
        ("92", "7540113804746346429"),
    ],
)
def test_fibonacci_handler(num, expected):
    request = HttpRequest("GET", f"/fibonacci?num={num}")
    response = fibonacci_handler(request)
    assert response.body == expected


def test_fibonacci_handler_status_codes():
    good = fibonacci_handler(HttpRequest("GET", "/fibonacci?num=7"))
    bad = fibonacci_handler(HttpRequest("GET", "/fibonacci?num=x"))
    assert (good.status_code, good.body) == (200, "13")
    assert bad.status_code == 400


def test_fibonacci_handler_rejects_spaces():
    response = fibonacci_handler(HttpRequest("GET", "/fibonacci?num=%205"))
    assert response.body == "num must be a number"