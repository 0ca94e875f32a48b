import pytest

from minihttpd.request import HttpRequest
from minihttpd.text_handlers import (
    hash_handler,
    reverse_handler,
    root_handler,
    to_upper_handler,
)


def make_req(method, raw):
    return HttpRequest(method, raw, {}, "")


def test_reverse():
    res = reverse_handler(make_req("GET", "/reverse?text=hola"))
    assert res.body == "aloh"
    assert res.headers["Content-Type"] == "text/plain"


def test_reverse_missing_text():
    res = reverse_handler(make_req("GET", "/reverse"))
    assert res.status_code == 400
    assert res.body == "text is required"


def test_reverse_unicode():
    res = reverse_handler(make_req("GET", "/reverse?text=a%C3%B1b"))
    assert res.body == "bña"


def test_to_upper():
    res = to_upper_handler(make_req("GET", "/toupper?text=MixedCase"))
    assert res.status_code == 200
    assert res.body == "MIXEDCASE"


def test_hash():
    res = hash_handler(make_req("GET", "/hash?text=abc"))
    assert res.body == "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"


@pytest.mark.parametrize("handler", [reverse_handler, to_upper_handler, hash_handler])
def test_empty_text_is_bad_request(handler):
    res = handler(make_req("GET", "/x?text="))
    assert (res.status_code, res.body) == (400, "text is required")


def test_root():
    res = root_handler(make_req("GET", "/"))
    expected = (
        "Servidor HTTP activo. Rutas disponibles:\n"
        "GET  /reverse?text=...\n"
        "GET  /toupper?text=...\n"
        "GET  /hash?text=...\n"
        "GET  /timestamp\n"
        "GET  /random?count=n&min=a&max=b\n"
        "GET  /simulate?seconds=s&task=name\n"
        "GET  /sleep?seconds=s\n"
        "GET  /loadtest?tasks=n&sleep=s\n"
        "GET  /status\n"
        "GET  /help"
    )
    assert res.body == expected
    assert res.status_code == 200