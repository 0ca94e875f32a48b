import json
import re
import socket
import threading
import time

import pytest

from minihttpd.app import build_server, main


@pytest.fixture
def address():
    server = build_server()
    thread = threading.Thread(target=server.start, args=(0, "127.0.0.1"), daemon=True)
    thread.start()
    assert server.ready.wait(5)
    yield server.address
    server.stop()
    thread.join(5)


def send_raw(address, request):
    with socket.create_connection(address, timeout=10) as conn:
        conn.sendall(request.encode("utf-8"))
        chunks = []
        while True:
            chunk = conn.recv(4096)
            if not chunk:
                break
            chunks.append(chunk)
    data = b"".join(chunks).decode("utf-8")
    head, _, body = data.partition("\r\n\r\n")
    status_line = head.split("\r\n", 1)[0]
    return status_line, body


def raw_req(address, method, path):
    if method in ("POST", "DELETE"):
        request = f"{method} {path} HTTP/1.0\r\nContent-Length: 0\r\n\r\n"
    else:
        request = f"{method} {path} HTTP/1.0\r\n\r\n"
    return send_raw(address, request)


def get_ok(address, path):
    status, body = send_raw(address, f"GET {path} HTTP/1.0\r\nHost: test\r\n\r\n")
    assert "200" in status
    return body


@pytest.mark.parametrize(
    ("method", "path", "want"),
    [
        ("GET", "/fibonacci?num=7", "13"),
        ("GET", "/reverse?text=hola", "aloh"),
        ("GET", "/toupper?text=MixedCase", "MIXEDCASE"),
        ("GET", "/hash?text=abc", "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"),
    ],
)
def test_query_endpoints(address, method, path, want):
    _, body = raw_req(address, method, path)
    assert body == want


def test_file_endpoints(address, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    fname = "integration_test.txt"

    _, body = raw_req(address, "POST", f"/createfile?name={fname}&content=X&repeat=4")
    assert "File created successfully" in body
    assert (tmp_path / fname).read_text() == "XXXX"

    _, body = raw_req(address, "DELETE", f"/deletefile?name={fname}")
    assert "File deleted successfully" in body
    assert not (tmp_path / fname).exists()


def test_createfile_by_get(address, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    _, body = raw_req(address, "GET", "/createfile?name=g.txt&content=ab&repeat=2")
    assert body == "File created successfully"
    assert (tmp_path / "g.txt").read_text() == "abab"


def test_random_endpoint(address):
    body = get_ok(address, "/random?count=3&min=5&max=10")
    assert '"numbers":[' in body
    numbers = json.loads(body)["numbers"]
    assert len(numbers) == 3
    assert all(5 <= n <= 10 for n in numbers)


def test_timestamp_endpoint(address):
    body = get_ok(address, "/timestamp")
    assert "T" in body and "Z" in body
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}Z", json.loads(body)["timestamp"])


def test_simulate_and_sleep_endpoints(address):
    start = time.monotonic()
    body = get_ok(address, "/sleep?seconds=1")
    assert time.monotonic() - start >= 1
    assert body == "slept 1 seconds"

    start = time.monotonic()
    body = get_ok(address, "/simulate?seconds=1&task=test")
    assert time.monotonic() - start >= 1
    assert json.loads(body) == {"task": "test", "done": True}


def test_loadtest_endpoint(address):
    body = get_ok(address, "/loadtest?tasks=5&sleep=0")
    assert '"tasks":5' in body
    assert '"duration_ms":' in body


def test_status_and_help_endpoints(address):
    help_body = get_ok(address, "/help")
    assert "/fibonacci" in help_body
    assert "/help" in help_body

    status = get_ok(address, "/status")
    assert '"uptime_s"' in status
    assert '"total_connections"' in status
    assert '"goroutines"' in status


def test_root_endpoint(address):
    body = get_ok(address, "/")
    assert body.startswith("Servidor HTTP activo. Rutas disponibles:\n")


def test_not_found_route(address):
    status, body = send_raw(address, "GET /no_such_route HTTP/1.0\r\nHost: test\r\n\r\n")
    assert "404" in status
    assert body == "404 Not Found"


def test_bad_method(address):
    status, body = send_raw(address, "POST /fibonacci?num=5 HTTP/1.0\r\nHost: test\r\n\r\n")
    assert "400" in status
    assert body == "post request without content length"


def test_wrong_method_with_body_length(address):
    status, body = send_raw(
        address, "PUT /fibonacci?num=5 HTTP/1.0\r\nContent-Length: 0\r\n\r\n"
    )
    assert status == "HTTP/1.0 400 Bad Request"
    assert body == "Bad method"


def test_main_reports_port_in_use():
    with socket.socket() as blocker:
        blocker.bind(("127.0.0.1", 0))
        blocker.listen()
        port = blocker.getsockname()[1]
        assert main(["--host", "127.0.0.1", "--port", str(port)]) == 1