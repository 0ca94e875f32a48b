# minihttpd

A small HTTP/1.0 server written directly on top of sockets. It parses
requests itself, dispatches them to handlers by method and path, and ships
with a set of ready-made endpoints: string utilities, Fibonacci numbers,
file creation and deletion in the working directory, and a few endpoints
for simulating load. It has no dependencies outside the standard library.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Running the server

```
minihttpd
minihttpd --port 9000
minihttpd --host 127.0.0.1 --port 9000
```

| Option   | Default      | Meaning                     |
|----------|--------------|-----------------------------|
| `--host` | all addresses | Address to listen on       |
| `--port` | `8080`       | Port to listen on           |

The server logs each request and response at INFO level and stops cleanly
on Ctrl+C (SIGINT) or SIGTERM. If the port cannot be opened, the error is
logged and the command exits with status 1. Every connection handles one
request, is answered with an HTTP/1.0 response and is then closed; each
connection is served on its own thread.

## Endpoints

| Method        | Path                                   | Result                                          |
|---------------|----------------------------------------|-------------------------------------------------|
| GET           | `/`                                    | Plain-text list of routes                       |
| GET           | `/fibonacci?num=n`                     | n-th Fibonacci number, `0 <= n <= 92`           |
| POST, GET     | `/createfile?name=&content=&repeat=`   | Creates `name` holding `content` `repeat` times |
| DELETE, GET   | `/deletefile?name=`                    | Deletes `name`                                  |
| GET           | `/reverse?text=`                       | The text reversed                               |
| GET           | `/toupper?text=`                       | The text in upper case                          |
| GET           | `/hash?text=`                          | SHA-256 of the text, hex encoded                |
| GET           | `/random?count=&min=&max=`             | `{"numbers":[...]}`                             |
| GET           | `/timestamp`                           | `{"timestamp":"...Z"}` (RFC 3339, UTC)          |
| GET           | `/simulate?seconds=&task=`             | Waits, then `{"task":...,"done":true}`          |
| GET           | `/sleep?seconds=`                      | Waits, then `slept N seconds`                   |
| GET           | `/loadtest?tasks=&sleep=`              | Runs tasks on threads, reports `duration_ms`    |
| GET           | `/status`                              | `uptime_s`, `total_connections`, `pid`, `goroutines` (live thread count) |
| GET           | `/help`                                | `{"commands":[...]}`                            |

Missing or invalid parameters give `400 Bad Request` with a short message
such as `num is required`. A known path requested with the wrong method
gives `400 Bad Request` (`Bad method`); an unknown path gives
`404 Not Found`. A request that cannot be parsed is answered with
`400 Bad Request` and the parse error as its body. POST requests must
carry a `Content-Length` header. A handler that raises is answered with
`500 Internal Server Error`.

Files can only be created or deleted beneath the directory the server was
started in; an existing file is never overwritten, and missing parent
directories are created. Deleting a directory works only when it is empty.

Example:

```
$ printf 'GET /fibonacci?num=7 HTTP/1.0\r\n\r\n' | nc localhost 8080
HTTP/1.0 200 OK
Content-Length: 2
Content-Type: text/plain

13
```

## Using it as a library

Handlers take an `HttpRequest` and return an `HttpResponse`:

```python
from minihttpd.response import ok, bad_request
from minihttpd.server import HttpServer


def greet(request):
    name = request.param("name")
    if not name:
        return bad_request().text("name is required")
    return ok().text(f"hello {name}")


server = HttpServer()
server.get("/greet", greet)
server.start(8000, "")
```

- `minihttpd.request`: `HttpRequest` (`method`, `target`, `headers`, `body`,
  and `param(name)` for the first query value), `read_request(stream)` to
  read a whole request from a binary stream, `parse_request`, `parse_body`,
  `parse_target`, and `RequestError` for anything malformed.
- `minihttpd.response`: `HttpResponse` with chainable `header`,
  `content_type`, `text`, `json` and `json_obj`; `render()` gives the
  HTTP/1.0 message with `Content-Length` set and headers sorted;
  `write_to(conn)` sends it on a socket. `ok()`, `not_found()` and
  `bad_request()` build the common responses.
- `minihttpd.server`: `HttpServer` with `get`, `post`, `delete`,
  `add_handler`, `start(port, host)` and `stop()`. `start` blocks until
  `stop()` closes the listening socket; its `ready` event is set once it
  is listening and `address` holds the bound address. Paths match exactly
  or as a prefix followed by `/` (`match_path`), and handlers are sorted so
  that deeper, then longer, paths are tried first.
- `minihttpd.router`: `Router` offers method-and-path dispatch without any
  networking, turning an `HttpRequest` straight into an `HttpResponse`
  (`404 no route` when nothing matches). Routes are tried in the order
  registered, or most specific first after `sort_handlers()`.
- `minihttpd.app`: `build_server()` returns a server with all of the
  endpoints above registered; `main(argv)` is the command.
- `minihttpd.fibonacci`, `minihttpd.files`, `minihttpd.text_handlers` and
  `minihttpd.advanced` hold the endpoint handlers; `fibonacci(num)`,
  `create_file(filename, content, repeat)` and `delete_file(filename)`
  (raising `FileServiceError`) can be called directly.

## What it does not do

The server speaks only HTTP/1.0 with one request per connection: no
keep-alive, no chunked transfer encoding, no TLS, and no static file
serving. Request bodies are read only by length from `Content-Length`.