"""A small HTTP/1.0 server, a request router and a set of utility endpoints."""

__version__ = "0.1.0"