"""A scripted JSON-RPC server answering calls from a fixed list of expectations."""

from __future__ import annotations

import json
import logging
import threading
from collections import deque
from collections.abc import Iterable
from dataclasses import dataclass, field
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path
from typing import Any

from chainregistry.matchers import ParamsMatcher, any_params_matcher, json_params_matcher

_JSON_CONTENT_TYPE = "application/json"


def _reject_constant(name: str) -> None:
    raise ValueError(f"invalid JSON value: {name}")


class NoMoreCallsError(Exception):
    """A request arrived after every expected call was used up."""

    def __init__(self, message: str = "no more calls") -> None:
        super().__init__(message)


class NoMatchingCallsError(Exception):
    """A request did not match the next expected call."""

    def __init__(self, message: str = "no matching calls") -> None:
        super().__init__(message)


class PendingCallsError(AssertionError):
    """Some expected calls were never made."""


@dataclass
class RPCCall:
    """One expected call and the answer to give it."""

    method: str
    params_matcher: ParamsMatcher = field(default_factory=any_params_matcher)
    result: Any = None
    err: str = ""
    err_code: int = 0


@dataclass(frozen=True)
class _Request:
    id: str | None = None
    params: str | None = None
    method: str = ""


def _marshal(value: Any, sort_keys: bool = True) -> str:
    encoded = json.dumps(value, ensure_ascii=False, sort_keys=sort_keys, separators=(",", ":"))
    for char, escape in (("<", "\\u003c"), (">", "\\u003e"), ("&", "\\u0026"),
                         ("\u2028", "\\u2028"), ("\u2029", "\\u2029")):
        encoded = encoded.replace(char, escape)
    return encoded


def _field(obj: dict, key: str, kind: type, default: Any) -> Any:
    value = obj.get(key)
    if value is None:
        return default
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise ValueError(f"cannot unmarshal {value!r} into {key} of type {kind.__name__}")
    return value


def _raw(obj: dict, key: str) -> str | None:
    return _marshal(obj[key], sort_keys=False) if key in obj else None


def _request(item: Any) -> _Request:
    if item is None:
        return _Request()
    if not isinstance(item, dict):
        raise ValueError("expected a JSON object")
    return _Request(id=_raw(item, "id"), params=_raw(item, "params"), method=_field(item, "method", str, ""))


def _parse_requests(text: str) -> list[_Request]:
    data = json.loads(text, parse_constant=_reject_constant)
    items = data if text.startswith("[") else [data]
    return [_request(item) for item in items or ()]


def load_expectations(path: str | Path) -> list[RPCCall]:
    """Read expected calls from a JSON array of {method, params, result, err, errCode}."""
    entries = json.loads(Path(path).read_text(encoding="utf-8"), parse_constant=_reject_constant) or []
    return [
        RPCCall(
            method=_field(entry, "method", str, ""),
            params_matcher=json_params_matcher(_raw(entry, "params")),
            result=entry.get("result"),
            err=_field(entry, "err", str, ""),
            err_code=_field(entry, "errCode", int, 0),
        )
        for entry in entries
    ]


def _response(request_id: str | None, result: str, error: str) -> bytes:
    rid = request_id or "null"
    return f'{{"id":{rid},"jsonrpc":"2.0","result":{result},"error":{error}}}'.encode("utf-8")


def _result_response(request_id: str | None, result: Any) -> bytes:
    return _response(request_id, _marshal(result), "null")


def _error_response(request_id: str | None, code: int, err: BaseException | str) -> bytes:
    return _response(request_id, "null", f'{{"code":{code},"message":{_marshal(str(err))}}}')


class _Handler(BaseHTTPRequestHandler):
    mock: MockRPC

    def _dispatch(self) -> None:
        length = int(self.headers.get("Content-Length") or 0)
        body = self.rfile.read(length) if length > 0 else b""
        status, content_type, payload = self.mock._serve(self.command, body)
        self.send_response(status)
        self.send_header("Content-Type", content_type)
        self.send_header("Content-Length", str(len(payload)))
        self.end_headers()
        self.wfile.write(payload)

    do_GET = do_POST = do_PUT = do_DELETE = do_PATCH = do_OPTIONS = _dispatch

    def log_message(self, format: str, *args: Any) -> None:
        self.mock._logger.debug(format, *args)


class MockRPC:
    """Answers JSON-RPC requests in order from a list of expected calls.

    The first request that does not match records an error; every later request
    is then answered with that error.
    """

    def __init__(self, calls: Iterable[RPCCall] | None = None, logger: logging.Logger | None = None) -> None:
        self._calls: deque[RPCCall] = deque(calls or ())
        self._logger = logger or logging.getLogger(__name__)
        self._lock = threading.Lock()
        self._server: ThreadingHTTPServer | None = None
        self._thread: threading.Thread | None = None
        self.err: Exception | None = None

    @property
    def pending_calls(self) -> list[RPCCall]:
        with self._lock:
            return list(self._calls)

    def handle(self, body: bytes | str) -> bytes:
        """Answer one POSTed request body, returning the response body."""
        with self._lock:
            if self.err is not None:
                return _error_response(None, -32601, self.err)
            try:
                text = body.decode("utf-8") if isinstance(body, (bytes, bytearray)) else body
                requests = _parse_requests(text)
            except ValueError as exc:
                self._logger.warning("error unmarshalling request body: %s", exc)
                return _error_response(None, -32700, exc)
            responses = [self._answer(request) for request in requests]

        if len(responses) == 1:
            return responses[0]
        if not responses:
            return b"null"
        return b"[" + b",".join(responses) + b"]"

    def _answer(self, request: _Request) -> bytes:
        if not self._calls:
            self.err = NoMoreCallsError()
            return _error_response(request.id, -32601, self.err)

        call = self._calls.popleft()
        if call.method != request.method:
            self._logger.warning("method mismatch: expected %s, actual %s", call.method, request.method)
            self.err = NoMatchingCallsError()
            return _error_response(request.id, -32601, self.err)

        if not call.params_matcher(request.params):
            self._logger.warning("params did not match for method %s", request.method)
            self.err = NoMatchingCallsError()
            return _error_response(request.id, -32602, self.err)

        if call.err:
            return _error_response(request.id, call.err_code, call.err)
        return _result_response(request.id, call.result)

    def _serve(self, method: str, body: bytes) -> tuple[int, str, bytes]:
        with self._lock:
            failed = self.err
        if failed is not None:
            return 200, _JSON_CONTENT_TYPE, _error_response(None, -32601, failed)
        if method != "POST":
            self._logger.warning("method not allowed: %s", method)
            return 405, "text/plain; charset=utf-8", b"only POST requests are allowed\n"
        return 200, _JSON_CONTENT_TYPE, self.handle(body)

    def start(self) -> MockRPC:
        """Serve over HTTP on a free localhost port in a background thread."""
        if self._server is not None:
            raise RuntimeError("mock RPC server already started")
        handler = type("_BoundHandler", (_Handler,), {"mock": self})
        self._server = ThreadingHTTPServer(("localhost", 0), handler)
        self._thread = threading.Thread(target=self._server.serve_forever, daemon=True)
        self._thread.start()
        return self

    def stop(self) -> None:
        if self._server is None:
            return
        self._server.shutdown()
        self._server.server_close()
        if self._thread is not None:
            self._thread.join()
        self._server = None
        self._thread = None

    def __enter__(self) -> MockRPC:
        return self.start()

    def __exit__(self, *args: Any) -> None:
        self.stop()

    def endpoint(self) -> str:
        if self._server is None:
            raise RuntimeError("mock RPC server is not running")
        host, port = self._server.server_address[:2]
        return f"http://{host}:{port}"

    def assert_expectations(self) -> None:
        """Raise the recorded error, or PendingCallsError if expected calls were not made."""
        with self._lock:
            if self.err is not None:
                raise self.err
            if self._calls:
                raise PendingCallsError(f"{len(self._calls)} expected calls were not made")