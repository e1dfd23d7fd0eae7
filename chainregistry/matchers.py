"""Predicates deciding whether JSON-RPC request parameters match an expectation."""

from __future__ import annotations

import json
import re
from collections.abc import Callable

RawParams = str | bytes | bytearray | None
ParamsMatcher = Callable[[RawParams], bool]

# A JSON string literal, or a run of whitespace outside one.
_TOKENS = re.compile(r'("(?:[^"\\]|\\.)*")|[ \t\r\n]+')


def _reject_constant(name: str) -> None:
    raise ValueError(f"invalid JSON value: {name}")


def _is_nullish(params: RawParams) -> bool:
    return params is None or params in ("null", b"null")


def _canonical(params: str | bytes | bytearray) -> str:
    """Compact form of a JSON document with newlines removed; raises ValueError if invalid."""
    text = params.decode("utf-8") if isinstance(params, (bytes, bytearray)) else params
    text = text.replace("\n", "")
    json.loads(text, parse_constant=_reject_constant)
    return _TOKENS.sub(lambda m: m.group(1) or "", text)


def any_params_matcher() -> ParamsMatcher:
    """A matcher that accepts any parameters."""
    return lambda _params: True


def null_matcher() -> ParamsMatcher:
    """A matcher that accepts only absent or null parameters."""
    return _is_nullish


def json_params_matcher(expected: RawParams) -> ParamsMatcher:
    """A matcher comparing parameters with ``expected`` as compacted JSON text.

    Newlines and insignificant whitespace are ignored; key order and the literal
    spelling of numbers and strings still matter. Raises ValueError if
    ``expected`` is not valid JSON.
    """
    if _is_nullish(expected):
        return null_matcher()

    want = _canonical(expected)

    def matches(params: RawParams) -> bool:
        if params is None:
            return False
        try:
            return _canonical(params) == want
        except ValueError:
            return False

    return matches