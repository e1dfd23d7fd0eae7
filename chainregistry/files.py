"""Reading and writing TOML and JSON files."""

from __future__ import annotations

import contextlib
import gzip
import json
import os
import tempfile
import tomllib
from typing import Any

import tomli_w

_JSON_WHITESPACE = " \t\n\r"


def read_toml_file(p: str | os.PathLike[str]) -> dict[str, Any]:
    with open(p, "rb") as f:
        return tomllib.load(f)


def read_json_file(p: str | os.PathLike[str]) -> Any:
    """Decode the first JSON value in a file; files ending in ``.gz`` are gunzipped first."""
    path = os.fspath(p)
    opener = gzip.open if path.endswith(".gz") else open
    with opener(path, "rb") as f:
        text = f.read().decode("utf-8")
    value, _ = json.JSONDecoder().raw_decode(text.lstrip(_JSON_WHITESPACE))
    return value


def atomic_write(p: str | os.PathLike[str], mode: int, data: bytes | str) -> None:
    """Write ``data`` to ``p`` through a temporary file so readers never see a partial file."""
    target = os.fspath(p)
    payload = data.encode("utf-8") if isinstance(data, str) else bytes(data)
    directory = os.path.dirname(os.path.abspath(target))
    fd, tmp = tempfile.mkstemp(dir=directory, prefix=f".{os.path.basename(target)}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(payload)
            f.flush()
            os.fsync(f.fileno())
        os.chmod(tmp, mode)
        os.replace(tmp, target)
    except BaseException:
        with contextlib.suppress(FileNotFoundError):
            os.unlink(tmp)
        raise


def write_toml_file(p: str | os.PathLike[str], data: dict[str, Any]) -> None:
    atomic_write(p, 0o644, tomli_w.dumps(data))