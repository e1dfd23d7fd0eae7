"""Locations of files and directories inside a registry checkout."""

from __future__ import annotations

import os
import stat
from collections.abc import Callable, Iterator

CollectorMatcher = Callable[[str], bool]

_REPO_MARKER = ".repo-root"


def find_repo_root() -> str:
    """Find the repository root, starting from the working directory."""
    return find_repo_root_from_dir(os.getcwd())


def find_repo_root_from_dir(wd: str | os.PathLike[str]) -> str:
    """Walk up from ``wd`` until a directory holding a ``.repo-root`` marker is found."""
    current = os.path.abspath(wd)
    while True:
        if os.path.exists(os.path.join(current, _REPO_MARKER)):
            return current
        parent = os.path.dirname(current)
        if parent == current:
            raise FileNotFoundError("not in repo")
        current = parent


def staging_dir(wd: str) -> str:
    return os.path.join(wd, ".staging")


def superchain_configs_dir(wd: str) -> str:
    return os.path.join(wd, "superchain", "configs")


def superchain_dir(wd: str, name: str) -> str:
    return os.path.join(superchain_configs_dir(wd), str(name))


def chain_config(wd: str, superchain: str, short_name: str) -> str:
    return os.path.join(superchain_dir(wd, superchain), short_name + ".toml")


def superchain_config(wd: str, superchain: str) -> str:
    return os.path.join(superchain_dir(wd, superchain), "superchain.toml")


def extra_dir(wd: str) -> str:
    return os.path.join(wd, "superchain", "extra")


def genesis_file(wd: str, superchain: str, short_name: str) -> str:
    return os.path.join(extra_dir(wd), "genesis", str(superchain), short_name + ".json.zst")


def addresses_file(wd: str) -> str:
    return os.path.join(extra_dir(wd), "addresses", "addresses.json")


def chain_list_json_file(wd: str) -> str:
    return os.path.join(wd, "chainList.json")


def chain_list_toml_file(wd: str) -> str:
    return os.path.join(wd, "chainList.toml")


def chain_md_file(wd: str) -> str:
    return os.path.join(wd, "CHAINS.md")


def validations_dir(wd: str) -> str:
    return os.path.join(wd, "validation", "standard")


def validations_file(wd: str, superchain: str) -> str:
    return os.path.join(validations_dir(wd), f"standard-config-params-{superchain}.toml")


def require_dir(p: str | os.PathLike[str]) -> None:
    """Raise unless ``p`` exists and is a directory."""
    info = os.stat(p)
    if not stat.S_ISDIR(info.st_mode):
        raise NotADirectoryError(f"{os.fspath(p)} is not a directory")


def ensure_dir(p: str | os.PathLike[str]) -> None:
    os.makedirs(p, mode=0o755, exist_ok=True)


def require_root(wd: str) -> None:
    """Raise unless ``wd`` looks like the repository root (has a staging directory)."""
    try:
        require_dir(staging_dir(wd))
    except OSError as exc:
        raise OSError(f"not at repo root or IO error: {exc}") from exc


def _walk_files(top: str) -> Iterator[str]:
    info = os.lstat(top)
    if not stat.S_ISDIR(info.st_mode):
        yield top
        return
    with os.scandir(top) as it:
        entries = sorted(it, key=lambda entry: entry.name)
    for entry in entries:
        path = os.path.join(top, entry.name)
        if entry.is_dir(follow_symlinks=False):
            yield from _walk_files(path)
        else:
            yield path


def collect_files(root: str | os.PathLike[str], matcher: CollectorMatcher) -> list[str]:
    """All non-directory paths under ``root``, in lexical walk order, accepted by ``matcher``."""
    return [path for path in _walk_files(os.fspath(root)) if matcher(path)]


def _extension(path: str) -> str:
    dot = path.rfind(".")
    if dot == -1 or "/" in path[dot:] or os.sep in path[dot:]:
        return ""
    return path[dot:]


def file_ext_matcher(ext: str) -> CollectorMatcher:
    """A matcher accepting paths whose final extension is ``ext`` (including the dot)."""

    def matches(path: str) -> bool:
        return _extension(path) == ext

    return matches