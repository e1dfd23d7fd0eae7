import pytest

from chainregistry.prestates import (
    Prestate,
    Prestates,
    load_prestates,
    parse_prestates,
)
from chainregistry.types import Hash

HASH_A = "0x" + "aa" * 32
HASH_B = "0x" + "bb" * 32
HASH_C = "0x" + "cc" * 32

SAMPLE = f"""
latest_rc = "1.5.0-rc.1"
latest_stable = "1.4.0"

[[prestates."1.4.0"]]
type = "cannon32"
hash = "{HASH_A}"

[[prestates."1.4.0"]]
type = "cannon64"
hash = "{HASH_B}"

[[prestates."1.5.0-rc.1"]]
type = "cannon32"
hash = "{HASH_C}"
"""


def test_stable_prestate_is_first_of_latest_stable():
    prestates = parse_prestates(SAMPLE)
    assert prestates.stable_prestate() == Prestate(type="cannon32", hash=Hash.from_text(HASH_A))


def test_all_entries_are_kept_in_order():
    prestates = parse_prestates(SAMPLE)
    assert [p.hash.to_text() for p in prestates.prestates["1.4.0"]] == [HASH_A, HASH_B]
    assert prestates.latest_rc == "1.5.0-rc.1"


def test_missing_latest_rc_is_rejected():
    text = SAMPLE.replace('latest_rc = "1.5.0-rc.1"', 'latest_rc = "9.9.9"')
    with pytest.raises(ValueError, match="latest RC prestate not found"):
        parse_prestates(text)


def test_missing_latest_stable_is_rejected():
    text = SAMPLE.replace('latest_stable = "1.4.0"', 'latest_stable = "9.9.9"')
    with pytest.raises(ValueError, match="latest stable prestate not found"):
        parse_prestates(text)


def test_bad_hash_is_rejected():
    with pytest.raises(ValueError, match="invalid hash length"):
        parse_prestates(SAMPLE.replace(HASH_C, "0x1234"))


def test_empty_document_has_no_stable_prestate():
    with pytest.raises(KeyError):
        Prestates.from_dict({}).stable_prestate()


def test_load_from_file(tmp_path):
    path = tmp_path / "prestates.toml"
    path.write_text(SAMPLE)
    assert load_prestates(path) == parse_prestates(SAMPLE)