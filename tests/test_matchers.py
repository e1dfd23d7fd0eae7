import pytest

from chainregistry.matchers import any_params_matcher, json_params_matcher, null_matcher


@pytest.mark.parametrize("params", [None, "null", "[1,2]", "not json", b"{}"])
def test_any_params_matcher_accepts_everything(params):
    assert any_params_matcher()(params) is True


@pytest.mark.parametrize(
    ("params", "expected"),
    [(None, True), ("null", True), (b"null", True), ("[]", False), (" null", False), ("{}", False)],
)
def test_null_matcher(params, expected):
    assert null_matcher()(params) is expected


@pytest.mark.parametrize("expected", [None, "null", b"null"])
def test_nullish_expectation_matches_only_null(expected):
    matcher = json_params_matcher(expected)
    assert matcher(None) is True
    assert matcher("null") is True
    assert matcher("[]") is False


def test_whitespace_is_ignored():
    matcher = json_params_matcher('[1, {"a": 2}]')
    assert matcher('[1,{"a":2}]') is True
    assert matcher('[\n  1,\n  {\n    "a": 2\n  }\n]') is True
    assert matcher(b'[1 , { "a" : 2 } ]') is True


def test_multiline_expectation_matches_compact_params():
    matcher = json_params_matcher('[\n  "0x1",\n  false\n]')
    assert matcher('["0x1",false]') is True


def test_key_order_matters():
    matcher = json_params_matcher('{"a":1,"b":2}')
    assert matcher('{"b":2,"a":1}') is False
    assert matcher('{"a":1,"b":2}') is True


def test_number_spelling_matters():
    matcher = json_params_matcher("[1]")
    assert matcher("[1.0]") is False
    assert matcher("[1]") is True


def test_whitespace_inside_strings_matters():
    matcher = json_params_matcher('["a b"]')
    assert matcher('["ab"]') is False
    assert matcher('["a b"]') is True


def test_newlines_removed_even_inside_strings():
    matcher = json_params_matcher('["a\nb"]')
    assert matcher('["ab"]') is True


def test_invalid_params_do_not_match():
    matcher = json_params_matcher("[1]")
    assert matcher("[1") is False
    assert matcher("[1] [2]") is False
    assert matcher("[NaN]") is False
    assert matcher(None) is False


def test_invalid_expectation_raises():
    with pytest.raises(ValueError):
        json_params_matcher("{not json")