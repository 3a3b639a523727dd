import pytest

from shopassist.utils.json_extraction import extract_json_block, parse_json_object, strip_code_fences


def test_direct_json_object():
    assert parse_json_object('{"intent": "greeting"}') == {"intent": "greeting"}


def test_fenced_json_object():
    text = '```json\n{"searchQuery": "lamps"}\n```'
    assert parse_json_object(text) == {"searchQuery": "lamps"}


def test_json_embedded_in_prose():
    text = 'Sure! Here you go: {"message": "Check weekly ads."} Hope that helps.'
    assert parse_json_object(text) == {"message": "Check weekly ads."}


@pytest.mark.parametrize("text", [None, "", "   ", "no json here", "[1, 2]", "{not: json}"])
def test_unrecoverable_text_returns_none(text):
    assert parse_json_object(text) is None


def test_extract_json_block_bounds():
    assert extract_json_block('a {"x": {"y": 1}} b') == '{"x": {"y": 1}}'
    assert extract_json_block("} backwards {") is None


def test_strip_code_fences_leaves_plain_text():
    assert strip_code_fences("  hello  ") == "hello"
