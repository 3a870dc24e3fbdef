import pytest

from textguard import normalize_key
from textguard.exceptions import CharacterLimitError, IllegalCharactersError


@pytest.mark.parametrize("value, expected", [
    ("./assets/scripts/example.js", "assets-scripts-example-js"),
    (["Assets", "Scripts", "Example.JS"], "assets-scripts-example-js"),
    (("a", "b"), "a-b"),
    ("--already-normal--", "already-normal"),
    ("a  ..  b", "a-b"),
    ("Ünïcode", "n-code"),
    ("", ""),
    ("///", ""),
])
def test_normalize_key_default_separator(value, expected):
    assert normalize_key(value) == expected


def test_normalize_key_custom_separator():
    assert normalize_key("Hello World", "_") == "hello_world"
    assert normalize_key(["a", "b"], "_") == "a_b"
    assert normalize_key("Hello World", "") == "helloworld"


def test_normalize_key_is_idempotent():
    key = normalize_key("Some/Thing.txt")
    assert normalize_key(key) == key


def test_normalize_key_character_limit():
    assert normalize_key("./abc", character_limit=5) == "abc"
    with pytest.raises(CharacterLimitError) as exc_info:
        normalize_key("./abcd", character_limit=5)
    assert exc_info.value.length == 5
    assert exc_info.value.limit == 5
    assert "normalize_key" in str(exc_info.value)


def test_normalize_key_throw_on_illegal():
    assert normalize_key("Abc_def-1", throw_on_illegal=True) == "abc-def-1"
    with pytest.raises(IllegalCharactersError):
        normalize_key("a.b", throw_on_illegal=True)
    with pytest.raises(IllegalCharactersError):
        normalize_key("a b", "_", throw_on_illegal=True)


def test_normalize_key_throw_on_illegal_accepts_separator():
    assert normalize_key("a.b", ".", throw_on_illegal=True) == "a.b"


def test_normalize_key_decodes_bytes():
    assert normalize_key(b"Abc") == "abc"
    assert normalize_key(bytearray(b"A/B")) == "a-b"
    assert normalize_key([b"Caf\xc3\xa9", "x"]) == "caf--x"
    assert normalize_key(b"caf\xe9") == "caf"


@pytest.mark.parametrize("value", [{"a": 1}, 42, None])
def test_normalize_key_rejects_non_sequences(value):
    with pytest.raises(TypeError):
        normalize_key(value)
