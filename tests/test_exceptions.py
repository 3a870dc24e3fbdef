"""Contracts of the textguard exception taxonomy."""
import pytest

from textguard import (CharacterLimitError, EncodingError,
                       IllegalCharactersError, escape_js, normalize_key)


@pytest.mark.parametrize("exc_class", [
    EncodingError, IllegalCharactersError, CharacterLimitError])
def test_all_errors_are_value_errors(exc_class):
    assert issubclass(exc_class, ValueError)


def test_character_limit_message_without_caller():
    err = CharacterLimitError(10, 5)
    assert str(err) == "The provided string is 10 characters long, exceeding the 5 limit."
    assert err.caller is None


def test_character_limit_message_names_caller():
    err = CharacterLimitError(10, 5, "normalize_path")
    assert "normalize_path" in str(err)
    assert "5 limit" in str(err)


def test_illegal_characters_attributes():
    with pytest.raises(IllegalCharactersError) as err:
        normalize_key("bad key!", throw_on_illegal=True)
    assert err.value.value == "bad key!"
    assert "underscores" in err.value.allowed


def test_encoding_error_is_chained():
    with pytest.raises(EncodingError) as err:
        escape_js({1, 2})
    assert isinstance(err.value.__cause__, TypeError)
    assert err.value.value_type is set
    assert "set" in str(err.value)
