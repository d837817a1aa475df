"""Tests for _types.py: UNDEFINED sentinel and the error taxonomy."""

from typing import Union

import pytest
from pydantic import TypeAdapter, ValidationError

from envguard._types import (
    UNDEFINED,
    ConfigDirectoryNotFoundError,
    ConfigError,
    ConfigPathNotDirectoryError,
    EnvError,
    EnvguardError,
    MissingRequiredError,
    UnparseableBooleanError,
    UnparseableDateError,
    UnparseableJSONError,
    UnparseableNumberError,
    UnsupportedKindError,
    ValidationFailedError,
    _Undefined,
)


def _pydantic_error(annotation, value) -> ValidationError:
    with pytest.raises(ValidationError) as exc_info:
        TypeAdapter(annotation).validate_python(value)
    return exc_info.value


class TestUndefined:
    def test_singleton(self):
        assert _Undefined() is UNDEFINED

    def test_falsy(self):
        assert not UNDEFINED

    def test_repr(self):
        assert repr(UNDEFINED) == "UNDEFINED"


class TestHierarchy:
    @pytest.mark.parametrize(
        "error_class",
        [
            MissingRequiredError,
            UnsupportedKindError,
            ValidationFailedError,
            UnparseableJSONError,
            UnparseableNumberError,
            UnparseableDateError,
            UnparseableBooleanError,
        ],
    )
    def test_env_errors(self, error_class):
        assert issubclass(error_class, EnvError)
        assert issubclass(error_class, EnvguardError)

    @pytest.mark.parametrize("error_class", [ConfigDirectoryNotFoundError, ConfigPathNotDirectoryError])
    def test_config_errors(self, error_class):
        assert issubclass(error_class, ConfigError)
        assert not issubclass(error_class, EnvError)


class TestMessages:
    @pytest.mark.parametrize(
        ("error", "message"),
        [
            (MissingRequiredError("PORT"), 'Required variable "PORT" is not set.'),
            (UnsupportedKindError("ID", "uuid"), 'Schema kind "uuid" for variable "ID" is not supported.'),
            (UnsupportedKindError("ID"), 'The schema kind for variable "ID" is undefined.'),
            (UnparseableJSONError("O"), 'The variable "O" could not be parsed as JSON'),
            (UnparseableNumberError("N"), 'The variable "N" could not be parsed as a number'),
            (UnparseableDateError("D"), 'The variable "D" could not be parsed as a date'),
            (UnparseableBooleanError("B"), 'The variable "B" could not be parsed as a boolean'),
            (ConfigDirectoryNotFoundError("/nope"), 'The path "/nope" could not be accessed'),
            (ConfigPathNotDirectoryError("/file"), 'The path "/file" is not a directory'),
        ],
    )
    def test_message(self, error, message):
        assert str(error) == message

    def test_variable_recorded(self):
        assert UnparseableDateError("WHEN").variable == "WHEN"

    def test_path_recorded(self):
        assert ConfigPathNotDirectoryError("/file").path == "/file"


class TestValidationFailedError:
    def test_without_messages(self):
        error = ValidationFailedError("X")
        assert str(error) == 'Validation failed for variable "X".'
        assert error.messages == ()

    def test_with_messages(self):
        error = ValidationFailedError("X", ["first", "second"])
        assert str(error) == 'Validation failed for variable "X": first, second'
        assert error.messages == ("first", "second")

    def test_from_pydantic_picks_value_from_source(self):
        source = ["1", "x", "3"]
        error = ValidationFailedError.from_pydantic("IDS", _pydantic_error(list[int], source), source)
        (message,) = error.messages
        assert message.startswith('"1" ')
        assert message.endswith("but got 'x'")

    def test_from_pydantic_root_error_has_no_path(self):
        error = ValidationFailedError.from_pydantic("FLAG", _pydantic_error(bool, "nah"), "nah")
        (message,) = error.messages
        assert not message.startswith('"')
        assert message.endswith("but got 'nah'")

    def test_from_pydantic_nested_path(self):
        source = {"db": {"port": "x"}}
        error = ValidationFailedError.from_pydantic(
            "CFG", _pydantic_error(dict[str, dict[str, int]], source), source
        )
        assert error.messages[0].startswith('"db.port" ')

    def test_from_pydantic_falls_back_to_reported_input(self):
        source = "abc"
        error = ValidationFailedError.from_pydantic(
            "N", _pydantic_error(Union[int, float], source), source
        )
        assert len(error.messages) == 2
        assert all(message.endswith("but got 'abc'") for message in error.messages)
