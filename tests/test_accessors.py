"""Tests for typed environment accessors."""

import os
from datetime import timedelta
from pathlib import Path
from unittest.mock import patch

import pytest

from envcascade import accessors
from envcascade.accessors import (
    get_env,
    get_env_bool,
    get_env_duration,
    get_env_float,
    get_env_int,
    get_env_nested,
    get_env_str,
    nested_key,
    parse_bool,
    parse_duration,
    parse_float,
    parse_int,
    register_converter,
)
from envcascade.parsers.structured import flatten_into


class TestGetEnv:
    """Base accessor behaviour."""

    def test_string_present(self):
        assert get_env("TEST_STRING", "default_value", {"TEST_STRING": "test_value"}) == "test_value"

    def test_absent_returns_default(self):
        assert get_env("NON_EXISTENT", "default_value", {}) == "default_value"

    def test_empty_returns_default(self):
        assert get_env("EMPTY_STRING", "default_value", {"EMPTY_STRING": ""}) == "default_value"

    def test_int(self):
        assert get_env("TEST_INT", 0, {"TEST_INT": "42"}) == 42

    def test_invalid_int_returns_default(self):
        assert get_env("INVALID_INT", 100, {"INVALID_INT": "not_a_number"}) == 100

    def test_negative_int(self):
        assert get_env("NEGATIVE_INT", 0, {"NEGATIVE_INT": "-10"}) == -10

    def test_bool(self):
        env = {"FLAG": "true", "OFF": "0", "BAD": "yes"}
        assert get_env("FLAG", False, env) is True
        assert get_env("OFF", True, env) is False
        assert get_env("BAD", True, env) is True

    def test_float(self):
        assert get_env("RATIO", 1.0, {"RATIO": "2.5e-3"}) == pytest.approx(0.0025)
        assert get_env("RATIO", 1.0, {"RATIO": "abc"}) == 1.0

    def test_duration(self):
        assert get_env("TIMEOUT", timedelta(seconds=30), {"TIMEOUT": "5m"}) == timedelta(minutes=5)
        assert get_env("TIMEOUT", timedelta(seconds=30), {"TIMEOUT": "5"}) == timedelta(seconds=30)

    def test_unknown_type_returns_default(self):
        default = [1, 2]
        assert get_env("LIST", default, {"LIST": "[3]"}) is default
        assert get_env("NONE", None, {"NONE": "value"}) is None

    def test_case_sensitive(self):
        assert get_env("db_host", "fallback", {"DB_HOST": "x"}) == "fallback"

    def test_reads_os_environ_by_default(self):
        with patch.dict(os.environ, {"ENVCASCADE_TEST_PORT": "1234"}):
            assert get_env("ENVCASCADE_TEST_PORT", 0) == 1234


class TestGetEnvNested:
    """Dot-notation access."""

    def test_translation(self):
        assert nested_key("db.host") == "DB_HOST"
        assert nested_key("app.http.port") == "APP_HTTP_PORT"
        assert nested_key("plain") == "PLAIN"

    def test_present(self):
        assert get_env_nested("db.host", "localhost", {"DB_HOST": "myhost"}) == "myhost"

    def test_absent(self):
        assert get_env_nested("db.host", "localhost", {}) == "localhost"

    def test_typed(self):
        assert get_env_nested("db.port", 5432, {"DB_PORT": "6543"}) == 6543

    def test_dotted_key_itself_not_consulted(self):
        assert get_env_nested("db.host", "localhost", {"db.host": "flattened"}) == "localhost"


class TestConvenienceWrappers:
    """Named accessors are get_env specialised to one type."""

    def test_wrappers(self):
        env = {
            "S": "text",
            "I": "7",
            "B": "T",
            "F": "0.5",
            "D": "1h30m",
        }
        assert get_env_str("S", "", env) == "text"
        assert get_env_int("I", 0, env) == 7
        assert get_env_bool("B", False, env) is True
        assert get_env_float("F", 0.0, env) == 0.5
        assert get_env_duration("D", timedelta(0), env) == timedelta(hours=1, minutes=30)

    def test_wrapper_defaults(self):
        assert get_env_int("MISSING", 3, {}) == 3
        assert get_env_duration("MISSING", timedelta(hours=1), {}) == timedelta(hours=1)


class TestParseBool:
    @pytest.mark.parametrize("text", ["1", "t", "T", "TRUE", "true", "True"])
    def test_true(self, text):
        assert parse_bool(text) is True

    @pytest.mark.parametrize("text", ["0", "f", "F", "FALSE", "false", "False"])
    def test_false(self, text):
        assert parse_bool(text) is False

    @pytest.mark.parametrize("text", ["yes", "no", "tRUE", " true", "2", ""])
    def test_invalid(self, text):
        with pytest.raises(ValueError):
            parse_bool(text)


class TestParseInt:
    @pytest.mark.parametrize("text,expected", [("42", 42), ("-10", -10), ("+5", 5), ("007", 7)])
    def test_valid(self, text, expected):
        assert parse_int(text) == expected

    @pytest.mark.parametrize("text", ["4.2", " 42", "1_000", "0x10", "", "-", "٣"])
    def test_invalid(self, text):
        with pytest.raises(ValueError):
            parse_int(text)


class TestParseFloat:
    @pytest.mark.parametrize("text,expected", [("3.14", 3.14), ("-2", -2.0), ("1e3", 1000.0)])
    def test_valid(self, text, expected):
        assert parse_float(text) == expected

    def test_special_values(self):
        assert parse_float("inf") == float("inf")
        assert parse_float("-Infinity") == float("-inf")
        assert parse_float("NaN") != parse_float("NaN")

    def test_overflow_falls_back_to_default(self):
        assert get_env("RATIO", 1.0, {"RATIO": "1e400"}) == 1.0
        assert get_env("RATIO", 1.0, {"RATIO": "+Inf"}) == float("inf")

    @pytest.mark.parametrize("text", [" 1.0", "1_0.0", "abc", "1.0.0", "1e400", "-1e400"])
    def test_invalid(self, text):
        with pytest.raises(ValueError):
            parse_float(text)


class TestParseDuration:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("0", timedelta(0)),
            ("-0", timedelta(0)),
            ("30s", timedelta(seconds=30)),
            ("5m", timedelta(minutes=5)),
            ("1h", timedelta(hours=1)),
            ("1h30m", timedelta(hours=1, minutes=30)),
            ("1.5h", timedelta(minutes=90)),
            (".5s", timedelta(milliseconds=500)),
            ("300ms", timedelta(milliseconds=300)),
            ("10us", timedelta(microseconds=10)),
            ("10µs", timedelta(microseconds=10)),
            ("1500ns", timedelta(microseconds=1)),
            ("-1m", timedelta(minutes=-1)),
            ("+2s", timedelta(seconds=2)),
            ("2562047h", timedelta(hours=2562047)),
        ],
    )
    def test_valid(self, text, expected):
        assert parse_duration(text) == expected

    @pytest.mark.parametrize(
        "text", ["", "5", "h", "1x", "1d", "1.h.", "-", "1h 30m", "3000000h", "1e3s"]
    )
    def test_invalid(self, text):
        with pytest.raises(ValueError):
            parse_duration(text)


class TestRegisterConverter:
    @pytest.fixture(autouse=True)
    def _isolated_registry(self, monkeypatch):
        monkeypatch.setattr(accessors, "_CONVERTERS", dict(accessors._CONVERTERS))

    def test_custom_type(self):
        register_converter(Path, Path)
        assert get_env("DATA_DIR", Path("/tmp"), {"DATA_DIR": "/srv/data"}) == Path("/srv/data")

    def test_converter_errors_fall_back(self):
        class Port(int):
            pass

        def to_port(text: str) -> Port:
            value = Port(text)
            if not 0 < value < 65536:
                raise ValueError(text)
            return value

        register_converter(Port, to_port)
        assert get_env("PORT", Port(80), {"PORT": "70000"}) == 80
        assert get_env("PORT", Port(80), {"PORT": "8080"}) == 8080


class TestFlattenRoundTrip:
    """Values written by the flattener read back to the original scalar."""

    @pytest.mark.parametrize(
        "value",
        [True, False, 0, 42, -17, 2**40, 0.1, 5432.0, -3.75, 1e-7, 1.7976931348623157e308, "text"],
    )
    def test_round_trip(self, value):
        environ = {}
        flatten_into({"leaf": value}, environ)

        default = type(value)()
        assert get_env("leaf", default, environ) == value
