import datetime
from collections import OrderedDict

import pytest
from resp3kit.decoder import decode
from resp3kit.dictionary import Map
from resp3kit.encoder import encode, encode_bytes
from resp3kit.errors import ERR_UNSUPPORTED_TYPE, UnsupportedTypeError
from resp3kit.floats import Float
from resp3kit.integers import Integer
from resp3kit.null import Null
from resp3kit.sequences import Array
from resp3kit.string import (
    BlobError,
    BulkString,
    SimpleError,
    SimpleString,
    VerbatimString,
)
from resp3kit.value import to_native


class TestEncodeScalars:
    """Test the per-type rules for native scalars."""

    @pytest.mark.parametrize("value,expected", [
        ("hello", "+hello\r\n"),
        ("", "+\r\n"),
        ("This is a long string of length > 16",
         "$36\r\nThis is a long string of length > 16\r\n"),
        (123, ":123\r\n"),
        (-5, ":-5\r\n"),
        (0, ":0\r\n"),
        (2**64 - 1, ":18446744073709551615\r\n"),
        (-(2**63), ":-9223372036854775808\r\n"),
        (3.14, ",3.140000\r\n"),
        (1.0, ",1.000000\r\n"),
        (-0.5, ",-0.500000\r\n"),
        (float("inf"), ",inf\r\n"),
        (float("-inf"), ",-inf\r\n"),
        (True, "#t\r\n"),
        (False, "#f\r\n"),
        (None, "_\r\n"),
        (ValueError("an error"), "-an error\r\n"),
    ])
    def test_scalar(self, value, expected):
        assert encode(value) == expected

    def test_nan(self):
        assert encode(float("nan")) == ",nan\r\n"

    @pytest.mark.parametrize("text,expected_prefix", [
        ("a" * 16, "+"),
        ("a" * 17, "$17\r\n"),
    ])
    def test_string_threshold(self, text, expected_prefix):
        assert encode(text).startswith(expected_prefix)

    def test_threshold_counts_utf8_bytes(self):
        """Nine two-byte characters are 18 bytes, over the threshold."""
        text = "é" * 9
        assert encode(text) == f"$18\r\n{text}\r\n"

    def test_bulk_length_is_byte_length(self):
        text = "🚀 launch sequence go"
        size = len(text.encode("utf-8"))
        assert encode(text) == f"${size}\r\n{text}\r\n"

    def test_bytes_are_bulk_strings(self):
        assert encode_bytes(b"\x00\xff") == b"$2\r\n\x00\xff\r\n"
        assert encode(b"ok") == "$2\r\nok\r\n"

    def test_encode_bytes_is_utf8(self):
        assert encode_bytes("héllo") == "+héllo\r\n".encode("utf-8")

    def test_datetime_as_epoch_millis(self):
        moment = datetime.datetime.fromtimestamp(1620832335, tz=datetime.timezone.utc)
        assert encode(moment) == ":1620832335000\r\n"

    def test_naive_datetime_is_utc(self):
        moment = datetime.datetime(2021, 5, 12, 15, 12, 15, 123456)
        assert encode(moment) == ":1620832335123\r\n"

    def test_aware_datetime_offset(self):
        tz = datetime.timezone(datetime.timedelta(hours=2))
        moment = datetime.datetime(2021, 5, 12, 17, 12, 15, tzinfo=tz)
        assert encode(moment) == ":1620832335000\r\n"


class TestEncodeValues:
    """Values keep their own framing."""

    @pytest.mark.parametrize("value,expected", [
        (SimpleString("x" * 30), "+" + "x" * 30 + "\r\n"),
        (BulkString("hi"), "$2\r\nhi\r\n"),
        (BulkString(""), "$0\r\n\r\n"),
        (VerbatimString("txt:hi"), "=6\r\ntxt:hi\r\n"),
        (VerbatimString(""), "=0\r\n"),
        (SimpleError("ERR bad"), "-ERR bad\r\n"),
        (BlobError("oops"), "!4\r\noops\r\n"),
        (Integer(7), ":7\r\n"),
        (Float(2.5), ",2.500000\r\n"),
        (Null, "_\r\n"),
        (Array(), "*0\r\n"),
        (Array([Integer(1), BulkString("b")]), "*2\r\n:1\r\n$1\r\nb\r\n"),
        (Map(), "%0\r\n"),
        (Map([(Integer(1), SimpleString("one"))]), "%2\r\n:1\r\n+one\r\n"),
    ])
    def test_value(self, value, expected):
        assert encode(value) == expected

    def test_native_items_inside_values(self):
        """Native objects inside a hand-built Array use the general rules."""
        assert encode(Array([1, "x"])) == "*2\r\n:1\r\n+x\r\n"


class TestEncodeSequences:
    """Test array encoding, including the heterogeneous string rule."""

    @pytest.mark.parametrize("value,expected", [
        ([1, 2, 3], "*3\r\n:1\r\n:2\r\n:3\r\n"),
        (["a", "b", "c"], "*3\r\n+a\r\n+b\r\n+c\r\n"),
        (["a", 123, True], "*3\r\n+a\r\n:123\r\n#t\r\n"),
        ([True, False, True], "*3\r\n#t\r\n#f\r\n#t\r\n"),
        ([1.23, 4.56, 7.89], "*3\r\n,1.230000\r\n,4.560000\r\n,7.890000\r\n"),
        ([True, None, "test"], "*3\r\n#t\r\n_\r\n+test\r\n"),
        ((1, 2), "*2\r\n:1\r\n:2\r\n"),
        ([], "*0\r\n"),
        ([[1, 2], ["x"]], "*2\r\n*2\r\n:1\r\n:2\r\n*1\r\n+x\r\n"),
    ])
    def test_sequence(self, value, expected):
        assert encode(value) == expected

    def test_mixed_sequence_uses_twelve_byte_threshold(self):
        """A 13-byte string in a mixed sequence is a Bulk String."""
        text = "a" * 13
        assert encode([text, 1]) == f"*2\r\n$13\r\n{text}\r\n:1\r\n"

    def test_mixed_sequence_twelve_bytes_is_simple(self):
        text = "a" * 12
        assert encode([text, 1]) == f"*2\r\n+{text}\r\n:1\r\n"

    def test_same_string_alone_is_simple(self):
        assert encode("a" * 13) == "+" + "a" * 13 + "\r\n"

    def test_homogeneous_sequence_uses_general_threshold(self):
        text = "a" * 13
        assert encode([text, "b"]) == f"*2\r\n+{text}\r\n+b\r\n"

    def test_mixed_sequence_long_string(self):
        text = "x" * 20
        assert encode([1, text]) == f"*2\r\n:1\r\n$20\r\n{text}\r\n"

    def test_unsupported_element(self):
        with pytest.raises(UnsupportedTypeError):
            encode([1, object()])


class TestEncodeMappings:
    """Test map encoding."""

    @pytest.mark.parametrize("value,expected", [
        ({"a": 1, "b": 2}, "%4\r\n+a\r\n:1\r\n+b\r\n:2\r\n"),
        ({"a": 1, 2: "b"}, "%4\r\n+a\r\n:1\r\n:2\r\n+b\r\n"),
        ({"a": 1, 2: True, 3.14: "pi"},
         "%6\r\n+a\r\n:1\r\n:2\r\n#t\r\n,3.140000\r\n+pi\r\n"),
        ({}, "%0\r\n"),
        (OrderedDict([("z", None), ("y", [1])]), "%4\r\n+z\r\n_\r\n+y\r\n*1\r\n:1\r\n"),
    ])
    def test_mapping(self, value, expected):
        assert encode(value) == expected

    def test_long_string_keys_stay_simple(self):
        key = "k" * 20
        assert encode({key: 1}) == f"%2\r\n+{key}\r\n:1\r\n"

    def test_long_string_values_are_bulk(self):
        value = "v" * 20
        assert encode({"k": value}) == f"%2\r\n+k\r\n$20\r\n{value}\r\n"

    def test_nested_mapping(self):
        value = {"age": 30, "isStudent": False, "grades": {"math": 95, "science": 90}}
        expected = (
            "%6\r\n+age\r\n:30\r\n+isStudent\r\n#f\r\n"
            "+grades\r\n%4\r\n+math\r\n:95\r\n+science\r\n:90\r\n"
        )
        assert encode(value) == expected

    def test_tuple_key(self):
        assert encode({(1, 2): "p"}) == "%2\r\n*2\r\n:1\r\n:2\r\n+p\r\n"


class TestUnsupportedTypes:
    """Inputs with no rule fail with a typed error naming the type."""

    @pytest.mark.parametrize("value,type_name", [
        (object(), "object"),
        ({1, 2}, "set"),
        (1 + 2j, "complex"),
        (datetime.date(2021, 5, 12), "date"),
    ])
    def test_unsupported(self, value, type_name):
        with pytest.raises(UnsupportedTypeError) as exc_info:
            encode(value)
        assert type_name in str(exc_info.value)
        assert exc_info.value.code == ERR_UNSUPPORTED_TYPE

    def test_is_type_error(self):
        with pytest.raises(TypeError):
            encode(object())

    def test_integer_too_large(self):
        with pytest.raises(UnsupportedTypeError):
            encode(2**64)


class TestRoundTrip:
    """decode(encode(v)) reproduces v."""

    @pytest.mark.parametrize("value", [
        "hello",
        "x" * 40,
        "",
        42,
        -7,
        3.14,
        42.04,
        True,
        False,
        None,
    ])
    def test_scalar_roundtrip(self, value):
        assert decode(encode_bytes(value)) == value

    def test_float_is_fixed_point_on_the_wire(self):
        """The wire text is fixed-point; the parsed value is still 3.14."""
        assert encode(3.14) == ",3.140000\r\n"
        assert decode(encode_bytes(3.14)) == 3.14

    def test_float_precision_beyond_six_digits_is_lost(self):
        assert decode(encode_bytes(1.23456789)) == 1.234568

    def test_error_roundtrip(self):
        result = decode(encode_bytes(RuntimeError("some error")))
        assert result == SimpleError("some error")

    @pytest.mark.parametrize("value", [
        ["msg", 123],
        [True, None, "test"],
        {"a": [1, 2, {"b": "c" * 30}]},
        {1: "one", 2: "two"},
    ])
    def test_container_roundtrip(self, value):
        assert to_native(decode(encode_bytes(value))) == value
