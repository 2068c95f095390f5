"""
Tests de lectura defensiva de registros y formato de valores
"""

from centymo.shared.records import (
    format_amount, format_price, format_quantity, is_explicit_false, parse_float,
    record_bool, record_float, record_int, record_str, value_str
)


class TestRecordReaders:
    """Lectura de campos sin esquema"""

    def test_record_str_missing_and_none(self):
        assert record_str({}, "name") == ""
        assert record_str(None, "name") == ""
        assert record_str({"name": None}, "name") == ""

    def test_record_str_formats_whole_floats_as_ints(self):
        assert record_str({"qty": 10.0}, "qty") == "10"
        assert record_str({"qty": 2.5}, "qty") == "2.5"

    def test_value_str_bool(self):
        assert value_str(True) == "true"
        assert value_str(False) == "false"

    def test_parse_float_is_lenient(self):
        assert parse_float("12.5") == 12.5
        assert parse_float(" 3 ") == 3.0
        assert parse_float("abc") == 0.0
        assert parse_float(None) == 0.0
        assert parse_float(True) == 0.0

    def test_record_float_and_int(self):
        record = {"a": "7", "b": 3.9, "c": "x"}
        assert record_float(record, "a") == 7.0
        assert record_int(record, "b") == 3
        assert record_int(record, "c") == 0
        assert record_int(record, "missing") == 0

    def test_record_bool_accepts_strings(self):
        assert record_bool({"active": True}, "active") is True
        assert record_bool({"active": "t"}, "active") is True
        assert record_bool({"active": "TRUE"}, "active") is True
        assert record_bool({"active": "no"}, "active") is False
        assert record_bool({}, "active") is False

    def test_is_explicit_false(self):
        assert is_explicit_false({"active": False}, "active") is True
        assert is_explicit_false({"active": None}, "active") is False
        assert is_explicit_false({}, "active") is False


class TestFormatting:
    """Formato de cantidades y precios"""

    def test_format_quantity(self):
        assert format_quantity(7.0) == "7"
        assert format_quantity(2.5) == "2.50"

    def test_format_amount(self):
        assert format_amount(1500) == "1500.00"

    def test_format_price(self):
        assert format_price("PHP", 1234.5) == "PHP 1,234.50"
        assert format_price("", 10) == "10.00"
