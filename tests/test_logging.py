"""
Tests de los formatters de logging y del request id
"""

import json
import logging

import pytest

from centymo.core.logging_config import (
    HumanReadableFormatter,
    StructuredFormatter,
    clear_request_id,
    set_request_id,
)


def make_record(message="Sale 1 completed"):
    return logging.LogRecord(
        name="centymo.modules.sales.service",
        level=logging.INFO,
        pathname=__file__,
        lineno=10,
        msg=message,
        args=(),
        exc_info=None,
    )


@pytest.fixture(autouse=True)
def reset_request_id():
    yield
    clear_request_id()


class TestStructuredFormatter:
    """Salida JSON"""

    def test_fields(self):
        data = json.loads(StructuredFormatter().format(make_record()))

        assert data["level"] == "INFO"
        assert data["logger"] == "centymo.modules.sales.service"
        assert data["message"] == "Sale 1 completed"
        assert "request_id" not in data

    def test_includes_request_id(self):
        set_request_id("req-12345678")

        data = json.loads(StructuredFormatter().format(make_record()))

        assert data["request_id"] == "req-12345678"


class TestHumanReadableFormatter:

    def test_single_line_with_request_id(self):
        set_request_id("abcdef1234567890")

        line = HumanReadableFormatter().format(make_record())

        assert "[centymo.modules.sales.service]" in line
        assert "[req:abcdef12]" in line
        assert line.endswith("Sale 1 completed")

    def test_without_request_id(self):
        line = HumanReadableFormatter().format(make_record())
        assert "[req:" not in line


class TestRequestId:

    def test_generates_when_missing(self):
        assert len(set_request_id()) == 36

    def test_keeps_given_value(self):
        assert set_request_id("given") == "given"
