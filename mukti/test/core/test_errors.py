"""Tests for mukti.core.errors module."""

from mukti.core.errors import ErrorCode


def test_exit_code_values_are_stable() -> None:
    assert ErrorCode.OK == 0
    assert ErrorCode.USER_ERROR == 1
    assert ErrorCode.IO_ERROR == 5


def test_str_is_human_readable() -> None:
    assert str(ErrorCode.IO_ERROR) == "io error"

