"""Tests for common.cli_helpers module."""

import argparse
from datetime import date

import pytest

from common.cli_helpers import parse_date, positive_int


class TestParseDate:
    def test_valid_date(self) -> None:
        assert parse_date("2024-03-20") == date(2024, 3, 20)

    def test_invalid_date_mentions_field(self) -> None:
        with pytest.raises(argparse.ArgumentTypeError, match="start-date"):
            parse_date("20/03/2024", "start-date")


class TestPositiveInt:
    def test_accepts_positive(self) -> None:
        assert positive_int("5") == 5

    @pytest.mark.parametrize("value", ["0", "-3", "ten"])
    def test_rejects_non_positive(self, value: str) -> None:
        with pytest.raises(argparse.ArgumentTypeError):
            positive_int(value)
