"""
Tests for order number normalization.
"""

import pytest

from tracklink.utils.order_number import display_order_number, normalize_order_number


class TestNormalizeOrderNumber:
    """Tests for normalize_order_number function."""

    @pytest.mark.parametrize("raw", ["#1001", "1001", "1001.1", "#1001.2", "#1001.10"])
    def test_variants_share_one_key(self, raw: str):
        assert normalize_order_number(raw) == "1001"

    def test_empty_string(self):
        assert normalize_order_number("") == ""

    def test_hash_only(self):
        assert normalize_order_number("#") == ""

    def test_non_numeric_label_kept(self):
        assert normalize_order_number("#SO-1001") == "SO-1001"

    def test_case_preserved(self):
        assert normalize_order_number("#Abc1001") == "Abc1001"

    def test_whitespace_not_trimmed(self):
        assert normalize_order_number(" 1001") == " 1001"

    def test_hash_in_middle_kept(self):
        assert normalize_order_number("10#01") == "10#01"

    def test_non_numeric_suffix_kept(self):
        assert normalize_order_number("1001.a") == "1001.a"

    def test_dot_without_digits_kept(self):
        assert normalize_order_number("1001.") == "1001."

    def test_inner_dot_kept(self):
        assert normalize_order_number("10.01-A") == "10.01-A"

    @pytest.mark.parametrize(
        "raw",
        ["#1001", "1001.1", "##1001", "1001.1.2", "#.1", "", "#", "A.1#", "#1001.x.2"],
    )
    def test_idempotent(self, raw: str):
        once = normalize_order_number(raw)
        assert normalize_order_number(once) == once

    def test_deterministic(self):
        assert normalize_order_number("#1001.3") == normalize_order_number("#1001.3")


class TestDisplayOrderNumber:
    """Tests for display_order_number function."""

    @pytest.mark.parametrize("raw", ["1001", "#1001", "#1001.1", "1001.4"])
    def test_single_leading_hash(self, raw: str):
        assert display_order_number(raw) == "#1001"
